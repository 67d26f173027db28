"""Naming and logging of OpenGL debug output messages."""

from __future__ import annotations

import enum
import logging
from typing import Optional, Union

_log = logging.getLogger(__name__)

_PREFIX = "GL_DEBUG_"
_UNKNOWN = "?"


class DebugSource(enum.IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class DebugType(enum.IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268
    PUSH_GROUP = 0x8269
    POP_GROUP = 0x826A


class DebugSeverity(enum.IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


_SEVERITY_LEVEL = {
    DebugSeverity.HIGH: logging.ERROR,
    DebugSeverity.MEDIUM: logging.WARNING,
    DebugSeverity.LOW: logging.DEBUG,
}

_Code = Union[int, enum.IntEnum]


def _gl_name(enum_cls: type[enum.IntEnum], group: str, value: _Code) -> str:
    try:
        member = enum_cls(int(value))
    except ValueError:
        return _UNKNOWN
    return f"{_PREFIX}{group}_{member.name}"


def source_name(source: _Code) -> str:
    """The GL constant name of a debug source, or "?" if it is not one."""
    return _gl_name(DebugSource, "SOURCE", source)


def type_name(kind: _Code) -> str:
    """The GL constant name of a debug message type, or "?" if it is not one."""
    return _gl_name(DebugType, "TYPE", kind)


def _short(name: str) -> str:
    return name[len(_PREFIX):] if name.startswith(_PREFIX) else name


def format_debug_message(source: _Code, kind: _Code, message_id: int, message: str) -> str:
    """The log line for one debug message."""
    return (
        f"OpenGL: source={_short(source_name(source))} "
        f"type={_short(type_name(kind))} id={message_id} msg={message}"
    )


def gl_debug_message_callback(
    source: _Code, kind: _Code, message_id: int, severity: _Code, message: str
) -> Optional[str]:
    """Log a debug message at a level matching its severity.

    Notifications and unknown severities are not logged. Returns the logged
    line, or None when nothing was logged.
    """
    try:
        level = _SEVERITY_LEVEL.get(DebugSeverity(int(severity)))
    except ValueError:
        level = None
    if level is None:
        return None
    line = format_debug_message(source, kind, message_id, message)
    _log.log(level, "%s", line)
    return line