"""Process memory usage and platform detection."""

from __future__ import annotations

import logging
import os
import sys

_log = logging.getLogger(__name__)

_MIB = 1_048_576
_STATM = "/proc/self/statm"
_UNIX_PREFIXES = ("freebsd", "openbsd", "netbsd", "dragonfly", "sunos", "aix", "cygwin")


def memusage() -> float:
    """Resident memory of this process in MiB, or 0.0 when it cannot be read."""
    try:
        with open(_STATM) as f:
            fields = f.read().split()
        rss = int(fields[1])
        page_size = os.sysconf("SC_PAGESIZE")
    except (OSError, IndexError, ValueError, AttributeError):
        return 0.0
    return rss * page_size / _MIB


def detected_platforms() -> list[str]:
    """Names of the platforms this interpreter runs on, most general first."""
    plat = sys.platform
    if plat in ("win32", "cygwin") and plat == "win32":
        return ["windows", "windows64" if sys.maxsize > 2**32 else "windows32"]
    if plat == "ios":
        return ["apple_ios"]
    if plat == "darwin":
        return ["apple"]
    if plat.startswith("linux"):
        return ["linux"]
    if plat.startswith(_UNIX_PREFIXES):
        return ["unix"]
    if os.name == "posix":
        return ["posix"]
    raise RuntimeError(f"unknown platform: {plat}")


def log_platform() -> str:
    """Log and return the detected platforms."""
    message = f"Platform(s) detected: {', '.join(detected_platforms())}"
    _log.debug(message)
    return message