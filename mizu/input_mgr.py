"""Keyboard and mouse state tracked across frames."""

from __future__ import annotations

import functools
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Hashable

from mizu.enum_utils import is_flag_set

ModState = Callable[[], int]


@dataclass(frozen=True)
class _ButtonState:
    timestamp: int = 0
    pressed: bool = False
    mods: int = 0


def _no_mods() -> int:
    return 0


class InputMgr:
    """Collects input events and answers per-frame questions about them.

    Events are queued when reported and applied by ``update``, which first
    remembers the previous frame's state. Call ``update`` once per frame.
    ``mod_state`` returns the modifiers held right now; it is read when mouse
    button events are applied.
    """

    def __init__(self, mod_state: ModState = _no_mods) -> None:
        self._mod_state = mod_state
        self._pending: Deque[Callable[[], None]] = deque()
        self._key_state: Dict[Hashable, _ButtonState] = {}
        self._prev_key_state: Dict[Hashable, _ButtonState] = {}
        self._button_state: Dict[Hashable, _ButtonState] = {}
        self._prev_button_state: Dict[Hashable, _ButtonState] = {}
        self._mouse_pos = [0.0, 0.0]
        self._prev_mouse_pos = [0.0, 0.0]
        self._mouse_relative = [0.0, 0.0]
        self._mouse_scroll = [0.0, 0.0]

    @staticmethod
    def _down(state, key, mods) -> bool:
        cur = state.get(key)
        return cur is not None and cur.pressed and is_flag_set(cur.mods, mods)

    @staticmethod
    def _pressed(state, prev_state, key, mods) -> bool:
        cur = state.get(key)
        if cur is None:
            return False
        held = cur.pressed and is_flag_set(cur.mods, mods)
        prev = prev_state.get(key)
        return held if prev is None else held and not prev.pressed

    @staticmethod
    def _released(state, prev_state, key, mods) -> bool:
        cur = state.get(key)
        prev = prev_state.get(key)
        if cur is None or prev is None:
            return False
        return not cur.pressed and is_flag_set(prev.mods, mods) and prev.pressed

    def down(self, key: Hashable, mods: int = 0) -> bool:
        """Key is held with at least ``mods``."""
        return self._down(self._key_state, key, mods)

    def pressed(self, key: Hashable, mods: int = 0) -> bool:
        """Key went down this frame."""
        return self._pressed(self._key_state, self._prev_key_state, key, mods)

    def released(self, key: Hashable, mods: int = 0) -> bool:
        """Key went up this frame."""
        return self._released(self._key_state, self._prev_key_state, key, mods)

    def button_down(self, button: Hashable, mods: int = 0) -> bool:
        return self._down(self._button_state, button, mods)

    def button_pressed(self, button: Hashable, mods: int = 0) -> bool:
        return self._pressed(self._button_state, self._prev_button_state, button, mods)

    def button_released(self, button: Hashable, mods: int = 0) -> bool:
        return self._released(self._button_state, self._prev_button_state, button, mods)

    def mouse_x(self) -> float:
        return self._mouse_pos[0]

    def mouse_y(self) -> float:
        return self._mouse_pos[1]

    def mouse_px(self) -> float:
        return self._prev_mouse_pos[0]

    def mouse_py(self) -> float:
        return self._prev_mouse_pos[1]

    def mouse_dx(self) -> float:
        return self._mouse_relative[0]

    def mouse_dy(self) -> float:
        return self._mouse_relative[1]

    def mouse_scroll_x(self) -> float:
        return self._mouse_scroll[0]

    def mouse_scroll_y(self) -> float:
        return self._mouse_scroll[1]

    def update(self, dt: float = 0.0) -> None:
        """Start a new frame: remember the old state, then apply queued events."""
        self._prev_key_state = dict(self._key_state)
        self._prev_button_state = dict(self._button_state)
        self._prev_mouse_pos = list(self._mouse_pos)
        self._mouse_relative = [0.0, 0.0]
        self._mouse_scroll = [0.0, 0.0]
        while self._pending:
            self._pending.popleft()()

    def key_down(self, timestamp: int, key: Hashable, mods: int = 0) -> None:
        self._pending.append(functools.partial(self._set_key, timestamp, key, True, mods))

    def key_up(self, timestamp: int, key: Hashable, mods: int = 0) -> None:
        self._pending.append(functools.partial(self._set_key, timestamp, key, False, mods))

    def mouse_motion(self, timestamp: int, x: float, y: float, dx: float, dy: float) -> None:
        self._pending.append(functools.partial(self._apply_motion, x, y, dx, dy))

    def mouse_button_down(self, timestamp: int, button: Hashable, x: float, y: float) -> None:
        self._pending.append(functools.partial(self._set_button, timestamp, button, True))

    def mouse_button_up(self, timestamp: int, button: Hashable, x: float, y: float) -> None:
        self._pending.append(functools.partial(self._set_button, timestamp, button, False))

    def mouse_wheel(
        self, timestamp: int, natural: bool, x: float, y: float, mouse_x: float, mouse_y: float
    ) -> None:
        self._pending.append(functools.partial(self._apply_wheel, x, y))

    def _set_key(self, timestamp: int, key: Hashable, pressed: bool, mods: int) -> None:
        self._key_state[key] = _ButtonState(timestamp, pressed, mods)

    def _set_button(self, timestamp: int, button: Hashable, pressed: bool) -> None:
        self._button_state[button] = _ButtonState(timestamp, pressed, self._mod_state())

    def _apply_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        self._mouse_pos = [x, y]
        self._mouse_relative[0] += dx
        self._mouse_relative[1] += dy

    def _apply_wheel(self, x: float, y: float) -> None:
        self._mouse_scroll[0] += x
        self._mouse_scroll[1] += y