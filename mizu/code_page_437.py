"""Bitmap text drawn from a 16-column code page 437 glyph sheet."""

from __future__ import annotations

from typing import Any, Tuple, Union

from mizu.color import Rgba, rgb

Vec2 = Tuple[float, float]
Text = Union[str, bytes]

_GLYPHS_PER_ROW = 16
_CR = 0x0D
_LF = 0x0A


def _codes(text: Text) -> bytes:
    return text if isinstance(text, bytes) else text.encode("cp437")


class CodePage437:
    """Monospaced font whose glyph for code ``c`` sits at column ``c % 16``
    and row ``c // 16 - row_skip`` of the texture."""

    def __init__(
        self, g2d: Any, texture: Any, char_size: Tuple[int, int], row_skip: int = 0
    ) -> None:
        self._g2d = g2d
        self._tex = texture
        self._char_size = (char_size[0], char_size[1])
        self._row_skip = row_skip

    def char_w(self) -> int:
        return self._char_size[0]

    def char_h(self) -> int:
        return self._char_size[1]

    def calculate_size(self, text: Text, scale: float = 1.0) -> Vec2:
        """Width of the longest line and total height of the text."""
        codes = _codes(text)
        if not codes:
            return (0.0, 0.0)
        w = self._char_size[0] * scale
        h = self._char_size[1] * scale
        width = height = line = 0.0
        for c in codes:
            if c == _CR:
                continue
            if c == _LF:
                width = max(width, line)
                height += h
                line = 0.0
                continue
            if height == 0.0:
                height += h
            line += w
        return (max(width, line), height)

    def draw(
        self, text: Text, pos: Vec2, scale: float = 1.0, color: Rgba = rgb(0xFFFFFF)
    ) -> None:
        cw, ch = self._char_size
        x, y = pos
        for c in _codes(text):
            if c == _CR:
                continue
            if c == _LF:
                x = pos[0]
                y += ch * scale
                continue
            region = (
                cw * (c % _GLYPHS_PER_ROW),
                ch * (c // _GLYPHS_PER_ROW - self._row_skip),
                cw,
                ch,
            )
            self._g2d.texture(
                self._tex, (x, y), (cw * scale, ch * scale), region, (0.0, 0.0, 0.0), color
            )
            x += cw * scale