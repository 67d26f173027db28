"""Image data paired with a texture handle and texel coordinate helpers."""

from __future__ import annotations

import logging
import math

from mizu.fileio import PathLike, PngData, read_image_data

_log = logging.getLogger(__name__)


class Texture:
    """A loaded image and the id of the texture it was uploaded to."""

    def __init__(self, data: PngData, texture_id: int = 0) -> None:
        self._data = data
        self._id = texture_id
        self._px_x = 1.0 / data.width if data.width else math.inf
        self._px_y = 1.0 / data.height if data.height else math.inf

    @classmethod
    def load(cls, path: PathLike, texture_id: int = 0) -> "Texture":
        """Load from a PNG file; an unreadable file gives an empty texture."""
        try:
            data = read_image_data(path)
        except (OSError, ValueError) as exc:
            _log.error("Failed to load texture '%s': %s", path, exc)
            data = PngData(0, 0, 0)
        return cls(data, texture_id)

    @property
    def data(self) -> PngData:
        return self._data

    def id(self) -> int:
        return self._id

    def width(self) -> float:
        return float(self._data.width)

    def height(self) -> float:
        return float(self._data.height)

    def s(self, x: float) -> float:
        """Horizontal pixel position as a normalised texture coordinate."""
        return x * self._px_x

    def t(self, y: float) -> float:
        """Vertical pixel position as a normalised texture coordinate."""
        return y * self._px_y