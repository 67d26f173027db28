"""Reading PNG images as 8-bit RGBA pixel data, and reading text files."""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import Union

from PIL import Image

_log = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class PngData:
    """Decoded image: rows of ``width * channels`` bytes, top row first."""

    width: int
    height: int
    channels: int
    pixels: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * self.channels
        if len(self.pixels) != expected:
            raise ValueError(
                f"pixel data holds {len(self.pixels)} bytes, expected {expected}"
            )

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * self.channels


def _to_rgba(img: Image.Image) -> Image.Image:
    if img.mode.startswith("I;16"):
        img = img.convert("I")
    if img.mode == "I":
        img = img.point(lambda v: v * (1 / 257)).convert("L")
    return img.convert("RGBA")


def read_image_data(path: PathLike) -> PngData:
    """Decode a PNG file into RGBA bytes.

    Palette, grey and 16-bit images are expanded to 8-bit RGBA; images without
    alpha get an opaque alpha channel. Raises OSError when the file cannot be
    read and ValueError when it is not a valid PNG.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError:
        _log.error("Failed to open file: '%s'", path)
        raise

    if raw[:8] != PNG_SIGNATURE:
        _log.error("Header signature is not correct")
        raise ValueError(f"'{path}' is not a PNG file")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            rgba = _to_rgba(img)
    except (OSError, SyntaxError) as exc:
        _log.error("Failed to decode PNG '%s': %s", path, exc)
        raise ValueError(f"'{path}' could not be decoded: {exc}") from exc

    width, height = rgba.size
    return PngData(width, height, 4, rgba.tobytes())


def read_file(path: PathLike) -> str:
    """Return the whole content of a UTF-8 text file, line endings untouched."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except OSError:
        _log.error("Failed to open file: '%s'", path)
        raise