from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image
from tinycss2 import color4

from .errors import ConfigLookupError


RGBA = Tuple[int, int, int, int]

# Recommended edge length for the source artwork
RECOMMENDED_SOURCE_SIZE = 1240


@dataclass(frozen=True)
class CanonicalImage:
    """Immutable RGBA8 pixel buffer, row-major, 4 bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"RGBA buffer for {self.width}x{self.height} must be {expected} bytes, got {len(self.pixels)}"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @classmethod
    def from_pil(cls, img: Image.Image) -> "CanonicalImage":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        w, h = img.size
        return cls(width=w, height=h, pixels=img.tobytes())

    def to_pil(self) -> Image.Image:
        # frombytes copies, so the returned image never aliases self.pixels
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)

    def as_array(self) -> np.ndarray:
        """Return a writable (height, width, 4) uint8 copy of the pixels."""
        arr = np.frombuffer(self.pixels, dtype=np.uint8)
        return arr.reshape((self.height, self.width, 4)).copy()


def parse_color(value: str) -> RGBA:
    """Parse a CSS Color Module Level 4 string to RGBA8.

    Accepts hex, named colours, `transparent`, rgb()/hsl()/hwb() in comma or
    space syntax with an optional `/ alpha`, and the lab/lch/color() spaces.
    """
    color = color4.parse_color(value.strip()) if isinstance(value, str) else None
    if not isinstance(color, color4.Color):
        # None for bad syntax, a string for currentColor
        raise ConfigLookupError(f"failed to parse iOS color {value!r}")
    *rgb, alpha = color.to("srgb")
    channels = [0.0 if c is None else min(max(float(c), 0.0), 1.0) for c in (*rgb, alpha)]
    return tuple(round(c * 255) for c in channels)  # type: ignore[return-value]
