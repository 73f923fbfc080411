from __future__ import annotations

import pytest
from PIL import Image, ImageDraw

from iconsmith.utils import CanonicalImage


def draw_icon(size: int = 256) -> Image.Image:
    """Transparent canvas with an opaque circle and a half-transparent bar."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    d.ellipse((size // 8, size // 8, size * 7 // 8, size * 7 // 8), fill=(32, 178, 170, 255))
    d.rectangle((size // 4, size * 2 // 5, size * 3 // 4, size * 3 // 5), fill=(30, 144, 255, 128))
    return img


@pytest.fixture
def icon_image() -> CanonicalImage:
    return CanonicalImage.from_pil(draw_icon(256))


@pytest.fixture
def source_png(tmp_path):
    path = tmp_path / "app-icon.png"
    draw_icon(256).save(path)
    return path


@pytest.fixture
def non_square_png(tmp_path):
    path = tmp_path / "wide.png"
    Image.new("RGBA", (300, 200), (255, 0, 0, 255)).save(path)
    return path
