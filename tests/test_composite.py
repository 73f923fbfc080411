from __future__ import annotations

from PIL import Image

from iconsmith.composite import over_background
from iconsmith.utils import CanonicalImage, parse_color


def test_transparent_source_becomes_background():
    src = CanonicalImage.from_pil(Image.new("RGBA", (40, 40), (0, 0, 0, 0)))
    out = over_background(src, parse_color("#FF0000"))
    assert out.size == (40, 40)
    arr = out.as_array()
    assert (arr[:, :, 0] == 255).all()
    assert (arr[:, :, 1] == 0).all()
    assert (arr[:, :, 2] == 0).all()
    assert (arr[:, :, 3] == 255).all()


def test_opaque_pixels_are_kept(icon_image):
    out = over_background(icon_image, parse_color("#fff"))
    src = icon_image.as_array()
    arr = out.as_array()
    opaque = src[:, :, 3] == 255
    assert (arr[opaque] == src[opaque]).all()
    assert (arr[:, :, 3] == 255).all()


def test_source_is_not_modified(icon_image):
    before = icon_image.pixels
    over_background(icon_image, (0, 0, 255, 255))
    assert icon_image.pixels == before
