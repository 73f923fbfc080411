from __future__ import annotations

from PIL import Image

from .utils import CanonicalImage, RGBA


def over_background(image: CanonicalImage, color: RGBA) -> CanonicalImage:
    """Alpha-blend `image` at (0, 0) over a canvas filled with `color`.

    iOS rejects icons with transparency, so this runs for the iOS family only.
    """
    canvas = Image.new("RGBA", image.size, tuple(color))
    return CanonicalImage.from_pil(Image.alpha_composite(canvas, image.to_pil()))
