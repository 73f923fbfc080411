from __future__ import annotations

import io

from PIL import Image

from .errors import EncodeError
from .utils import CanonicalImage


def encode_png(pixels: bytes, size: int) -> bytes:
    """Encode a square RGBA8 buffer as PNG with maximum compression.

    Pillow picks the row filter per scanline (adaptive filtering) unless told
    otherwise.
    """
    buf = io.BytesIO()
    try:
        img = Image.frombytes("RGBA", (size, size), pixels)
        img.save(buf, format="PNG", optimize=True, compress_level=9)
    except (ValueError, OSError) as e:
        raise EncodeError(f"Can't encode {size}x{size} PNG: {e}") from e
    return buf.getvalue()


def encode_image(image: CanonicalImage) -> bytes:
    if not image.is_square:
        raise EncodeError(f"PNG icons must be square, got {image.width}x{image.height}")
    return encode_png(image.pixels, image.width)
