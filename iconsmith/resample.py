from __future__ import annotations

from PIL import Image

from .errors import ResampleError
from .utils import CanonicalImage


def resize(image: CanonicalImage, size: int) -> CanonicalImage:
    """Resize to a `size` x `size` square with the Lanczos filter.

    Pillow returns a plain copy when the image already has the requested
    dimensions, so resizing twice to the same edge is byte-identical to
    resizing once.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ResampleError(f"Icon size must be a positive integer, got {size!r}")
    try:
        resized = image.to_pil().resize((size, size), Image.Resampling.LANCZOS)
    except (ValueError, MemoryError, OSError) as e:
        raise ResampleError(f"Can't resize {image.width}x{image.height} image to {size}px: {e}") from e
    return CanonicalImage.from_pil(resized)
