from __future__ import annotations

import logging
import os

from PIL import Image, UnidentifiedImageError

from .errors import PreconditionError, SourceDecodeError
from .utils import CanonicalImage, RECOMMENDED_SOURCE_SIZE

log = logging.getLogger(__name__)


def load_source(path: str | os.PathLike) -> CanonicalImage:
    """Decode the source icon into RGBA8 and require a square canvas."""
    try:
        with Image.open(path) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise SourceDecodeError(f"Can't read and decode source image {os.fspath(path)!r}: {e}") from e

    source = CanonicalImage.from_pil(rgba)
    if not source.is_square:
        raise PreconditionError(
            f"Source image must be square, got {source.width}x{source.height}"
        )
    if source.width < RECOMMENDED_SOURCE_SIZE:
        log.warning(
            "Source image is %dpx, smaller than the recommended %dpx; larger icons will be upscaled",
            source.width, RECOMMENDED_SOURCE_SIZE,
        )
    log.debug("Loaded %s (%dx%d)", os.fspath(path), source.width, source.height)
    return source
