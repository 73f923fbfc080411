from __future__ import annotations

import struct
from typing import Iterable, List, Mapping, NamedTuple, Tuple, Union

import numpy as np

from .errors import EncodeError
from .png import encode_image
from .resample import resize
from .utils import CanonicalImage

# Layers written to icon.ico, in file order
ICO_SIZES = (32, 16, 24, 48, 64, 256)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_ICONDIR = struct.Struct("<HHH")
_ICONDIRENTRY = struct.Struct("<BBBBHHII")
_BITMAPINFOHEADER = struct.Struct("<IiiHHIIiiII")

Frames = Union[Mapping[int, CanonicalImage], Iterable[Tuple[int, CanonicalImage]]]


class IcoFrameInfo(NamedTuple):
    width: int
    height: int
    bit_count: int
    compressed: bool
    data: bytes


def frame_is_compressed(size: int) -> bool:
    """Only the 256px layer may be stored as PNG according to the ico format."""
    return size == 256


def ico_frames(source: CanonicalImage) -> List[Tuple[int, CanonicalImage]]:
    return [(size, resize(source, size)) for size in ICO_SIZES]


def bitmap_frame(image: CanonicalImage) -> bytes:
    """Uncompressed 32bpp DIB: header, bottom-up BGRA rows, then the AND mask."""
    w, h = image.width, image.height
    rgba = image.as_array()
    xor = np.ascontiguousarray(rgba[::-1, :, [2, 1, 0, 3]]).tobytes()

    transparent = rgba[::-1, :, 3] == 0
    packed = np.packbits(transparent, axis=1)
    # mask rows are padded to a 32-bit boundary
    stride = ((w + 31) // 32) * 4
    mask = np.zeros((h, stride), dtype=np.uint8)
    mask[:, : packed.shape[1]] = packed
    and_mask = mask.tobytes()

    header = _BITMAPINFOHEADER.pack(
        _BITMAPINFOHEADER.size, w, h * 2, 1, 32, 0, len(xor) + len(and_mask), 0, 0, 0, 0
    )
    return header + xor + and_mask


def encode_ico(frames: Frames) -> bytes:
    pairs = list(frames.items()) if isinstance(frames, Mapping) else list(frames)
    sizes = [size for size, _ in pairs]
    if sorted(sizes) != sorted(ICO_SIZES):
        raise EncodeError(f"ICO layers must be exactly {sorted(ICO_SIZES)}, got {sizes}")

    blobs: List[bytes] = []
    for size, image in pairs:
        if image.size != (size, size):
            raise EncodeError(f"ICO layer {size} holds a {image.width}x{image.height} image")
        if frame_is_compressed(size):
            blobs.append(encode_image(image))
        else:
            blobs.append(bitmap_frame(image))

    header = _ICONDIR.pack(0, 1, len(pairs))
    offset = _ICONDIR.size + _ICONDIRENTRY.size * len(pairs)
    entries = []
    for (size, _), blob in zip(pairs, blobs):
        dim = size if size < 256 else 0  # 0 means 256
        entries.append(_ICONDIRENTRY.pack(dim, dim, 0, 0, 1, 32, len(blob), offset))
        offset += len(blob)
    return header + b"".join(entries) + b"".join(blobs)


def read_ico_frames(data: bytes) -> List[IcoFrameInfo]:
    """Parse an .ico container back into its directory entries."""
    try:
        reserved, kind, count = _ICONDIR.unpack_from(data, 0)
    except struct.error as e:
        raise EncodeError(f"Truncated ICO header: {e}") from e
    if reserved != 0 or kind != 1:
        raise EncodeError("Not an ICO file")

    out: List[IcoFrameInfo] = []
    for i in range(count):
        pos = _ICONDIR.size + i * _ICONDIRENTRY.size
        try:
            w, h, _, _, _, bpp, length, offset = _ICONDIRENTRY.unpack_from(data, pos)
        except struct.error as e:
            raise EncodeError(f"Truncated ICO directory entry {i}: {e}") from e
        blob = data[offset: offset + length]
        if len(blob) != length:
            raise EncodeError(f"ICO frame {i} runs past end of file")
        out.append(IcoFrameInfo(w or 256, h or 256, bpp, blob.startswith(PNG_SIGNATURE), blob))
    return out
