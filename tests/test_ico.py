from __future__ import annotations

import io
import struct

import pytest
from PIL import Image

from iconsmith.errors import EncodeError
from iconsmith.ico import (
    ICO_SIZES,
    bitmap_frame,
    encode_ico,
    frame_is_compressed,
    ico_frames,
    read_ico_frames,
)
from iconsmith.utils import CanonicalImage


def test_only_256_is_compressed():
    assert frame_is_compressed(256)
    for size in (16, 24, 32, 48, 64, 128):
        assert not frame_is_compressed(size)


def test_frame_kinds(icon_image):
    frames = read_ico_frames(encode_ico(ico_frames(icon_image)))
    assert [f.width for f in frames] == list(ICO_SIZES)
    for frame in frames:
        assert frame.bit_count == 32
        if frame.width == 256:
            assert frame.compressed
            assert Image.open(io.BytesIO(frame.data)).size == (256, 256)
        else:
            assert not frame.compressed
            header_size, w, h, planes, bpp = struct.unpack_from("<IiiHH", frame.data)
            assert (header_size, w, h, planes, bpp) == (40, frame.width, frame.width * 2, 1, 32)


def test_ico_directory_header(icon_image):
    data = encode_ico(ico_frames(icon_image))
    assert struct.unpack_from("<HHH", data) == (0, 1, 6)


def test_pillow_can_read_result(icon_image):
    data = encode_ico(ico_frames(icon_image))
    with Image.open(io.BytesIO(data)) as ico:
        assert ico.format == "ICO"
        assert (16, 16) in ico.info["sizes"]
        assert (256, 256) in ico.info["sizes"]


def test_bitmap_frame_layout():
    img = Image.new("RGBA", (2, 2), (0, 0, 0, 0))
    img.putpixel((0, 0), (10, 20, 30, 255))
    frame = bitmap_frame(CanonicalImage.from_pil(img))
    # header + 2x2 BGRA + 2 mask rows of 4 bytes
    assert len(frame) == 40 + 16 + 8
    pixels = frame[40:56]
    # rows are stored bottom-up, so the top-left pixel starts the second row
    assert pixels[8:12] == bytes([30, 20, 10, 255])
    mask = frame[56:]
    assert mask[:4] == bytes([0b11000000, 0, 0, 0])
    assert mask[4:] == bytes([0b01000000, 0, 0, 0])


def test_accepts_mapping(icon_image):
    frames = dict(ico_frames(icon_image))
    assert len(read_ico_frames(encode_ico(frames))) == 6


def test_rejects_wrong_size_set(icon_image):
    frames = ico_frames(icon_image)[:-1]
    with pytest.raises(EncodeError):
        encode_ico(frames)


def test_rejects_mismatched_layer(icon_image):
    frames = [(size, icon_image) for size in ICO_SIZES]
    with pytest.raises(EncodeError):
        encode_ico(frames)
