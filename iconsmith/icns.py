from __future__ import annotations

import json
import logging
import os
import struct
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Tuple, Union

from .errors import ConfigLookupError, EncodeError
from .png import encode_image
from .resample import resize
from .utils import CanonicalImage

log = logging.getLogger(__name__)

ICNS_TABLE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "icns.json")

# PNG-capable element types and the edge length each one stores
OSTYPE_SIZES: Mapping[str, int] = MappingProxyType({
    "ic04": 16,
    "ic05": 32,
    "ic07": 128,
    "ic08": 256,
    "ic09": 512,
    "ic10": 1024,
    "ic11": 32,
    "ic12": 64,
    "ic13": 256,
    "ic14": 512,
})

_HEADER = struct.Struct(">4sI")


class IcnsEntry(NamedTuple):
    size: int
    ostype: str


def parse_ostype(code: str) -> bytes:
    if not isinstance(code, str) or len(code) != 4 or not code.isascii():
        raise ConfigLookupError(f"Invalid OSType {code!r}: expected four ASCII characters")
    if code not in OSTYPE_SIZES:
        raise ConfigLookupError(f"Unknown icns OSType {code!r}")
    return code.encode("ascii")


def _entry(name: str, raw) -> IcnsEntry:
    try:
        size, ostype = raw["size"], raw["ostype"]
    except (TypeError, KeyError) as e:
        raise ConfigLookupError(f"icns table entry {name!r} needs 'size' and 'ostype'") from e
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigLookupError(f"icns table entry {name!r} has invalid size {size!r}")
    parse_ostype(ostype)
    if OSTYPE_SIZES[ostype] != size:
        raise ConfigLookupError(
            f"icns table entry {name!r}: {ostype} holds {OSTYPE_SIZES[ostype]}px images, not {size}px"
        )
    return IcnsEntry(size, ostype)


def load_size_table(source: Union[str, os.PathLike, bytes] = ICNS_TABLE_PATH) -> Mapping[str, IcnsEntry]:
    """Load a {name: {"size": int, "ostype": str}} table as a read-only mapping."""
    try:
        if isinstance(source, bytes):
            raw = json.loads(source)
        else:
            with open(source, "rb") as f:
                raw = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigLookupError(f"Can't load icns size table: {e}") from e
    if not isinstance(raw, dict) or not raw:
        raise ConfigLookupError("icns size table must be a non-empty JSON object")

    table: Dict[str, IcnsEntry] = {name: _entry(name, value) for name, value in raw.items()}
    return MappingProxyType(table)


ICNS_SIZES = load_size_table()


def encode_icns(source: CanonicalImage, table: Mapping[str, IcnsEntry] = ICNS_SIZES) -> bytes:
    elements: List[bytes] = []
    for name, entry in table.items():
        ostype = parse_ostype(entry.ostype)
        png = encode_image(resize(source, entry.size))
        log.debug("icns element %s (%s, %dpx, %d bytes)", name, entry.ostype, entry.size, len(png))
        elements.append(_HEADER.pack(ostype, _HEADER.size + len(png)) + png)

    body = b"".join(elements)
    return _HEADER.pack(b"icns", _HEADER.size + len(body)) + body


def read_icns_elements(data: bytes) -> List[Tuple[str, bytes]]:
    try:
        magic, total = _HEADER.unpack_from(data, 0)
    except struct.error as e:
        raise EncodeError(f"Truncated icns header: {e}") from e
    if magic != b"icns" or total != len(data):
        raise EncodeError("Not an icns file or length mismatch")

    out: List[Tuple[str, bytes]] = []
    pos = _HEADER.size
    while pos < total:
        try:
            ostype, length = _HEADER.unpack_from(data, pos)
        except struct.error as e:
            raise EncodeError(f"Truncated icns element at offset {pos}: {e}") from e
        if length < _HEADER.size or pos + length > total:
            raise EncodeError(f"Bad icns element length {length} at offset {pos}")
        out.append((ostype.decode("ascii", "replace"), data[pos + _HEADER.size: pos + length]))
        pos += length
    return out
