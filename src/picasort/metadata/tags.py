"""Tag identifiers and the tag store contract consumed by the extraction core."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum, IntEnum
import struct
from typing import Protocol, runtime_checkable

from picasort.metadata.errors import InvalidEXIFConversion


class ByteOrder(Enum):
    """Byte order of multi-byte payloads, valued by TIFF header marker."""

    BIG = "MM"
    LITTLE = "II"

    @property
    def struct_prefix(self) -> str:
        return ">" if self is ByteOrder.BIG else "<"


class IFD(str, Enum):
    """Image file directories, valued by the keys piexif uses for them."""

    ZEROTH = "0th"
    EXIF = "Exif"
    GPS = "GPS"


class TagFormat(IntEnum):
    """EXIF value formats used by the supported tags."""

    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    UNDEFINED = 7


class ExifTag(Enum):
    """Supported tags as ``(directory, code, format)``."""

    IMAGE_WIDTH = (IFD.ZEROTH, 0x0100, TagFormat.LONG)
    IMAGE_HEIGHT = (IFD.ZEROTH, 0x0101, TagFormat.LONG)
    IMAGE_DESCRIPTION = (IFD.ZEROTH, 0x010E, TagFormat.ASCII)
    ORIENTATION = (IFD.ZEROTH, 0x0112, TagFormat.SHORT)
    X_RESOLUTION = (IFD.ZEROTH, 0x011A, TagFormat.RATIONAL)
    Y_RESOLUTION = (IFD.ZEROTH, 0x011B, TagFormat.RATIONAL)
    RESOLUTION_UNIT = (IFD.ZEROTH, 0x0128, TagFormat.SHORT)
    MODIFY_DATE = (IFD.ZEROTH, 0x0132, TagFormat.ASCII)
    COPYRIGHT = (IFD.ZEROTH, 0x8298, TagFormat.ASCII)
    DATE_TIME_ORIGINAL = (IFD.EXIF, 0x9003, TagFormat.ASCII)
    CREATE_DATE = (IFD.EXIF, 0x9004, TagFormat.ASCII)
    EXIF_IMAGE_WIDTH = (IFD.EXIF, 0xA002, TagFormat.LONG)
    EXIF_IMAGE_HEIGHT = (IFD.EXIF, 0xA003, TagFormat.LONG)
    GPS_LATITUDE_REF = (IFD.GPS, 0x0001, TagFormat.ASCII)
    GPS_LATITUDE = (IFD.GPS, 0x0002, TagFormat.RATIONAL)
    GPS_LONGITUDE_REF = (IFD.GPS, 0x0003, TagFormat.ASCII)
    GPS_LONGITUDE = (IFD.GPS, 0x0004, TagFormat.RATIONAL)
    GPS_TIME_STAMP = (IFD.GPS, 0x0007, TagFormat.RATIONAL)
    GPS_DATE_STAMP = (IFD.GPS, 0x001D, TagFormat.ASCII)

    def __init__(self, ifd: IFD, code: int, tag_format: TagFormat) -> None:
        self.ifd = ifd
        self.code = code
        self.tag_format = tag_format


@runtime_checkable
class TagStore(Protocol):
    """Read-only provider of raw tag payloads extracted from an image."""

    @property
    def byte_order(self) -> ByteOrder:
        """Byte order used by every multi-byte payload in the store."""

    def lookup(self, tag: ExifTag) -> Sequence[bytes]:
        """Return every raw payload recorded for *tag*, possibly none."""


class InMemoryTagStore:
    """Tag store over payloads that are already held in memory."""

    def __init__(
        self,
        payloads: Mapping[ExifTag, Iterable[bytes]] | None = None,
        *,
        byte_order: ByteOrder = ByteOrder.BIG,
    ) -> None:
        self._byte_order = byte_order
        self._payloads: dict[ExifTag, tuple[bytes, ...]] = {
            tag: tuple(values) for tag, values in (payloads or {}).items()
        }

    @classmethod
    def from_values(
        cls,
        values: Mapping[ExifTag, object],
        *,
        byte_order: ByteOrder = ByteOrder.BIG,
    ) -> "InMemoryTagStore":
        """Build a store by encoding decoded values in each tag's declared format."""

        payloads = {tag: [encode_value(tag, value, byte_order)] for tag, value in values.items()}
        return cls(payloads, byte_order=byte_order)

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    @property
    def tags(self) -> frozenset[ExifTag]:
        return frozenset(self._payloads)

    def lookup(self, tag: ExifTag) -> Sequence[bytes]:
        return self._payloads.get(tag, ())

    def __len__(self) -> int:
        return len(self._payloads)


_INTEGER_CODES = {TagFormat.BYTE: "B", TagFormat.SHORT: "H", TagFormat.LONG: "I"}


def encode_value(tag: ExifTag, value: object, byte_order: ByteOrder = ByteOrder.BIG) -> bytes:
    """Encode a decoded tag value into the raw payload its format describes.

    Accepts the shapes piexif produces: ``bytes``/``str`` for ASCII, an int or
    a sequence of ints for integer formats, and a ``(num, den)`` pair or a
    sequence of pairs for rationals.
    """

    prefix = byte_order.struct_prefix
    tag_format = tag.tag_format

    if tag_format is TagFormat.ASCII:
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidEXIFConversion(tag.name, f"expected text, got {type(value).__name__}")
        raw = bytes(value)
        return raw if raw.endswith(b"\x00") else raw + b"\x00"

    if tag_format is TagFormat.UNDEFINED:
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidEXIFConversion(tag.name, f"expected bytes, got {type(value).__name__}")
        return bytes(value)

    if tag_format is TagFormat.RATIONAL:
        pairs = _as_rational_pairs(tag, value)
        return b"".join(struct.pack(f"{prefix}II", numerator, denominator) for numerator, denominator in pairs)

    numbers = [value] if isinstance(value, int) else value
    if not isinstance(numbers, (list, tuple)) or not all(isinstance(item, int) for item in numbers):
        raise InvalidEXIFConversion(tag.name, f"expected integers, got {value!r}")
    try:
        return struct.pack(f"{prefix}{len(numbers)}{_INTEGER_CODES[tag_format]}", *numbers)
    except struct.error as exc:
        raise InvalidEXIFConversion(tag.name, str(exc)) from exc


def _as_rational_pairs(tag: ExifTag, value: object) -> list[tuple[int, int]]:
    if not isinstance(value, (list, tuple)):
        raise InvalidEXIFConversion(tag.name, f"expected rational pairs, got {value!r}")
    if len(value) == 2 and all(isinstance(item, int) for item in value):
        value = [value]
    if not all(
        isinstance(pair, (list, tuple)) and len(pair) == 2 and all(isinstance(item, int) for item in pair)
        for pair in value
    ):
        raise InvalidEXIFConversion(tag.name, f"expected rational pairs, got {value!r}")

    pairs = [(pair[0], pair[1]) for pair in value]
    if any(not 0 <= item <= 0xFFFFFFFF for pair in pairs for item in pair):
        raise InvalidEXIFConversion(tag.name, f"rational component out of range in {value!r}")
    return pairs
