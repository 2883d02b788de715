"""Typed converters turning raw tag payloads into semantic values.

Each ``read_*`` function is strict: it raises a ``MetadataError`` when the tag
is missing or its payload is malformed. The ``extract_*`` converters used by
extraction schemas wrap them and are fail-soft, so any such error turns into
"no value" and the destination field simply stays unset.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
import logging
import struct

from picasort.metadata.errors import (
    InvalidEXIFConversion,
    InvalidGPSData,
    MalformedText,
    MetadataError,
    TagNotFound,
    TimeParse,
)
from picasort.metadata.tags import ExifTag, TagStore
from picasort.metadata.values import ExtractedValue, GPSCoordinate, Orientation, Rational, ValueKind

logger = logging.getLogger(__name__)

DATE_PATTERN = "%Y:%m:%d"
TIME_PATTERN = "%H:%M:%S"
DATETIME_PATTERN = "%Y:%m:%d %H:%M:%S"


def read_raw(tag: ExifTag, store: TagStore) -> bytes:
    """Return the first payload recorded for *tag*."""

    for payload in store.lookup(tag):
        return payload
    raise TagNotFound(tag.name)


def read_text(tag: ExifTag, store: TagStore) -> str:
    raw = read_raw(tag, store)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedText(tag.name, str(exc)) from exc
    return text.replace("\x00", "")


def _read_integers(tag: ExifTag, store: TagStore, code: str) -> tuple[int, ...]:
    raw = read_raw(tag, store)
    width = struct.calcsize(code)
    if not raw:
        raise InvalidEXIFConversion(tag.name, "empty payload")
    if len(raw) % width:
        raise InvalidEXIFConversion(tag.name, f"payload of {len(raw)} bytes is not a multiple of {width}")
    return struct.unpack(f"{store.byte_order.struct_prefix}{len(raw) // width}{code}", raw)


def read_unsigned_int16(tag: ExifTag, store: TagStore) -> int:
    return _read_integers(tag, store, "H")[0]


def read_unsigned_int32(tag: ExifTag, store: TagStore) -> int:
    """First u32 of the payload; for a rational payload this is the numerator."""

    return _read_integers(tag, store, "I")[0]


def read_orientation(tag: ExifTag, store: TagStore) -> Orientation:
    return Orientation.from_code(read_unsigned_int16(tag, store))


def read_rationals(tag: ExifTag, store: TagStore) -> tuple[Rational, ...]:
    values = _read_integers(tag, store, "I")
    if len(values) % 2:
        raise InvalidEXIFConversion(tag.name, "rational payload has an odd number of components")
    return tuple(Rational(values[index], values[index + 1]) for index in range(0, len(values), 2))


def _parse(tag: ExifTag, raw: str, pattern: str) -> datetime:
    try:
        return datetime.strptime(raw.strip(), pattern)
    except ValueError as exc:
        raise TimeParse(tag.name, raw, pattern) from exc


def read_date(tag: ExifTag, store: TagStore) -> date:
    return _parse(tag, read_text(tag, store), DATE_PATTERN).date()


def read_time(tag: ExifTag, store: TagStore) -> time:
    """Time of day from three rationals, using the numerator of each part."""

    parts = read_rationals(tag, store)
    if len(parts) != 3:
        raise InvalidEXIFConversion(tag.name, f"expected 3 rationals for a time, got {len(parts)}")
    raw = ":".join(str(part.numerator) for part in parts)
    return _parse(tag, raw, TIME_PATTERN).time()


def read_utc_datetime(tag: ExifTag, store: TagStore) -> datetime:
    return _parse(tag, read_text(tag, store), DATETIME_PATTERN).replace(tzinfo=timezone.utc)


def read_gps_coordinate(tag: ExifTag, store: TagStore) -> GPSCoordinate:
    """Decode a degrees/minutes/seconds triple.

    Raises ``InvalidGPSData`` when the tag is present but is not exactly three
    rationals with non-zero denominators.
    """

    try:
        parts = read_rationals(tag, store)
    except InvalidEXIFConversion as exc:
        raise InvalidGPSData(f"{tag.name}: {exc.message}") from exc
    if len(parts) != 3:
        raise InvalidGPSData(f"{tag.name} has {len(parts)} components, expected 3")
    if any(part.denominator == 0 for part in parts):
        raise InvalidGPSData(f"{tag.name} has a zero denominator")

    degrees, minutes, seconds = parts
    return GPSCoordinate(
        degrees=degrees.numerator // degrees.denominator,
        minutes=minutes.numerator // minutes.denominator,
        seconds=float(seconds),
    )


@dataclass(frozen=True, slots=True)
class Converter:
    """Fail-soft converter producing one ``ValueKind`` from a strict reader."""

    kind: ValueKind
    read: Callable[[ExifTag, TagStore], object]

    def __call__(self, tag: ExifTag, store: TagStore) -> ExtractedValue | None:
        try:
            value = self.read(tag, store)
        except TagNotFound:
            return None
        except MetadataError as exc:
            logger.debug("Ignoring undecodable %s: %s", tag.name, exc)
            return None
        return ExtractedValue(self.kind, value)

    @property
    def name(self) -> str:
        return self.read.__name__


extract_string = Converter(ValueKind.TEXT, read_text)
extract_unsigned_int16 = Converter(ValueKind.UNSIGNED_INT, read_unsigned_int16)
extract_unsigned_int32 = Converter(ValueKind.UNSIGNED_INT, read_unsigned_int32)
extract_orientation = Converter(ValueKind.ORIENTATION, read_orientation)
extract_rationals = Converter(ValueKind.NUMBERS, read_rationals)
extract_date = Converter(ValueKind.DATE, read_date)
extract_time = Converter(ValueKind.TIME, read_time)
extract_utc_datetime = Converter(ValueKind.DATETIME, read_utc_datetime)
extract_gps_coord = Converter(ValueKind.GPS_COORDINATE, read_gps_coordinate)
