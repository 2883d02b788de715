from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from picasort.metadata.converters import (
    extract_date,
    extract_gps_coord,
    extract_orientation,
    extract_rationals,
    extract_string,
    extract_time,
    extract_unsigned_int16,
    extract_unsigned_int32,
    extract_utc_datetime,
    read_date,
    read_gps_coordinate,
    read_raw,
    read_text,
    read_time,
    read_unsigned_int32,
)
from picasort.metadata.errors import InvalidEXIFConversion, InvalidGPSData, MalformedText, TagNotFound, TimeParse
from picasort.metadata.tags import ByteOrder, ExifTag, InMemoryTagStore
from picasort.metadata.values import ExtractedValue, GPSCoordinate, Orientation, Rational, ValueKind


def _raw_store(tag: ExifTag, *payloads: bytes, byte_order: ByteOrder = ByteOrder.BIG) -> InMemoryTagStore:
    return InMemoryTagStore({tag: list(payloads)}, byte_order=byte_order)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def test_text_strips_every_nul() -> None:
    store = _raw_store(ExifTag.COPYRIGHT, b"Copyright\x00\x00")

    assert extract_string(ExifTag.COPYRIGHT, store) == ExtractedValue(ValueKind.TEXT, "Copyright")
    assert read_text(ExifTag.COPYRIGHT, _raw_store(ExifTag.COPYRIGHT, b"Co\x00py\x00")) == "Copy"


def test_absent_tag_is_no_value_but_strict_reader_raises() -> None:
    store = InMemoryTagStore()

    assert extract_string(ExifTag.COPYRIGHT, store) is None
    with pytest.raises(TagNotFound):
        read_raw(ExifTag.COPYRIGHT, store)


def test_malformed_utf8_is_strict_error_and_soft_absence() -> None:
    store = _raw_store(ExifTag.COPYRIGHT, b"\xff\xfe broken")

    with pytest.raises(MalformedText):
        read_text(ExifTag.COPYRIGHT, store)
    assert extract_string(ExifTag.COPYRIGHT, store) is None


def test_only_first_payload_is_read() -> None:
    store = _raw_store(ExifTag.COPYRIGHT, b"First\x00", b"Second\x00")

    assert read_text(ExifTag.COPYRIGHT, store) == "First"


# ---------------------------------------------------------------------------
# Integers and rationals
# ---------------------------------------------------------------------------

def test_unsigned_integers_take_first_element_in_store_byte_order() -> None:
    big = _raw_store(ExifTag.IMAGE_WIDTH, b"\x00\x00\x04\x00\x00\x00\x00\x09")
    little = _raw_store(ExifTag.RESOLUTION_UNIT, b"\x03\x00", byte_order=ByteOrder.LITTLE)

    assert extract_unsigned_int32(ExifTag.IMAGE_WIDTH, big) == ExtractedValue(ValueKind.UNSIGNED_INT, 1024)
    assert extract_unsigned_int16(ExifTag.RESOLUTION_UNIT, little) == ExtractedValue(ValueKind.UNSIGNED_INT, 3)


def test_unsigned_int32_of_rational_payload_is_numerator() -> None:
    store = InMemoryTagStore.from_values({ExifTag.X_RESOLUTION: (350, 1)})

    assert read_unsigned_int32(ExifTag.X_RESOLUTION, store) == 350


@pytest.mark.parametrize("payload", [b"", b"\x00\x01\x02"])
def test_misaligned_or_empty_integer_payload(payload: bytes) -> None:
    store = _raw_store(ExifTag.IMAGE_WIDTH, payload)

    with pytest.raises(InvalidEXIFConversion):
        read_unsigned_int32(ExifTag.IMAGE_WIDTH, store)
    assert extract_unsigned_int32(ExifTag.IMAGE_WIDTH, store) is None


def test_rationals_preserve_order_and_raw_terms() -> None:
    store = InMemoryTagStore.from_values(
        {ExifTag.GPS_LATITUDE: ((45, 1), (45, 1), (2223, 60))}, byte_order=ByteOrder.LITTLE
    )

    value = extract_rationals(ExifTag.GPS_LATITUDE, store)

    assert value is not None
    assert value.kind is ValueKind.NUMBERS
    assert value.value == (Rational(45, 1), Rational(45, 1), Rational(2223, 60))


def test_rationals_reject_half_pairs() -> None:
    store = _raw_store(ExifTag.GPS_LATITUDE, b"\x00\x00\x00\x2d")

    assert extract_rationals(ExifTag.GPS_LATITUDE, store) is None


# ---------------------------------------------------------------------------
# Orientation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (1, Orientation.NORMAL),
        (2, Orientation.FLIPPED_HORIZONTALLY),
        (3, Orientation.ROTATED_180),
        (4, Orientation.FLIPPED_VERTICALLY),
        (5, Orientation.ROTATED_90_CCW_FLIPPED_VERTICALLY),
        (6, Orientation.ROTATED_90_CW),
        (7, Orientation.ROTATED_90_CCW_FLIPPED_HORIZONTALLY),
        (8, Orientation.ROTATED_90_CCW),
        (0, Orientation.UNKNOWN),
        (9, Orientation.UNKNOWN),
        (42, Orientation.UNKNOWN),
        (0xFFFF, Orientation.UNKNOWN),
    ],
)
def test_orientation_decoding(code: int, expected: Orientation) -> None:
    store = InMemoryTagStore.from_values({ExifTag.ORIENTATION: code})

    assert extract_orientation(ExifTag.ORIENTATION, store) == ExtractedValue(ValueKind.ORIENTATION, expected)


def test_orientation_codes_never_collapse() -> None:
    decoded = {Orientation.from_code(code) for code in range(1, 9)}

    assert len(decoded) == 8
    assert Orientation.UNKNOWN not in decoded
    assert all(Orientation.from_code(code).code == code for code in range(1, 9))


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------

def test_date_pattern() -> None:
    store = InMemoryTagStore.from_values({ExifTag.GPS_DATE_STAMP: "2024:10:28"})

    assert extract_date(ExifTag.GPS_DATE_STAMP, store) == ExtractedValue(ValueKind.DATE, date(2024, 10, 28))


def test_date_pattern_mismatch() -> None:
    store = InMemoryTagStore.from_values({ExifTag.GPS_DATE_STAMP: "2024-10-28"})

    with pytest.raises(TimeParse):
        read_date(ExifTag.GPS_DATE_STAMP, store)
    assert extract_date(ExifTag.GPS_DATE_STAMP, store) is None


def test_time_uses_numerators() -> None:
    store = InMemoryTagStore.from_values({ExifTag.GPS_TIME_STAMP: ((20, 1), (35, 1), (3, 1))})

    assert extract_time(ExifTag.GPS_TIME_STAMP, store) == ExtractedValue(ValueKind.TIME, time(20, 35, 3))


def test_time_errors() -> None:
    short = InMemoryTagStore.from_values({ExifTag.GPS_TIME_STAMP: ((20, 1), (35, 1))})
    out_of_range = InMemoryTagStore.from_values({ExifTag.GPS_TIME_STAMP: ((25, 1), (0, 1), (0, 1))})

    with pytest.raises(InvalidEXIFConversion):
        read_time(ExifTag.GPS_TIME_STAMP, short)
    with pytest.raises(TimeParse):
        read_time(ExifTag.GPS_TIME_STAMP, out_of_range)
    assert extract_time(ExifTag.GPS_TIME_STAMP, out_of_range) is None


def test_datetime_is_stamped_utc() -> None:
    store = InMemoryTagStore.from_values({ExifTag.DATE_TIME_ORIGINAL: "2024:12:27 15:58:43"})

    value = extract_utc_datetime(ExifTag.DATE_TIME_ORIGINAL, store)

    assert value == ExtractedValue(ValueKind.DATETIME, datetime(2024, 12, 27, 15, 58, 43, tzinfo=timezone.utc))


def test_blank_camera_datetime_is_absent() -> None:
    store = InMemoryTagStore.from_values({ExifTag.DATE_TIME_ORIGINAL: "0000:00:00 00:00:00"})

    assert extract_utc_datetime(ExifTag.DATE_TIME_ORIGINAL, store) is None


# ---------------------------------------------------------------------------
# GPS coordinates
# ---------------------------------------------------------------------------

def test_gps_coordinate_from_three_rationals() -> None:
    store = InMemoryTagStore.from_values({ExifTag.GPS_LATITUDE: ((45, 1), (45, 1), (2223, 60))})

    value = extract_gps_coord(ExifTag.GPS_LATITUDE, store)

    assert value is not None
    assert value.value == GPSCoordinate(degrees=45, minutes=45, seconds=pytest.approx(37.05))


@pytest.mark.parametrize(
    "rationals",
    [
        ((45, 1), (45, 1)),
        ((45, 1), (45, 1), (1, 1), (1, 1)),
        ((45, 1), (45, 0), (1, 1)),
    ],
)
def test_gps_coordinate_malformed(rationals: tuple[tuple[int, int], ...]) -> None:
    store = InMemoryTagStore.from_values({ExifTag.GPS_LATITUDE: rationals})

    with pytest.raises(InvalidGPSData):
        read_gps_coordinate(ExifTag.GPS_LATITUDE, store)
    assert extract_gps_coord(ExifTag.GPS_LATITUDE, store) is None


def test_extracted_value_rejects_wrong_python_type() -> None:
    with pytest.raises(TypeError):
        ExtractedValue(ValueKind.DATE, datetime(2024, 1, 1))
    with pytest.raises(TypeError):
        ExtractedValue(ValueKind.UNSIGNED_INT, Orientation.NORMAL)
