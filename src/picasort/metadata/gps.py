"""GPS position and timestamp records built from several GPS tags."""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import logging
from typing import ClassVar

from picasort.metadata.converters import (
    extract_date,
    extract_gps_coord,
    extract_string,
    extract_time,
    read_date,
    read_gps_coordinate,
    read_text,
    read_time,
)
from picasort.metadata.engine import assign
from picasort.metadata.errors import InvalidGPSData, MetadataError
from picasort.metadata.schema import ExifRecord, ExtractionSchema, TagMapping, exif_field
from picasort.metadata.tags import ExifTag, TagStore
from picasort.metadata.values import GPSCoordinate, ValueKind

logger = logging.getLogger(__name__)

LATITUDE_REFS = frozenset({"N", "S"})
LONGITUDE_REFS = frozenset({"E", "W"})


@dataclass(slots=True)
class GPSData(ExifRecord):
    """Position and UTC time recorded by the camera's GPS receiver.

    Every field is optional; ``is_valid`` tells whether the record describes a
    usable position.
    """

    latitude_ref: str | None = exif_field(ValueKind.TEXT)
    latitude: GPSCoordinate | None = exif_field(ValueKind.GPS_COORDINATE)
    longitude_ref: str | None = exif_field(ValueKind.TEXT)
    longitude: GPSCoordinate | None = exif_field(ValueKind.GPS_COORDINATE)
    time: dt.time | None = exif_field(ValueKind.TIME)
    date: dt.date | None = exif_field(ValueKind.DATE)

    EXIF_SCHEMA: ClassVar[ExtractionSchema] = ExtractionSchema(
        (
            TagMapping("latitude_ref", ExifTag.GPS_LATITUDE_REF, extract_string),
            TagMapping("latitude", ExifTag.GPS_LATITUDE, extract_gps_coord),
            TagMapping("longitude_ref", ExifTag.GPS_LONGITUDE_REF, extract_string),
            TagMapping("longitude", ExifTag.GPS_LONGITUDE, extract_gps_coord),
            TagMapping("time", ExifTag.GPS_TIME_STAMP, extract_time),
            TagMapping("date", ExifTag.GPS_DATE_STAMP, extract_date),
        )
    )

    def is_valid(self) -> bool:
        if self.latitude is None or self.longitude is None:
            return False
        if self.latitude_ref is not None and self.latitude_ref not in LATITUDE_REFS:
            return False
        if self.longitude_ref is not None and self.longitude_ref not in LONGITUDE_REFS:
            return False
        return True

    @property
    def timestamp(self) -> dt.datetime | None:
        if self.date is None or self.time is None:
            return None
        return combine_utc(self.date, self.time)

    @property
    def decimal_latitude(self) -> float | None:
        if self.latitude is None:
            return None
        return self.latitude.to_decimal(self.latitude_ref)

    @property
    def decimal_longitude(self) -> float | None:
        if self.longitude is None:
            return None
        return self.longitude.to_decimal(self.longitude_ref)


def combine_utc(day: dt.date, moment: dt.time) -> dt.datetime:
    return dt.datetime.combine(day, moment, tzinfo=dt.timezone.utc)


def decode_gps_coordinate(tag: ExifTag, store: TagStore) -> GPSCoordinate:
    """Strict coordinate decode; see ``read_gps_coordinate``."""

    return read_gps_coordinate(tag, store)


def decode_gps_timestamp(store: TagStore) -> dt.datetime | None:
    """Combine GPSDateStamp and GPSTimeStamp into one UTC instant.

    Returns None when neither tag is present. Raises ``InvalidGPSData`` when
    one is missing or either cannot be decoded, since half a timestamp is
    not usable.
    """

    has_date = bool(store.lookup(ExifTag.GPS_DATE_STAMP))
    has_time = bool(store.lookup(ExifTag.GPS_TIME_STAMP))
    if not has_date and not has_time:
        return None
    if not (has_date and has_time):
        missing = ExifTag.GPS_TIME_STAMP if has_date else ExifTag.GPS_DATE_STAMP
        raise InvalidGPSData(f"{missing.name} is missing for the GPS timestamp")

    try:
        day = read_date(ExifTag.GPS_DATE_STAMP, store)
        moment = read_time(ExifTag.GPS_TIME_STAMP, store)
    except MetadataError as exc:
        raise InvalidGPSData(f"GPS timestamp is malformed: {exc}") from exc
    return combine_utc(day, moment)


def read_gps_data(store: TagStore) -> GPSData:
    """Assign a ``GPSData`` record, then re-check the position tags that are present.

    The declarative pass leaves undecodable fields unset. A present coordinate
    or hemisphere reference that cannot be decoded raises ``InvalidGPSData``,
    since the position would be wrong. A malformed timestamp only clears
    ``date`` and ``time``.
    """

    record = assign(GPSData(), store)

    references = ((ExifTag.GPS_LATITUDE_REF, record.latitude_ref), (ExifTag.GPS_LONGITUDE_REF, record.longitude_ref))
    for tag, decoded in references:
        if decoded is None and store.lookup(tag):
            try:
                read_text(tag, store)
            except MetadataError as exc:
                raise InvalidGPSData(f"{tag.name} cannot be decoded: {exc}") from exc

    for tag, decoded in ((ExifTag.GPS_LATITUDE, record.latitude), (ExifTag.GPS_LONGITUDE, record.longitude)):
        if decoded is None and store.lookup(tag):
            decode_gps_coordinate(tag, store)

    if (record.date is None or record.time is None) and (
        store.lookup(ExifTag.GPS_DATE_STAMP) and store.lookup(ExifTag.GPS_TIME_STAMP)
    ):
        try:
            decode_gps_timestamp(store)
        except InvalidGPSData as exc:
            logger.warning("Ignoring GPS timestamp: %s", exc)
            record.date = None
            record.time = None
    return record
