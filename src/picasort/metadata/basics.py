"""Basic image description: geometry, orientation, dates and copyright."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from picasort.metadata.converters import (
    extract_orientation,
    extract_string,
    extract_unsigned_int16,
    extract_unsigned_int32,
    extract_utc_datetime,
)
from picasort.metadata.schema import ExifRecord, ExtractionSchema, TagMapping, exif_field
from picasort.metadata.tags import ExifTag
from picasort.metadata.values import Orientation, ValueKind


@dataclass(slots=True)
class Basics(ExifRecord):
    width: int | None = exif_field(ValueKind.UNSIGNED_INT)
    height: int | None = exif_field(ValueKind.UNSIGNED_INT)
    description: str | None = exif_field(ValueKind.TEXT)
    resolution_x: int | None = exif_field(ValueKind.UNSIGNED_INT)
    resolution_y: int | None = exif_field(ValueKind.UNSIGNED_INT)
    resolution_unit: int | None = exif_field(ValueKind.UNSIGNED_INT)
    orientation: Orientation | None = exif_field(ValueKind.ORIENTATION)
    creation_date: datetime | None = exif_field(ValueKind.DATETIME)
    original_date: datetime | None = exif_field(ValueKind.DATETIME)
    modification_date: datetime | None = exif_field(ValueKind.DATETIME)
    copyright: str | None = exif_field(ValueKind.TEXT)

    EXIF_SCHEMA: ClassVar[ExtractionSchema] = ExtractionSchema(
        (
            TagMapping("width", ExifTag.IMAGE_WIDTH, extract_unsigned_int32, ExifTag.EXIF_IMAGE_WIDTH),
            TagMapping("height", ExifTag.IMAGE_HEIGHT, extract_unsigned_int32, ExifTag.EXIF_IMAGE_HEIGHT),
            TagMapping("description", ExifTag.IMAGE_DESCRIPTION, extract_string),
            TagMapping("resolution_x", ExifTag.X_RESOLUTION, extract_unsigned_int32),
            TagMapping("resolution_y", ExifTag.Y_RESOLUTION, extract_unsigned_int32),
            TagMapping("resolution_unit", ExifTag.RESOLUTION_UNIT, extract_unsigned_int16),
            TagMapping("orientation", ExifTag.ORIENTATION, extract_orientation),
            TagMapping("creation_date", ExifTag.CREATE_DATE, extract_utc_datetime),
            TagMapping("original_date", ExifTag.DATE_TIME_ORIGINAL, extract_utc_datetime),
            TagMapping("modification_date", ExifTag.MODIFY_DATE, extract_utc_datetime),
            TagMapping("copyright", ExifTag.COPYRIGHT, extract_string),
        )
    )
