"""EXIF metadata extraction interfaces."""

from .basics import Basics
from .engine import assign, verify_schema
from .errors import (
    ConfigurationError,
    InvalidEXIFConversion,
    InvalidGPSData,
    MalformedText,
    MetadataError,
    TagNotFound,
    TimeParse,
)
from .gps import GPSData, decode_gps_coordinate, decode_gps_timestamp, read_gps_data
from .reader import Metadata, extract_metadata, read_metadata
from .tags import ByteOrder, ExifTag, InMemoryTagStore, TagStore
from .values import ExtractedValue, GPSCoordinate, Orientation, Rational, ValueKind

__all__ = [
    "Basics",
    "ByteOrder",
    "ConfigurationError",
    "ExifTag",
    "ExtractedValue",
    "GPSCoordinate",
    "GPSData",
    "InMemoryTagStore",
    "InvalidEXIFConversion",
    "InvalidGPSData",
    "MalformedText",
    "Metadata",
    "MetadataError",
    "Orientation",
    "Rational",
    "TagNotFound",
    "TagStore",
    "TimeParse",
    "ValueKind",
    "assign",
    "decode_gps_coordinate",
    "decode_gps_timestamp",
    "extract_metadata",
    "read_gps_data",
    "read_metadata",
    "verify_schema",
]
