"""Error taxonomy for EXIF metadata extraction."""

from __future__ import annotations

from dataclasses import dataclass


class MetadataError(Exception):
    """Base class for every error raised by the extraction core."""


@dataclass(slots=True)
class TagNotFound(MetadataError):
    """A tag required by a strict reader is absent from the tag store."""

    tag: str

    def __str__(self) -> str:
        return f"EXIF tag not found (tag={self.tag})"


@dataclass(slots=True)
class InvalidEXIFConversion(MetadataError):
    """A tag payload does not have the shape its format requires."""

    tag: str
    message: str

    def __str__(self) -> str:
        return f"Invalid EXIF conversion: {self.message} (tag={self.tag})"


@dataclass(slots=True)
class MalformedText(MetadataError):
    """A text payload is not valid UTF-8."""

    tag: str
    message: str

    def __str__(self) -> str:
        return f"UTF-8 conversion error: {self.message} (tag={self.tag})"


@dataclass(slots=True)
class TimeParse(MetadataError):
    """A date or time payload does not match its expected pattern."""

    tag: str
    raw: str
    pattern: str

    def __str__(self) -> str:
        return f"Time parse error: {self.raw!r} does not match {self.pattern!r} (tag={self.tag})"


@dataclass(slots=True)
class InvalidGPSData(MetadataError):
    """A GPS structure built from several tags is present but unusable."""

    message: str

    def __str__(self) -> str:
        return f"Invalid GPS data: {self.message}"


@dataclass(slots=True)
class ConfigurationError(MetadataError):
    """A schema does not match the record it is assigned to."""

    record: str
    destination: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (record={self.record}, field={self.destination})"
