"""Declarative extraction schemas and the record field capability."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from datetime import date, datetime, time
from enum import Enum
from functools import cache
from typing import Any, ClassVar

from picasort.metadata.converters import Converter
from picasort.metadata.tags import ExifTag
from picasort.metadata.values import ExtractedValue, ValueKind

_KIND_KEY = "exif_kind"


@dataclass(frozen=True, slots=True)
class TagMapping:
    """How one destination field is filled from the tag store."""

    destination: str
    primary_tag: ExifTag
    converter: Converter
    fallback_tag: ExifTag | None = None


@dataclass(frozen=True, slots=True)
class ExtractionSchema:
    """Ordered mappings for one record type, one per destination field."""

    mappings: tuple[TagMapping, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for mapping in self.mappings:
            if mapping.destination in seen:
                raise ValueError(f"Duplicate schema destination: {mapping.destination}")
            seen.add(mapping.destination)

    def __iter__(self) -> Iterator[TagMapping]:
        return iter(self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    @property
    def destinations(self) -> tuple[str, ...]:
        return tuple(mapping.destination for mapping in self.mappings)


class SetFieldResult(Enum):
    OK = "ok"
    UNKNOWN_FIELD = "unknown-field"
    TYPE_MISMATCH = "type-mismatch"


def exif_field(kind: ValueKind) -> Any:
    """Declare an optional record field written by extraction with *kind* values."""

    return field(default=None, metadata={_KIND_KEY: kind})


@cache
def _setter_table(record_type: type) -> dict[str, ValueKind]:
    return {item.name: item.metadata[_KIND_KEY] for item in fields(record_type) if _KIND_KEY in item.metadata}


class ExifRecord:
    """Base for dataclass records filled by the assignment engine.

    Subclasses declare their fields with ``exif_field`` and their mappings in
    the ``EXIF_SCHEMA`` class constant.
    """

    __slots__ = ()

    EXIF_SCHEMA: ClassVar[ExtractionSchema] = ExtractionSchema()

    @classmethod
    def exif_schema(cls) -> ExtractionSchema:
        return cls.EXIF_SCHEMA

    @classmethod
    def field_kinds(cls) -> dict[str, ValueKind]:
        return dict(_setter_table(cls))

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(_setter_table(cls))

    def set_field(self, name: str, value: ExtractedValue) -> SetFieldResult:
        kind = _setter_table(type(self)).get(name)
        if kind is None:
            return SetFieldResult.UNKNOWN_FIELD
        if value.kind is not kind:
            return SetFieldResult.TYPE_MISMATCH
        setattr(self, name, value.value)
        return SetFieldResult.OK

    def get_field(self, name: str) -> object | None:
        if name not in _setter_table(type(self)):
            return None
        return getattr(self, name)

    def reset(self) -> None:
        """Clear every extracted field back to absent."""

        for name in _setter_table(type(self)):
            setattr(self, name, None)

    def is_valid(self) -> bool:
        return True

    def to_dict(self) -> dict[str, object]:
        """JSON-ready view: ISO-8601 dates, enum names, nested dataclasses as dicts."""

        return {name: _jsonable(getattr(self, name)) for name in _setter_table(type(self))}


def _jsonable(value: object) -> object:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return [_jsonable(item) for item in value]
    if hasattr(value, "__dataclass_fields__"):
        return {item.name: _jsonable(getattr(value, item.name)) for item in fields(value)}
    return value
