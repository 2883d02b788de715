"""Assignment engine driving extraction schemas against a tag store."""

from __future__ import annotations

import logging
from typing import TypeVar

from picasort.metadata.errors import ConfigurationError
from picasort.metadata.schema import ExifRecord, SetFieldResult, TagMapping
from picasort.metadata.tags import TagStore
from picasort.metadata.values import ExtractedValue

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=ExifRecord)


def resolve(mapping: TagMapping, store: TagStore) -> ExtractedValue | None:
    """Convert the primary tag, falling back to the alternative tag when it yields nothing."""

    value = mapping.converter(mapping.primary_tag, store)
    if value is None and mapping.fallback_tag is not None:
        value = mapping.converter(mapping.fallback_tag, store)
    return value


def assign(record: RecordT, store: TagStore) -> RecordT:
    """Fill *record* from *store* following its type's extraction schema.

    Fields whose tags are absent or undecodable stay unset. A destination the
    record does not have, or a value of the wrong kind, raises
    ``ConfigurationError``; fields written before that point are kept.
    """

    record_name = type(record).__name__
    for mapping in record.exif_schema():
        value = resolve(mapping, store)
        if value is None:
            continue

        outcome = record.set_field(mapping.destination, value)
        if outcome is SetFieldResult.UNKNOWN_FIELD:
            raise ConfigurationError(record_name, mapping.destination, "Schema destination is not a record field")
        if outcome is SetFieldResult.TYPE_MISMATCH:
            raise ConfigurationError(
                record_name,
                mapping.destination,
                f"{value.kind.name} value does not match the field's declared kind",
            )

    logger.debug("Assigned %s: %s", record_name, record)
    return record


def verify_schema(record_type: type[ExifRecord]) -> None:
    """Check a record type's schema against its fields without reading any tags."""

    kinds = record_type.field_kinds()
    for mapping in record_type.exif_schema():
        kind = kinds.get(mapping.destination)
        if kind is None:
            raise ConfigurationError(
                record_type.__name__, mapping.destination, "Schema destination is not a record field"
            )
        if mapping.converter.kind is not kind:
            raise ConfigurationError(
                record_type.__name__,
                mapping.destination,
                f"{mapping.converter.name} produces {mapping.converter.kind.name}, field expects {kind.name}",
            )
