"""Runtime configuration for metadata extraction."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping


DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(*, name: str, raw_value: str) -> bool:
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw_value!r})")


def parse_log_level(*, name: str, raw_value: str) -> str:
    value = raw_value.strip().upper()
    if not value:
        raise ValueError(f"{name} cannot be empty")
    if not isinstance(logging.getLevelName(value), int):
        raise ValueError(f"{name} must be a logging level name (got {raw_value!r})")
    return value


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    """Validated settings for the extraction pipeline.

    ``strict_gps`` makes malformed GPS composites fail the whole file instead
    of dropping the GPS record.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    strict_gps: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractionSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        log_level = parse_log_level(
            name="PICASORT_LOG_LEVEL",
            raw_value=source.get("PICASORT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )
        strict_gps = _parse_bool(
            name="PICASORT_STRICT_GPS",
            raw_value=source.get("PICASORT_STRICT_GPS", "false"),
        )
        return cls(log_level=log_level, strict_gps=strict_gps)
