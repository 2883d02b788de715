"""Extraction pipeline producing the metadata attached to one image."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from picasort.config import ExtractionSettings
from picasort.metadata.basics import Basics
from picasort.metadata.container import open_tag_store
from picasort.metadata.engine import assign
from picasort.metadata.errors import InvalidGPSData
from picasort.metadata.gps import GPSData, read_gps_data
from picasort.metadata.tags import TagStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Metadata:
    """Everything extracted from one image file."""

    file_path: str
    basics: Basics = field(default_factory=Basics)
    gps_data: GPSData | None = None

    def to_dict(self) -> dict[str, object]:
        gps = None
        if self.gps_data is not None:
            gps = self.gps_data.to_dict()
            timestamp = self.gps_data.timestamp
            gps["timestamp"] = timestamp.isoformat() if timestamp else None
            gps["decimal_latitude"] = self.gps_data.decimal_latitude
            gps["decimal_longitude"] = self.gps_data.decimal_longitude
        return {"file_path": self.file_path, "basics": self.basics.to_dict(), "gps": gps}


def extract_metadata(
    store: TagStore,
    file_path: str | Path,
    settings: ExtractionSettings | None = None,
) -> Metadata:
    """Build ``Metadata`` from an already opened tag store.

    GPS data is kept only when it validates. Malformed GPS composites are
    logged and dropped, or re-raised when ``settings.strict_gps`` is set.
    """

    settings = settings or ExtractionSettings()
    metadata = Metadata(file_path=str(file_path), basics=assign(Basics(), store))

    try:
        gps_data = read_gps_data(store)
    except InvalidGPSData as exc:
        if settings.strict_gps:
            raise
        logger.warning("Dropping GPS data for %s: %s", file_path, exc)
        return metadata

    if gps_data.is_valid():
        metadata.gps_data = gps_data
    elif gps_data != GPSData():
        logger.warning("Dropping inconsistent GPS data for %s: %s", file_path, gps_data)
    return metadata


def read_metadata(path: str | Path, settings: ExtractionSettings | None = None) -> Metadata:
    """Open the image at *path* and extract its metadata."""

    return extract_metadata(open_tag_store(path), path, settings)
