"""Tag store backed by the EXIF block of a real image file."""

from __future__ import annotations

import logging
from pathlib import Path
import struct
from typing import Any, Mapping

from PIL import Image
import piexif

from picasort.metadata.errors import InvalidEXIFConversion
from picasort.metadata.tags import ByteOrder, ExifTag, InMemoryTagStore, encode_value

logger = logging.getLogger(__name__)


def tag_store_from_exif(exif: Mapping[str, Any], *, byte_order: ByteOrder = ByteOrder.BIG) -> InMemoryTagStore:
    """Build a store from a ``piexif.load`` dictionary.

    Values are re-encoded in each tag's declared format; a value that does
    not fit its format is skipped.
    """

    payloads: dict[ExifTag, list[bytes]] = {}
    for tag in ExifTag:
        value = (exif.get(tag.ifd.value) or {}).get(tag.code)
        if value is None:
            continue
        try:
            payloads[tag] = [encode_value(tag, value, byte_order)]
        except InvalidEXIFConversion as exc:
            logger.warning("Skipping %s: %s", tag.name, exc)
    return InMemoryTagStore(payloads, byte_order=byte_order)


def open_tag_store(path: str | Path) -> InMemoryTagStore:
    """Read the EXIF block of the image at *path* into a tag store.

    Pillow locates the block for JPEG, PNG and WebP containers, and TIFF
    files are handed to piexif whole; piexif decodes the directories.
    Images without EXIF give an empty store.
    """

    source = Path(path)
    with Image.open(source) as image:
        raw = image.info.get("exif")
        if not raw and image.format == "TIFF":
            raw = str(source)

    if not raw:
        logger.debug("No EXIF block in %s", source)
        return InMemoryTagStore()

    try:
        exif = piexif.load(raw)
    except (ValueError, struct.error) as exc:
        logger.warning("Unreadable EXIF block in %s: %s", source, exc)
        return InMemoryTagStore()
    return tag_store_from_exif(exif)
