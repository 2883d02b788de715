"""CLI for dumping the EXIF metadata of image files as JSON."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv

from picasort.config import ExtractionSettings, parse_log_level
from picasort.metadata.errors import MetadataError
from picasort.metadata.reader import read_metadata

logger = logging.getLogger(__name__)


def _log_level(raw_value: str) -> str:
    try:
        return parse_log_level(name="--log-level", raw_value=raw_value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = ExtractionSettings.from_env()

    parser = argparse.ArgumentParser(description="Extract EXIF metadata from images")
    parser.add_argument("paths", nargs="+", help="Image files to read")
    parser.add_argument(
        "--strict-gps",
        action="store_true",
        default=settings.strict_gps,
        help="Fail a file whose GPS tags are present but malformed instead of dropping them",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=args.log_level,
    )
    run_settings = ExtractionSettings(log_level=args.log_level, strict_gps=args.strict_gps)

    results = []
    failures = 0
    for path in args.paths:
        try:
            metadata = read_metadata(path, run_settings)
        except (OSError, MetadataError) as exc:
            logger.error("Failed to read %s: %s", path, exc)
            failures += 1
            continue
        results.append(metadata.to_dict())

    print(json.dumps(results, ensure_ascii=False, indent=2))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
