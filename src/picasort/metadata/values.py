"""Typed values produced by the converters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum, IntEnum
from typing import NamedTuple


class Rational(NamedTuple):
    """Unsigned EXIF rational, kept exactly as stored (not reduced)."""

    numerator: int
    denominator: int

    def __float__(self) -> float:
        return self.numerator / self.denominator


@dataclass(frozen=True, slots=True)
class GPSCoordinate:
    """Degree/minute/second position on one axis."""

    degrees: int
    minutes: int
    seconds: float

    def to_decimal(self, reference: str | None = None) -> float:
        """Signed decimal degrees; southern and western references are negative."""

        value = self.degrees + self.minutes / 60 + self.seconds / 3600
        if reference in {"S", "W"}:
            return -value
        return value


class Orientation(IntEnum):
    """Image orientation as recorded by the Orientation tag."""

    NORMAL = 1
    FLIPPED_HORIZONTALLY = 2
    ROTATED_180 = 3
    FLIPPED_VERTICALLY = 4
    ROTATED_90_CCW_FLIPPED_VERTICALLY = 5
    ROTATED_90_CW = 6
    ROTATED_90_CCW_FLIPPED_HORIZONTALLY = 7
    ROTATED_90_CCW = 8
    UNKNOWN = 9

    @classmethod
    def from_code(cls, code: int) -> "Orientation":
        if 1 <= code <= 8:
            return cls(code)
        return cls.UNKNOWN

    @property
    def code(self) -> int:
        return int(self)


class ValueKind(Enum):
    """Variants of ``ExtractedValue`` with the Python type each one carries."""

    TEXT = str
    NUMBERS = tuple
    UNSIGNED_INT = int
    DATE = date
    TIME = time
    DATETIME = datetime
    GPS_COORDINATE = GPSCoordinate
    ORIENTATION = Orientation

    @property
    def python_type(self) -> type:
        return self.value


@dataclass(frozen=True, slots=True)
class ExtractedValue:
    """One successfully decoded tag value, tagged with its variant."""

    kind: ValueKind
    value: object

    def __post_init__(self) -> None:
        # datetime subclasses date and IntEnum subclasses int, so match exactly
        if type(self.value) is not self.kind.python_type:
            raise TypeError(
                f"{self.kind.name} value must be {self.kind.python_type.__name__}, "
                f"got {type(self.value).__name__}"
            )
