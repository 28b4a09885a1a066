"""CSL date values.

CSL expresses dates in a few interchangeable forms:

- ``date-parts``: one inner array for a single date, two for a range,
  each holding year and optionally month and day (numbers or numeric
  strings)
- ``raw``: free text that citation processors may try to recognise
- ``edtf``: an Extended Date/Time Format string
- ``literal``: a date to be printed verbatim

Any form may also carry ``season`` and ``circa``. Keys not listed here are
kept in ``extra``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

DATE_KEYS = ("date-parts", "season", "circa", "literal", "raw", "edtf")


@dataclass(frozen=True)
class DateParts:
    """A partial calendar date; only the year is required."""

    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def __post_init__(self) -> None:
        if self.day is not None and self.month is None:
            raise ValueError("a date with a day must also have a month")
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"month should be in range 1-12, got {self.month}")
        if self.day is not None and not 1 <= self.day <= 31:
            raise ValueError(f"day should be in range 1-31, got {self.day}")

    @property
    def is_complete(self) -> bool:
        """True when year, month and day are all known."""
        return self.month is not None and self.day is not None

    def to_csl(self) -> list[int]:
        """Convert to a CSL date-parts inner array."""
        parts = [self.year]
        if self.month is not None:
            parts.append(self.month)
            if self.day is not None:
                parts.append(self.day)
        return parts

    def __str__(self) -> str:
        """Format as YYYY, YYYY-MM or YYYY-MM-DD."""
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
            if self.day is not None:
                text += f"-{self.day:02d}"
        return text


@dataclass(frozen=True)
class CslDate:
    """A CSL date field value (single date, range, or textual form)."""

    start: Optional[DateParts] = None
    end: Optional[DateParts] = None
    raw: Optional[str] = None
    edtf: Optional[str] = None
    literal: Optional[str] = None
    season: Optional[Union[str, int]] = None
    circa: Optional[Union[str, int, bool]] = None
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if self.end is not None and self.start is None:
            raise ValueError("a date range needs a start")
        if self.start is None and not (self.raw or self.edtf or self.literal):
            raise ValueError("unknown date format")

    @property
    def is_range(self) -> bool:
        return self.end is not None

    @property
    def is_structured(self) -> bool:
        """True when the date is given as date-parts."""
        return self.start is not None

    def to_csl(self) -> dict[str, Any]:
        """Convert to CSL JSON format."""
        result: dict[str, Any] = {}
        if self.start is not None:
            parts = [self.start.to_csl()]
            if self.end is not None:
                parts.append(self.end.to_csl())
            result["date-parts"] = parts
        if self.season is not None:
            result["season"] = self.season
        if self.circa is not None:
            result["circa"] = self.circa
        if self.literal is not None:
            result["literal"] = self.literal
        if self.raw is not None:
            result["raw"] = self.raw
        if self.edtf is not None:
            result["edtf"] = self.edtf
        result.update(self.extra)
        return result

    def __str__(self) -> str:
        if self.start is not None:
            if self.end is not None:
                return f"{self.start}/{self.end}"
            return str(self.start)
        return self.edtf or self.raw or self.literal or ""


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid date part {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"invalid date part {value!r}")


def date_parts_from_csl(parts: Any) -> Optional[DateParts]:
    """Build DateParts from one inner date-parts array.

    Returns None for an empty array, which some exporters emit for
    unknown dates.
    """
    if not isinstance(parts, list):
        raise ValueError("date-parts entries must be arrays")
    # Exporters pad unknown parts with "" or null
    while parts and parts[-1] in ("", None):
        parts = parts[:-1]
    if not parts:
        return None
    if len(parts) > 3:
        raise ValueError(f"too many date parts: {parts!r}")
    numbers = [_to_int(p) for p in parts]
    return DateParts(*numbers)


def date_from_csl(data: Any) -> CslDate:
    """Build a CslDate from a CSL-JSON date object.

    Raises:
        ValueError: If the object is not a mapping or no date form is usable
    """
    if not isinstance(data, dict):
        raise ValueError("a date must be a JSON object")

    start = end = None
    raw_parts = data.get("date-parts")
    if raw_parts is not None:
        if not isinstance(raw_parts, list) or len(raw_parts) > 2:
            raise ValueError("date-parts must hold one date or a two-date range")
        parsed = [date_parts_from_csl(p) for p in raw_parts]
        parsed = [p for p in parsed if p is not None]
        if parsed:
            start = parsed[0]
        if len(parsed) == 2:
            end = parsed[1]

    return CslDate(
        start=start,
        end=end,
        raw=data.get("raw"),
        edtf=data.get("edtf"),
        literal=data.get("literal"),
        season=data.get("season"),
        circa=data.get("circa"),
        extra={k: v for k, v in data.items() if k not in DATE_KEYS},
    )
