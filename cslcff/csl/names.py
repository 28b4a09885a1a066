"""CSL name values.

A CSL name is either a person (family/given parts) or a literal name used
for institutions and for people whose name should not be split. The two
forms never mix: an entry with `literal` must not also carry family/given
parts. Both variants are frozen dataclasses that enforce this on creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Keys of a person name, in CSL-JSON order
PERSON_KEYS = (
    "family",
    "given",
    "dropping-particle",
    "non-dropping-particle",
    "suffix",
)


@dataclass(frozen=True)
class PersonName:
    """A person's name split into its parts.

    People using mononyms may have just the family (or just the given)
    part.
    """

    family: Optional[str] = None
    given: Optional[str] = None
    dropping_particle: Optional[str] = None
    non_dropping_particle: Optional[str] = None
    suffix: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.family and not self.given:
            raise ValueError("a person name needs a family or a given part")

    def to_csl(self) -> dict[str, Any]:
        """Convert to CSL JSON format."""
        result: dict[str, Any] = {}
        if self.family is not None:
            result["family"] = self.family
        if self.given is not None:
            result["given"] = self.given
        if self.dropping_particle is not None:
            result["dropping-particle"] = self.dropping_particle
        if self.non_dropping_particle is not None:
            result["non-dropping-particle"] = self.non_dropping_particle
        if self.suffix is not None:
            result["suffix"] = self.suffix
        result.update(self.extra)
        return result

    def __str__(self) -> str:
        """Format as "Family, Given"."""
        family = " ".join(
            part for part in (self.non_dropping_particle, self.family) if part
        )
        if self.given and family:
            return f"{family}, {self.given}"
        return family or self.given or ""


@dataclass(frozen=True)
class LiteralName:
    """An institution, or a full name that must be kept as written."""

    literal: str
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.literal:
            raise ValueError("a literal name must not be empty")

    def to_csl(self) -> dict[str, Any]:
        """Convert to CSL JSON format."""
        return {"literal": self.literal, **self.extra}

    def __str__(self) -> str:
        return self.literal


Name = Union[PersonName, LiteralName]


def _text(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def name_from_csl(data: Any) -> Name:
    """Build a name from a CSL-JSON name object.

    Raises:
        ValueError: If the object is not a mapping, mixes literal and
            person parts, or carries no name at all
    """
    if not isinstance(data, dict):
        raise ValueError("a name must be a JSON object")

    literal = _text(data, "literal")
    has_parts = data.get("family") is not None or data.get("given") is not None

    if literal is not None and has_parts:
        raise ValueError("a name cannot have both 'literal' and family/given parts")

    if literal is not None:
        extra = {k: v for k, v in data.items() if k != "literal"}
        return LiteralName(literal=literal, extra=extra)

    extra = {k: v for k, v in data.items() if k not in PERSON_KEYS}
    return PersonName(
        family=_text(data, "family"),
        given=_text(data, "given"),
        dropping_particle=_text(data, "dropping-particle"),
        non_dropping_particle=_text(data, "non-dropping-particle"),
        suffix=_text(data, "suffix"),
        extra=extra,
    )
