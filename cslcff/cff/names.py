"""CFF author/editor names.

CFF distinguishes persons (split name parts) from entities (organisations,
conferences, or anyone cited by a single name). Both carry the same contact
metadata (orcid, email, address, ...) which is kept in ``meta``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Contact keys shared by persons and entities, in emission order
META_FIELD_ORDER = (
    "alias",
    "address",
    "city",
    "region",
    "post-code",
    "country",
    "tel",
    "fax",
    "email",
    "orcid",
    "website",
)

PERSON_FIELD_ORDER = (
    "family-names",
    "given-names",
    "name-particle",
    "name-suffix",
    "affiliation",
) + META_FIELD_ORDER

ENTITY_FIELD_ORDER = ("name", "date-start", "date-end") + META_FIELD_ORDER

_PERSON_ATTRS = {
    "family-names": "family_names",
    "given-names": "given_names",
    "name-particle": "name_particle",
    "name-suffix": "name_suffix",
    "affiliation": "affiliation",
}
_ENTITY_ATTRS = {"name": "name", "date-start": "date_start", "date-end": "date_end"}


def _ordered(values: dict[str, Any], order: tuple[str, ...]) -> dict[str, Any]:
    """Order keys by the table, unknown keys after in their current order."""
    result = {key: values[key] for key in order if key in values}
    result.update((k, v) for k, v in values.items() if k not in result)
    return result


@dataclass(frozen=True)
class CffPerson:
    """A person, e.g. an author of a referenced work."""

    family_names: Optional[str] = None
    given_names: Optional[str] = None
    name_particle: Optional[str] = None
    name_suffix: Optional[str] = None
    affiliation: Optional[str] = None
    meta: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_cff(self) -> dict[str, Any]:
        """Convert to a CFF mapping in schema order."""
        values = {
            key: getattr(self, attr)
            for key, attr in _PERSON_ATTRS.items()
            if getattr(self, attr) is not None
        }
        values.update(self.meta)
        return _ordered(values, PERSON_FIELD_ORDER)

    def __str__(self) -> str:
        family = " ".join(p for p in (self.name_particle, self.family_names) if p)
        if family and self.given_names:
            return f"{family}, {self.given_names}"
        return family or self.given_names or ""


@dataclass(frozen=True)
class CffEntity:
    """An organisation, event, or other non-person name."""

    name: str
    date_start: Optional[Any] = None
    date_end: Optional[Any] = None
    meta: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("an entity needs a name")

    def to_cff(self) -> dict[str, Any]:
        """Convert to a CFF mapping in schema order."""
        values = {
            key: getattr(self, attr)
            for key, attr in _ENTITY_ATTRS.items()
            if getattr(self, attr) is not None
        }
        values.update(self.meta)
        return _ordered(values, ENTITY_FIELD_ORDER)

    def __str__(self) -> str:
        return self.name


CffName = Union[CffPerson, CffEntity]

# Placeholder author for works whose authors are unknown
ANONYMOUS = CffEntity(name="anonymous")


def _text(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def name_from_cff(data: Any) -> CffName:
    """Build a person or entity from a CFF name mapping.

    A mapping with ``name`` and no person parts is an entity; anything else
    is a person.
    """
    if not isinstance(data, dict):
        raise ValueError("a name must be a mapping")

    if "name" in data and not any(key in data for key in _PERSON_ATTRS):
        return CffEntity(
            name=_text(data, "name") or "",
            date_start=data.get("date-start"),
            date_end=data.get("date-end"),
            meta={k: v for k, v in data.items() if k not in _ENTITY_ATTRS},
        )

    return CffPerson(
        **{attr: _text(data, key) for key, attr in _PERSON_ATTRS.items()},
        meta={k: v for k, v in data.items() if k not in _PERSON_ATTRS},
    )
