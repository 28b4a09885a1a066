"""
Shared type definitions for cslcff.

Both citation schemas keep growing their vocabularies (CSL item types, CFF
reference types), so the enums modelling them are open: known values are
regular members, unknown strings become preserved pseudo-members instead of
raising ValueError.

    ItemType("article-journal") is ItemType.ARTICLE_JOURNAL   # True
    ItemType("preprint").value                               # "preprint"
    ItemType("preprint").is_known                            # False
"""

from __future__ import annotations

from enum import Enum
from typing import Union

OrdinaryValue = Union[str, int, float]
"""CSL "ordinary" field value: a string or a number, kept as given."""


class OpenStrEnum(str, Enum):
    """String enum that accepts and preserves unrecognised values."""

    @classmethod
    def _missing_(cls, value: object) -> "OpenStrEnum | None":
        if not isinstance(value, str) or not value:
            return None
        member = str.__new__(cls, value)
        member._name_ = value
        member._value_ = value
        # Cache so repeated lookups return the same pseudo-member
        return cls._value2member_map_.setdefault(value, member)

    @property
    def is_known(self) -> bool:
        """True for values defined by the schema, False for pass-through ones."""
        return type(self)._member_map_.get(self._name_) is self
