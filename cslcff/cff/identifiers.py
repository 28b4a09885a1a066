"""CFF identifiers (DOIs, URLs, Software Heritage IDs, other)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

IDENTIFIER_TYPES = ("doi", "url", "swh", "other")


@dataclass(frozen=True)
class Identifier:
    type: str
    value: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in IDENTIFIER_TYPES:
            raise ValueError(
                f"identifier type must be one of {', '.join(IDENTIFIER_TYPES)}, "
                f"got {self.type!r}"
            )

    def to_cff(self) -> dict[str, Any]:
        result = {"type": self.type, "value": self.value}
        if self.description is not None:
            result["description"] = self.description
        return result


def identifier_from_cff(data: Any) -> Identifier:
    if not isinstance(data, dict):
        raise ValueError("an identifier must be a mapping")
    if data.get("value") in (None, ""):
        raise ValueError("an identifier needs a value")
    description = data.get("description")
    return Identifier(
        type=str(data.get("type", "")),
        value=str(data["value"]),
        description=None if description is None else str(description),
    )
