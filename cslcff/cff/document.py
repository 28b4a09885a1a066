"""CFF documents (the contents of a CITATION.cff file)."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional, Union

from cslcff.cff.fields import CffField, decode_mapping, encode_mapping, sequence_of
from cslcff.cff.identifiers import Identifier
from cslcff.cff.names import CffName
from cslcff.cff.references import Reference, reference_from_cff

DOCUMENT_FIELDS: tuple[CffField, ...] = (
    CffField("cff_version", "cff-version"),
    CffField("message", "message"),
    CffField("title", "title"),
    CffField("type", "type"),
    CffField("version", "version", "ordinary"),
    CffField("commit", "commit"),
    CffField("date_released", "date-released", "date"),
    CffField("abstract", "abstract"),
    CffField("keywords", "keywords", "strings"),
    CffField("repository", "repository"),
    CffField("repository_artifact", "repository-artifact"),
    CffField("repository_code", "repository-code"),
    CffField("license", "license", "license"),
    CffField("license_url", "license-url"),
    CffField("authors", "authors", "names"),
    CffField("contact", "contact", "names"),
    CffField("doi", "doi"),
    CffField("identifiers", "identifiers", "identifiers"),
    CffField("preferred_citation", "preferred-citation", "reference"),
    CffField("references", "references", "references"),
)

DOCUMENT_FIELD_ORDER = tuple(f.key for f in DOCUMENT_FIELDS)

_DOCUMENT_DECODERS = {
    "reference": reference_from_cff,
    "references": sequence_of(reference_from_cff),
}

# Entity authors (organisations) were introduced in CFF 1.1.0
_ENTITY_AUTHORS_SINCE = (1, 1, 0)


def _version_tuple(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", version)[:3])


def supports_entity_authors(cff_version: str) -> bool:
    """Whether references of this CFF version may list entity authors."""
    parts = _version_tuple(cff_version)
    if not parts:
        # Unparseable versions are treated as current
        return True
    return parts >= _ENTITY_AUTHORS_SINCE


@dataclass(frozen=True)
class CffDocument:
    """A parsed CITATION.cff document.

    ``references`` is always a tuple, empty when the file has none, so new
    entries can be appended without a None check.
    """

    cff_version: str
    message: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    version: Optional[Union[str, int, float]] = None
    commit: Optional[str] = None
    date_released: Optional[datetime.date] = None
    abstract: Optional[str] = None
    keywords: tuple[str, ...] = ()
    repository: Optional[str] = None
    repository_artifact: Optional[str] = None
    repository_code: Optional[str] = None
    license: Optional[Union[str, tuple[str, ...]]] = None
    license_url: Optional[str] = None
    authors: tuple[CffName, ...] = ()
    contact: tuple[CffName, ...] = ()
    doi: Optional[str] = None
    identifiers: tuple[Identifier, ...] = ()
    preferred_citation: Optional[Reference] = None
    references: tuple[Reference, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.cff_version:
            raise ValueError("missing required field 'cff-version'")
        if not isinstance(self.references, tuple):
            object.__setattr__(self, "references", tuple(self.references))

    def with_references(self, references: Iterable[Reference]) -> "CffDocument":
        """Return a copy whose reference list is exactly ``references``."""
        return replace(self, references=tuple(references))

    def to_cff(self) -> dict[str, Any]:
        """Convert to a CFF mapping in schema order."""
        return encode_mapping(self, DOCUMENT_FIELDS, self.extra)


def document_from_cff(data: Any) -> CffDocument:
    """Build a CffDocument from the top-level mapping of a CFF file.

    Raises:
        ValueError: If the mapping lacks ``cff-version`` or a field is unusable
    """
    if not isinstance(data, dict):
        raise ValueError(
            f"a CFF document must be a mapping, got {type(data).__name__}"
        )
    if data.get("cff-version") in (None, ""):
        raise ValueError("missing required field 'cff-version'")

    values, extra = decode_mapping(data, DOCUMENT_FIELDS, _DOCUMENT_DECODERS)
    return CffDocument(**values, extra=extra)
