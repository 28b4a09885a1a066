"""CFF reference entries."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Optional

from cslcff.cff.fields import CffField, decode_mapping, encode_mapping
from cslcff.cff.identifiers import Identifier
from cslcff.cff.names import CffName
from cslcff.core.types import OpenStrEnum, OrdinaryValue


class RefType(OpenStrEnum):
    """Reference types defined by CFF 1.2.0."""

    ART = "art"
    ARTICLE = "article"
    AUDIOVISUAL = "audiovisual"
    BILL = "bill"
    BLOG = "blog"
    BOOK = "book"
    CATALOGUE = "catalogue"
    CONFERENCE = "conference"
    CONFERENCE_PAPER = "conference-paper"
    DATA = "data"
    DATABASE = "database"
    DICTIONARY = "dictionary"
    EDITED_WORK = "edited-work"
    ENCYCLOPEDIA = "encyclopedia"
    FILM_BROADCAST = "film-broadcast"
    GENERIC = "generic"
    GOVERNMENT_DOCUMENT = "government-document"
    GRANT = "grant"
    HEARING = "hearing"
    HISTORICAL_WORK = "historical-work"
    LEGAL_CASE = "legal-case"
    LEGAL_RULE = "legal-rule"
    MAGAZINE_ARTICLE = "magazine-article"
    MANUAL = "manual"
    MAP = "map"
    MULTIMEDIA = "multimedia"
    MUSIC = "music"
    NEWSPAPER_ARTICLE = "newspaper-article"
    PAMPHLET = "pamphlet"
    PATENT = "patent"
    PERSONAL_COMMUNICATION = "personal-communication"
    PROCEEDINGS = "proceedings"
    REPORT = "report"
    SERIAL = "serial"
    SLIDES = "slides"
    SOFTWARE = "software"
    SOFTWARE_CODE = "software-code"
    SOFTWARE_CONTAINER = "software-container"
    SOFTWARE_EXECUTABLE = "software-executable"
    SOFTWARE_VIRTUAL_MACHINE = "software-virtual-machine"
    SOUND_RECORDING = "sound-recording"
    STANDARD = "standard"
    STATUTE = "statute"
    THESIS = "thesis"
    UNPUBLISHED = "unpublished"
    VIDEO = "video"
    WEBSITE = "website"


REFERENCE_FIELDS: tuple[CffField, ...] = (
    CffField("type", "type", "reftype"),
    CffField("authors", "authors", "names"),
    CffField("title", "title"),
    CffField("abbreviation", "abbreviation"),
    CffField("abstract", "abstract"),
    CffField("collection_title", "collection-title"),
    CffField("copyright", "copyright"),
    CffField("database", "database"),
    CffField("date_accessed", "date-accessed", "date"),
    CffField("doi", "doi"),
    CffField("edition", "edition", "ordinary"),
    CffField("editors", "editors", "names"),
    CffField("start", "start", "ordinary"),
    CffField("end", "end", "ordinary"),
    CffField("identifiers", "identifiers", "identifiers"),
    CffField("isbn", "isbn"),
    CffField("issn", "issn"),
    CffField("issue", "issue", "ordinary"),
    CffField("issue_date", "issue-date"),
    CffField("journal", "journal"),
    CffField("keywords", "keywords", "strings"),
    CffField("languages", "languages", "strings"),
    CffField("medium", "medium"),
    CffField("month", "month", "ordinary"),
    CffField("notes", "notes"),
    CffField("pmcid", "pmcid"),
    CffField("publisher", "publisher", "name"),
    CffField("section", "section", "ordinary"),
    CffField("url", "url"),
    CffField("version", "version", "ordinary"),
    CffField("volume", "volume", "ordinary"),
    CffField("year", "year", "ordinary"),
)

REFERENCE_FIELD_ORDER = tuple(f.key for f in REFERENCE_FIELDS)


@dataclass(frozen=True)
class Reference:
    """One entry of a CFF ``references`` list (or ``preferred-citation``)."""

    type: RefType
    authors: tuple[CffName, ...] = ()
    title: Optional[str] = None
    abbreviation: Optional[str] = None
    abstract: Optional[str] = None
    collection_title: Optional[str] = None
    copyright: Optional[str] = None
    database: Optional[str] = None
    date_accessed: Optional[datetime.date] = None
    doi: Optional[str] = None
    edition: Optional[OrdinaryValue] = None
    editors: tuple[CffName, ...] = ()
    start: Optional[OrdinaryValue] = None
    end: Optional[OrdinaryValue] = None
    identifiers: tuple[Identifier, ...] = ()
    isbn: Optional[str] = None
    issn: Optional[str] = None
    issue: Optional[OrdinaryValue] = None
    issue_date: Optional[str] = None
    journal: Optional[str] = None
    keywords: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    medium: Optional[str] = None
    month: Optional[OrdinaryValue] = None
    notes: Optional[str] = None
    pmcid: Optional[str] = None
    publisher: Optional[CffName] = None
    section: Optional[OrdinaryValue] = None
    url: Optional[str] = None
    version: Optional[OrdinaryValue] = None
    volume: Optional[OrdinaryValue] = None
    year: Optional[OrdinaryValue] = None
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.type, RefType):
            object.__setattr__(self, "type", RefType(self.type))

    def to_cff(self) -> dict[str, Any]:
        """Convert to a CFF mapping in schema order."""
        return encode_mapping(self, REFERENCE_FIELDS, self.extra)


def _reftype(value: Any) -> RefType:
    if not isinstance(value, str) or not value:
        raise ValueError("expected a non-empty reference type string")
    return RefType(value)


def reference_from_cff(data: Any) -> Reference:
    """Build a Reference from a CFF mapping.

    Raises:
        ValueError: If the mapping lacks ``type`` or a field is unusable
    """
    if not isinstance(data, dict):
        raise ValueError("a reference must be a mapping")
    if data.get("type") in (None, ""):
        raise ValueError("missing required field 'type'")

    values, extra = decode_mapping(data, REFERENCE_FIELDS, {"reftype": _reftype})
    return Reference(**values, extra=extra)
