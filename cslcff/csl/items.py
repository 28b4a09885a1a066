"""CSL items (bibliographic records).

An item carries the details of one bibliographic resource. The fields this
package understands are listed in CSL_FIELDS; every other key is kept in
``CslItem.extra`` untouched, so a document round-trips through
parse/serialize without losing data.

Several fields accept alternative spellings (``DOI``/``doi``,
``author``/``authors``, ...). The item remembers which spelling and which
key order the source used and reproduces both on output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from cslcff.core.types import OpenStrEnum, OrdinaryValue
from cslcff.csl.dates import CslDate, date_from_csl
from cslcff.csl.names import Name, name_from_csl


class ItemType(OpenStrEnum):
    """Types of bibliographic resources (CSL 1.0.2 plus CSL-M additions)."""

    ARTICLE = "article"
    ARTICLE_JOURNAL = "article-journal"
    ARTICLE_MAGAZINE = "article-magazine"
    ARTICLE_NEWSPAPER = "article-newspaper"
    BILL = "bill"
    BOOK = "book"
    BROADCAST = "broadcast"
    CHAPTER = "chapter"
    CLASSIC = "classic"
    COLLECTION = "collection"
    DATASET = "dataset"
    DOCUMENT = "document"
    ENTRY = "entry"
    ENTRY_DICTIONARY = "entry-dictionary"
    ENTRY_ENCYCLOPEDIA = "entry-encyclopedia"
    EVENT = "event"
    FIGURE = "figure"
    GRAPHIC = "graphic"
    HEARING = "hearing"
    INTERVIEW = "interview"
    LEGAL_CASE = "legal_case"
    LEGISLATION = "legislation"
    MANUSCRIPT = "manuscript"
    MAP = "map"
    MOTION_PICTURE = "motion_picture"
    MUSICAL_SCORE = "musical_score"
    PAMPHLET = "pamphlet"
    PAPER_CONFERENCE = "paper-conference"
    PATENT = "patent"
    PERFORMANCE = "performance"
    PERIODICAL = "periodical"
    PERSONAL_COMMUNICATION = "personal_communication"
    POST = "post"
    POST_WEBLOG = "post-weblog"
    REGULATION = "regulation"
    REPORT = "report"
    REVIEW = "review"
    REVIEW_BOOK = "review-book"
    SOFTWARE = "software"
    SONG = "song"
    SPEECH = "speech"
    STANDARD = "standard"
    THESIS = "thesis"
    TREATY = "treaty"
    WEBPAGE = "webpage"
    # CSL-M
    GAZETTE = "gazette"
    VIDEO = "video"
    LEGAL_COMMENTARY = "legal-commentary"


@dataclass(frozen=True)
class CslField:
    """How one item attribute is spelled and decoded in CSL-JSON."""

    attr: str
    key: str
    aliases: tuple[str, ...] = ()
    kind: str = "text"

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.key,) + self.aliases


# Modeled fields in canonical output order
CSL_FIELDS: tuple[CslField, ...] = (
    CslField("id", "id", kind="ordinary"),
    CslField("type", "type", kind="type"),
    CslField("title", "title"),
    CslField("title_short", "title-short", ("shortTitle",)),
    CslField("authors", "author", ("authors",), kind="names"),
    CslField("contributors", "contributor", kind="names"),
    CslField("editors", "editor", kind="names"),
    CslField("abstract", "abstract"),
    CslField("collection_title", "collection-title"),
    CslField("container_title", "container-title", ("container_title",)),
    CslField("journal", "journalAbbreviation", ("journal",)),
    CslField("publisher", "publisher"),
    CslField("edition", "edition", kind="ordinary"),
    CslField("version", "version"),
    CslField("medium", "medium"),
    CslField("section", "section"),
    CslField("volume", "volume", kind="ordinary"),
    CslField("issue", "issue", kind="ordinary"),
    CslField("page", "page", kind="ordinary"),
    CslField("page_first", "page-first", ("start",), kind="ordinary"),
    CslField("page_last", "page-last", ("end",), kind="ordinary"),
    CslField("issued", "issued", ("issue-date",), kind="date"),
    CslField("accessed", "accessed", ("date-accessed",), kind="date"),
    CslField("doi", "DOI", ("doi",)),
    CslField("url", "URL", ("url",)),
    CslField("issn", "ISSN", ("issn",)),
    CslField("eissn", "EISSN"),
    CslField("issnl", "ISSNL"),
    CslField("isbn", "ISBN", ("isbn",)),
    CslField("pmcid", "PMCID", ("pmcid",)),
    CslField("languages", "language", ("languages",), kind="languages"),
    CslField("keyword", "keyword", ("keywords",)),
    CslField("note", "note", ("notes",)),
    CslField("rights", "rights", ("copyright", "license")),
    CslField("source", "source", ("database",)),
)

FIELDS_BY_ATTR: dict[str, CslField] = {f.attr: f for f in CSL_FIELDS}
FIELDS_BY_KEY: dict[str, CslField] = {k: f for f in CSL_FIELDS for k in f.keys}


@dataclass(frozen=True)
class CslItem:
    """A single CSL-JSON record.

    Only ``type`` is required. Sequences are tuples and ``extra`` holds
    every key not modeled here, in source order.
    """

    type: ItemType
    id: Optional[OrdinaryValue] = None
    title: Optional[str] = None
    title_short: Optional[str] = None
    authors: tuple[Name, ...] = ()
    contributors: tuple[Name, ...] = ()
    editors: tuple[Name, ...] = ()
    abstract: Optional[str] = None
    collection_title: Optional[str] = None
    container_title: Optional[str] = None
    journal: Optional[str] = None
    publisher: Optional[str] = None
    edition: Optional[OrdinaryValue] = None
    version: Optional[str] = None
    medium: Optional[str] = None
    section: Optional[str] = None
    volume: Optional[OrdinaryValue] = None
    issue: Optional[OrdinaryValue] = None
    page: Optional[OrdinaryValue] = None
    page_first: Optional[OrdinaryValue] = None
    page_last: Optional[OrdinaryValue] = None
    issued: Optional[CslDate] = None
    accessed: Optional[CslDate] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    issn: Optional[str] = None
    eissn: Optional[str] = None
    issnl: Optional[str] = None
    isbn: Optional[str] = None
    pmcid: Optional[str] = None
    languages: tuple[str, ...] = ()
    keyword: Optional[str] = None
    note: Optional[str] = None
    rights: Optional[str] = None
    source: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, hash=False)
    # Source spelling and order of keys; formatting only, not compared
    key_names: dict[str, str] = field(default_factory=dict, compare=False, repr=False)
    key_order: tuple[str, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.type, ItemType):
            object.__setattr__(self, "type", ItemType(self.type))

    @property
    def all_authors(self) -> tuple[Name, ...]:
        """Authors followed by contributors."""
        return self.authors + self.contributors

    @property
    def date_accessed(self) -> Optional[CslDate]:
        return self.accessed

    @property
    def issue_date(self) -> Optional[CslDate]:
        return self.issued

    @property
    def start(self) -> Optional[OrdinaryValue]:
        """First page, from page-first or the start of the page range."""
        if self.page_first is not None:
            return page_value(self.page_first)
        return split_page_range(self.page)[0]

    @property
    def end(self) -> Optional[OrdinaryValue]:
        """Last page, from page-last or the end of the page range."""
        if self.page_last is not None:
            return page_value(self.page_last)
        return split_page_range(self.page)[1]

    def to_csl(self) -> dict[str, Any]:
        """Convert to CSL JSON format, keeping the source key order."""
        entries: dict[str, Any] = {}
        for entry in CSL_FIELDS:
            value = getattr(self, entry.attr)
            if value is None or value == ():
                continue
            key = self.key_names.get(entry.attr, entry.key)
            entries[key] = _encode(entry, key, value)
        entries.update(self.extra)

        ordered: dict[str, Any] = {}
        for key in self.key_order:
            if key in entries:
                ordered[key] = entries.pop(key)
        ordered.update(entries)
        return ordered


# =============================================================================
# Pages
# =============================================================================

_PAGE_RANGE = re.compile(r"^\s*(.+?)\s*[-–—]+\s*(.+?)\s*$")


def page_value(value: OrdinaryValue) -> OrdinaryValue:
    """Normalise a page number: digits become ints, anything else stays text."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        return int(text) if text.isdigit() else text
    return value


def split_page_range(
    page: Optional[OrdinaryValue],
) -> tuple[Optional[OrdinaryValue], Optional[OrdinaryValue]]:
    """Split a CSL page value into (start, end).

    "100-110" gives (100, 110), a single page gives it twice, and page
    lists such as "1-5, 9" use their first range.
    """
    if page is None or page == "":
        return None, None
    if not isinstance(page, str):
        number = page_value(page)
        return number, number

    first = re.split(r"[,&]", page, maxsplit=1)[0]
    match = _PAGE_RANGE.match(first)
    if match:
        return page_value(match.group(1)), page_value(match.group(2))
    number = page_value(first)
    return number, number


def is_page_list(page: Optional[OrdinaryValue]) -> bool:
    """True when a page value holds more than one range."""
    return isinstance(page, str) and bool(re.search(r"[,&]", page))


# =============================================================================
# Decoding / encoding
# =============================================================================


def _decode_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string, got {type(value).__name__}")


def _decode_ordinary(value: Any) -> OrdinaryValue:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"expected a string or number, got {type(value).__name__}")
    return value


def _decode_names(value: Any) -> tuple[Name, ...]:
    if not isinstance(value, list):
        raise ValueError("expected an array of names")
    names = []
    for index, entry in enumerate(value):
        try:
            names.append(name_from_csl(entry))
        except ValueError as e:
            raise ValueError(f"[{index}] {e}") from e
    return tuple(names)


def _decode_languages(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ValueError("expected a language tag or an array of tags")


def _decode(entry: CslField, value: Any) -> Any:
    if entry.kind == "type":
        if not isinstance(value, str) or not value:
            raise ValueError("expected a non-empty item type string")
        return ItemType(value)
    if entry.kind == "ordinary":
        return _decode_ordinary(value)
    if entry.kind == "names":
        return _decode_names(value)
    if entry.kind == "date":
        return date_from_csl(value)
    if entry.kind == "languages":
        return _decode_languages(value)
    return _decode_text(value)


def _encode(entry: CslField, key: str, value: Any) -> Any:
    if entry.kind == "type":
        return value.value
    if entry.kind == "names":
        return [name.to_csl() for name in value]
    if entry.kind == "date":
        return value.to_csl()
    if entry.kind == "languages":
        # CSL's own "language" is a single tag
        if key == "language" and len(value) == 1:
            return value[0]
        return list(value)
    return value


def item_from_csl(data: Any) -> CslItem:
    """Build a CslItem from one decoded CSL-JSON object.

    Raises:
        ValueError: If the object is not a mapping, lacks ``type``, or a
            modeled field holds an unusable value
    """
    if not isinstance(data, dict):
        raise ValueError("an item must be a JSON object")
    if data.get("type") in (None, ""):
        raise ValueError("missing required field 'type'")

    values: dict[str, Any] = {}
    key_names: dict[str, str] = {}
    extra: dict[str, Any] = {}

    for key, value in data.items():
        entry = FIELDS_BY_KEY.get(key)
        # Nulls and second spellings of a field are kept verbatim
        if entry is None or value is None or entry.attr in values:
            extra[key] = value
            continue
        try:
            values[entry.attr] = _decode(entry, value)
        except ValueError as e:
            raise ValueError(f"{key}: {e}") from e
        key_names[entry.attr] = key

    return CslItem(
        **values,
        extra=extra,
        key_names=key_names,
        key_order=tuple(data.keys()),
    )

