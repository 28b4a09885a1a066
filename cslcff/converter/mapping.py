"""
Mapping of CSL items onto CFF reference entries.

Most fields are copied one to one. The paths that lose information are:

- ``dropping-particle`` of a person name, appended to given-names
- literal names when the target CFF version has no entity authors
- date ranges (the start is kept) and raw/EDTF/literal dates (dropped)
- accessed dates that lack a month or day (dropped)
- page lists such as "1-5, 9" (the first range is kept)
- the fields in DROPPED_CSL_FIELDS and every key the CSL model does not know

Each of them produces a LossyMappingWarning. Warnings are logged and returned
next to the converted references; they never stop a conversion.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional

from cslcff.cff.document import supports_entity_authors
from cslcff.cff.identifiers import Identifier
from cslcff.cff.names import ANONYMOUS, CffEntity, CffName, CffPerson
from cslcff.cff.references import Reference, RefType
from cslcff.core.config import ConverterConfig
from cslcff.core.exceptions import LossyMappingWarning
from cslcff.core.logging import get_logger
from cslcff.csl.dates import CslDate, DateParts
from cslcff.csl.items import CslItem, ItemType, is_page_list
from cslcff.csl.names import LiteralName, Name

logger = get_logger(__name__)

# CSL item types with a CFF counterpart; used when map_types is enabled
CSL_TO_CFF_TYPES: dict[ItemType, RefType] = {
    ItemType.ARTICLE: RefType.ARTICLE,
    ItemType.ARTICLE_JOURNAL: RefType.ARTICLE,
    ItemType.ARTICLE_MAGAZINE: RefType.MAGAZINE_ARTICLE,
    ItemType.ARTICLE_NEWSPAPER: RefType.NEWSPAPER_ARTICLE,
    ItemType.BILL: RefType.BILL,
    ItemType.BOOK: RefType.BOOK,
    ItemType.BROADCAST: RefType.GENERIC,
    ItemType.CHAPTER: RefType.BOOK,
    ItemType.CLASSIC: RefType.GENERIC,
    ItemType.COLLECTION: RefType.GENERIC,
    ItemType.DATASET: RefType.DATA,
    ItemType.DOCUMENT: RefType.GENERIC,
    ItemType.ENTRY: RefType.GENERIC,
    ItemType.ENTRY_DICTIONARY: RefType.DICTIONARY,
    ItemType.ENTRY_ENCYCLOPEDIA: RefType.ENCYCLOPEDIA,
    ItemType.EVENT: RefType.CONFERENCE,
    ItemType.FIGURE: RefType.GENERIC,
    ItemType.GRAPHIC: RefType.GENERIC,
    ItemType.HEARING: RefType.HEARING,
    ItemType.INTERVIEW: RefType.GENERIC,
    ItemType.LEGAL_CASE: RefType.LEGAL_CASE,
    ItemType.LEGISLATION: RefType.GOVERNMENT_DOCUMENT,
    ItemType.MANUSCRIPT: RefType.GENERIC,
    ItemType.MAP: RefType.MAP,
    ItemType.MOTION_PICTURE: RefType.VIDEO,
    ItemType.MUSICAL_SCORE: RefType.MUSIC,
    ItemType.PAMPHLET: RefType.PAMPHLET,
    ItemType.PAPER_CONFERENCE: RefType.CONFERENCE_PAPER,
    ItemType.PATENT: RefType.PATENT,
    ItemType.PERFORMANCE: RefType.GENERIC,
    ItemType.PERIODICAL: RefType.GENERIC,
    ItemType.PERSONAL_COMMUNICATION: RefType.PERSONAL_COMMUNICATION,
    ItemType.POST: RefType.BLOG,
    ItemType.POST_WEBLOG: RefType.BLOG,
    ItemType.REGULATION: RefType.STATUTE,
    ItemType.REPORT: RefType.REPORT,
    ItemType.REVIEW: RefType.GENERIC,
    ItemType.REVIEW_BOOK: RefType.GENERIC,
    ItemType.SOFTWARE: RefType.SOFTWARE,
    ItemType.SONG: RefType.MUSIC,
    ItemType.SPEECH: RefType.SOUND_RECORDING,
    ItemType.STANDARD: RefType.STANDARD,
    ItemType.THESIS: RefType.THESIS,
    ItemType.TREATY: RefType.GOVERNMENT_DOCUMENT,
    ItemType.WEBPAGE: RefType.WEBSITE,
    ItemType.GAZETTE: RefType.GENERIC,
    ItemType.VIDEO: RefType.VIDEO,
    ItemType.LEGAL_COMMENTARY: RefType.GENERIC,
}

# Modeled CSL fields that never reach the CFF output
DROPPED_CSL_FIELDS: dict[str, str] = {
    "id": "CFF references have no citation key",
    "container-title": "dropped when collection-title is also present",
}


class _Collector:
    """Accumulates warnings for one record."""

    def __init__(self, record_index: Optional[int], record_id: Optional[str]) -> None:
        self.record_index = record_index
        self.record_id = record_id
        self.warnings: list[LossyMappingWarning] = []

    def add(self, field: str, reason: str) -> None:
        self.warnings.append(
            LossyMappingWarning(field, reason, self.record_index, self.record_id)
        )


def convert_type(item_type: ItemType, map_types: bool = False) -> RefType:
    """CSL item type to CFF reference type.

    Without map_types the string is carried over unchanged.
    """
    if map_types and item_type in CSL_TO_CFF_TYPES:
        return CSL_TO_CFF_TYPES[item_type]
    return RefType(item_type.value)


def convert_name(
    name: Name, cff_version: str, field: str = "author"
) -> tuple[CffName, list[LossyMappingWarning]]:
    """Map one CSL name onto a CFF person or entity."""
    collector = _Collector(None, None)

    if isinstance(name, LiteralName):
        if supports_entity_authors(cff_version):
            converted: CffName = CffEntity(name=name.literal)
        else:
            converted = CffPerson(family_names=name.literal)
            collector.add(
                field,
                f"literal name written as family-names (CFF {cff_version} "
                "has no entity authors)",
            )
    else:
        given = name.given
        if name.dropping_particle:
            given = " ".join(p for p in (given, name.dropping_particle) if p)
            collector.add(
                f"{field}.dropping-particle",
                "appended to given-names, CFF has no slot for it",
            )
        converted = CffPerson(
            family_names=name.family,
            given_names=given,
            name_particle=name.non_dropping_particle,
            name_suffix=name.suffix,
        )

    for key in name.extra:
        collector.add(f"{field}.{key}", "no CFF equivalent; dropped")
    return converted, collector.warnings


def _convert_names(
    names: Iterable[Name], cff_version: str, field: str, collector: _Collector
) -> tuple[CffName, ...]:
    converted = []
    for index, name in enumerate(names):
        cff_name, warnings = convert_name(name, cff_version, f"{field}[{index}]")
        converted.append(cff_name)
        collector.warnings.extend(
            w.at(collector.record_index, collector.record_id) for w in warnings
        )
    return tuple(converted)


def _start_parts(
    date: CslDate, field: str, collector: _Collector
) -> Optional[DateParts]:
    if date.start is None:
        collector.add(field, f"cannot convert unstructured date {str(date)!r}")
        return None
    if date.is_range:
        collector.add(field, "date range reduced to its start")
    return date.start


def _issue_date(
    date: CslDate, collector: _Collector, field: str = "issued"
) -> tuple[Optional[str], Optional[int], Optional[int]]:
    """Return (issue-date string, year, month) for a CSL issued date."""
    parts = _start_parts(date, field, collector)
    if parts is None:
        return None, None, None
    return str(parts), parts.year, parts.month


def _date_accessed(
    date: CslDate, collector: _Collector, field: str = "accessed"
) -> Optional[datetime.date]:
    """CSL accessed date to a CFF date-accessed; only full dates survive."""
    parts = _start_parts(date, field, collector)
    if parts is None:
        return None
    if not parts.is_complete:
        collector.add(field, f"incomplete date {parts} cannot be a CFF date; dropped")
        return None
    try:
        return datetime.date(parts.year, parts.month, parts.day)
    except ValueError as e:
        collector.add(field, f"{parts} is not a calendar date ({e}); dropped")
        return None


def _keywords(keyword: Optional[str]) -> tuple[str, ...]:
    if not keyword:
        return ()
    return tuple(k.strip() for k in keyword.split(",") if k.strip())


def convert_item(
    item: CslItem,
    *,
    cff_version: Optional[str] = None,
    config: Optional[ConverterConfig] = None,
    record_index: Optional[int] = None,
) -> tuple[Reference, tuple[LossyMappingWarning, ...]]:
    """Map one CSL item onto a CFF reference entry.

    Args:
        item: Parsed CSL item
        cff_version: CFF version of the output; defaults to the configured one
        config: Converter settings
        record_index: Position of the item in its source array, for warnings

    Returns:
        The reference and the lossy-mapping warnings of this item
    """
    config = config or ConverterConfig()
    cff_version = cff_version or config.cff_version
    collector = _Collector(
        record_index, None if item.id is None else str(item.id)
    )

    authors = _convert_names(item.authors, cff_version, "author", collector)
    authors += _convert_names(item.contributors, cff_version, "contributor", collector)
    if not authors and config.anonymous_authors:
        authors = (ANONYMOUS,)
    editors = _convert_names(item.editors, cff_version, "editor", collector)

    issue_date = year = month = None
    if item.issued is not None:
        issue_date, year, month = _issue_date(item.issued, collector)
    date_accessed = None
    if item.accessed is not None:
        date_accessed = _date_accessed(item.accessed, collector)

    if is_page_list(item.page):
        collector.add("page", f"page list {item.page!r} reduced to its first range")

    collection_title = item.collection_title or item.container_title
    if item.collection_title and item.container_title:
        collector.add("container-title", DROPPED_CSL_FIELDS["container-title"])
    if item.id is not None:
        collector.add("id", DROPPED_CSL_FIELDS["id"])

    identifiers = []
    if item.eissn:
        identifiers.append(Identifier("other", item.eissn, "EISSN"))
    if item.issnl:
        identifiers.append(Identifier("other", item.issnl, "ISSNL"))

    for key, value in item.extra.items():
        if value is not None:
            collector.add(key, "no CFF equivalent; dropped")

    reference = Reference(
        type=convert_type(item.type, config.map_types),
        authors=authors,
        title=item.title,
        abbreviation=item.title_short,
        abstract=item.abstract,
        collection_title=collection_title,
        copyright=item.rights,
        database=item.source,
        date_accessed=date_accessed,
        doi=item.doi,
        edition=item.edition,
        editors=editors,
        start=item.start,
        end=item.end,
        identifiers=tuple(identifiers),
        isbn=item.isbn,
        issn=item.issn,
        issue=item.issue,
        issue_date=issue_date,
        journal=item.journal,
        keywords=_keywords(item.keyword),
        languages=item.languages,
        medium=item.medium,
        month=month,
        notes=item.note,
        pmcid=item.pmcid,
        publisher=CffEntity(name=item.publisher) if item.publisher else None,
        section=item.section,
        url=item.url,
        version=item.version,
        volume=item.volume,
        year=year,
    )

    for warning in collector.warnings:
        logger.warning(
            "Lossy mapping",
            record=warning.record_index,
            id=warning.record_id,
            field=warning.field,
            reason=warning.reason,
        )
    return reference, tuple(collector.warnings)


def convert_items(
    items: Iterable[CslItem],
    *,
    cff_version: Optional[str] = None,
    config: Optional[ConverterConfig] = None,
) -> tuple[tuple[Reference, ...], tuple[LossyMappingWarning, ...]]:
    """Map CSL items onto references, keeping their order."""
    references: list[Reference] = []
    warnings: list[LossyMappingWarning] = []
    for index, item in enumerate(items):
        reference, item_warnings = convert_item(
            item, cff_version=cff_version, config=config, record_index=index
        )
        references.append(reference)
        warnings.extend(item_warnings)
    return tuple(references), tuple(warnings)
