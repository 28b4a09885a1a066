"""
CFF Model: typed CITATION.cff documents and reference entries.

    from cslcff.cff import parse_cff, dump_cff

    document = parse_cff(path.read_text())
    document.references      # always a tuple
    dump_cff(document)       # keys in CFF schema order
"""

from cslcff.cff.codec import dump_cff, dump_references, parse_cff, parse_references
from cslcff.cff.document import (
    DOCUMENT_FIELD_ORDER,
    CffDocument,
    supports_entity_authors,
)
from cslcff.cff.identifiers import Identifier
from cslcff.cff.names import (
    ANONYMOUS,
    ENTITY_FIELD_ORDER,
    PERSON_FIELD_ORDER,
    CffEntity,
    CffName,
    CffPerson,
)
from cslcff.cff.references import REFERENCE_FIELD_ORDER, Reference, RefType

__all__ = [
    "ANONYMOUS",
    "DOCUMENT_FIELD_ORDER",
    "ENTITY_FIELD_ORDER",
    "PERSON_FIELD_ORDER",
    "REFERENCE_FIELD_ORDER",
    "CffDocument",
    "CffEntity",
    "CffName",
    "CffPerson",
    "Identifier",
    "RefType",
    "Reference",
    "dump_cff",
    "dump_references",
    "parse_cff",
    "parse_references",
    "supports_entity_authors",
]
