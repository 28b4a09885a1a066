"""Converter: CSL items to CFF references, and merging them into documents."""

from cslcff.converter.mapping import (
    CSL_TO_CFF_TYPES,
    DROPPED_CSL_FIELDS,
    convert_item,
    convert_items,
    convert_name,
    convert_type,
)
from cslcff.converter.merge import (
    ConversionResult,
    MergeMode,
    convert,
    convert_text,
    merge_references,
)

__all__ = [
    "CSL_TO_CFF_TYPES",
    "DROPPED_CSL_FIELDS",
    "ConversionResult",
    "MergeMode",
    "convert",
    "convert_item",
    "convert_items",
    "convert_name",
    "convert_text",
    "convert_type",
    "merge_references",
]
