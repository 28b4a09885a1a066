"""cslcff - Convert CSL-JSON bibliographies into CITATION.cff references.

This package maps CSL-JSON citation records onto Citation File Format
reference entries and merges them into existing CITATION.cff documents.

    from cslcff import convert_text, MergeMode

    result = convert_text(open("refs.json").read())
    print(result.output)
"""

__version__ = "0.3.0"

from cslcff.cff import CffDocument, Reference, dump_cff, parse_cff
from cslcff.converter import ConversionResult, MergeMode, convert, convert_text
from cslcff.core import CslCffError, LossyMappingWarning, SchemaError, TargetDocumentError
from cslcff.csl import CslItem, dump_csl_json, parse_csl_json

__all__ = [
    "__version__",
    "CffDocument",
    "ConversionResult",
    "CslCffError",
    "CslItem",
    "LossyMappingWarning",
    "MergeMode",
    "Reference",
    "SchemaError",
    "TargetDocumentError",
    "convert",
    "convert_text",
    "dump_cff",
    "dump_csl_json",
    "parse_cff",
    "parse_csl_json",
]
