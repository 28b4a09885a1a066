"""
CSL Model: typed CSL-JSON records.

    from cslcff.csl import parse_csl_json

    items = parse_csl_json(text)
    items[0].type        # ItemType.ARTICLE_JOURNAL
    items[0].extra       # every key not modeled, untouched
"""

from cslcff.csl.codec import dump_csl_json, load_csl_items, parse_csl_json
from cslcff.csl.dates import CslDate, DateParts
from cslcff.csl.items import CSL_FIELDS, CslField, CslItem, ItemType
from cslcff.csl.names import LiteralName, Name, PersonName

__all__ = [
    "CSL_FIELDS",
    "CslDate",
    "CslField",
    "CslItem",
    "DateParts",
    "ItemType",
    "LiteralName",
    "Name",
    "PersonName",
    "dump_csl_json",
    "load_csl_items",
    "parse_csl_json",
]
