"""Reading and writing CSL-JSON documents."""

from __future__ import annotations

import json
from typing import Any, Iterable

from cslcff.core.exceptions import SchemaError
from cslcff.core.logging import get_logger
from cslcff.csl.items import CslItem, item_from_csl

logger = get_logger(__name__)


def load_csl_items(data: Any) -> tuple[CslItem, ...]:
    """Build CSL items from already decoded JSON data.

    Args:
        data: The decoded top-level value; must be a list of objects

    Returns:
        The items in source order

    Raises:
        SchemaError: If the value is not an array or an item is invalid
    """
    if not isinstance(data, list):
        raise SchemaError(
            f"CSL-JSON must be an array of items, got {type(data).__name__}"
        )

    items = []
    for index, entry in enumerate(data):
        try:
            items.append(item_from_csl(entry))
        except ValueError as e:
            raise SchemaError(str(e), path=f"[{index}]") from e

    logger.debug("Parsed CSL items", count=len(items))
    return tuple(items)


def parse_csl_json(text: str) -> tuple[CslItem, ...]:
    """Parse a CSL-JSON document.

    Raises:
        SchemaError: If the text is not JSON or not a valid item array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    return load_csl_items(data)


def dump_csl_json(items: Iterable[CslItem], indent: int = 2) -> str:
    """Serialize items as a CSL-JSON array."""
    return json.dumps(
        [item.to_csl() for item in items], indent=indent, ensure_ascii=False
    )
