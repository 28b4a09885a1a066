"""Field tables shared by CFF references and documents.

Each modeled CFF key is described by a CffField naming the dataclass
attribute it fills and the kind of value it holds. The tables are consulted
both when reading a mapping and when writing one back, so the emitted key
order is the table order rather than whatever order a dict happens to have.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from cslcff.cff.identifiers import identifier_from_cff
from cslcff.cff.names import name_from_cff

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class YamlFloat(float):
    """A float that remembers how it was written, so "1.10" stays "1.10"."""

    def __new__(cls, value: float, text: str) -> "YamlFloat":
        obj = super().__new__(cls, value)
        obj.text = text
        return obj

    def __getnewargs__(self) -> tuple[float, str]:
        return float(self), self.text

    def __repr__(self) -> str:
        return self.text


@dataclass(frozen=True)
class CffField:
    attr: str
    key: str
    kind: str = "text"


def parse_date(value: Any) -> datetime.date:
    """Read a CFF date given as a YAML timestamp or a YYYY-MM-DD string."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        match = _ISO_DATE.match(value.strip())
        if match:
            year, month, day = (int(g) for g in match.groups())
            return datetime.date(year, month, day)
    raise ValueError(f"expected a YYYY-MM-DD date, got {value!r}")


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, YamlFloat):
        return value.text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string, got {type(value).__name__}")


def _ordinary(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"expected a string or number, got {type(value).__name__}")
    return value


def _strings(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(_text(v) for v in value)
    raise ValueError("expected a list of strings")


def sequence_of(decode: Callable[[Any], Any]) -> Callable[[Any], tuple]:
    def decode_all(value: Any) -> tuple:
        if not isinstance(value, list):
            raise ValueError("expected a list")
        decoded = []
        for index, entry in enumerate(value):
            try:
                decoded.append(decode(entry))
            except ValueError as e:
                raise ValueError(f"[{index}] {e}") from e
        return tuple(decoded)

    return decode_all


def _license(value: Any) -> Any:
    # A single SPDX id or a list of them
    if isinstance(value, list):
        return tuple(_text(v) for v in value)
    return _text(value)


DECODERS: dict[str, Callable[[Any], Any]] = {
    "text": _text,
    "ordinary": _ordinary,
    "date": parse_date,
    "strings": _strings,
    "license": _license,
    "name": name_from_cff,
    "names": sequence_of(name_from_cff),
    "identifiers": sequence_of(identifier_from_cff),
}


def decode_mapping(
    data: dict[str, Any],
    fields: tuple[CffField, ...],
    decoders: Optional[dict[str, Callable[[Any], Any]]] = None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a mapping into modeled attribute values and extra keys.

    Modeled keys with a null value are left out.

    Returns:
        (values by attribute name, unmodeled keys in source order)

    Raises:
        ValueError: If a modeled key holds an unusable value; the message
            starts with the key
    """
    by_key = {f.key: f for f in fields}
    table = {**DECODERS, **(decoders or {})}
    values: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        entry = by_key.get(key)
        if entry is None:
            extra[key] = value
            continue
        # An empty modeled key is the same as an absent one
        if value is None:
            continue
        try:
            values[entry.attr] = table[entry.kind](value)
        except ValueError as e:
            raise ValueError(f"{key}: {e}") from e
    return values, extra


def encode_value(value: Any) -> Any:
    """Turn a model value into plain YAML-safe data."""
    if hasattr(value, "to_cff"):
        return value.to_cff()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [encode_value(v) for v in value]
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    return value


def encode_mapping(
    obj: Any, fields: tuple[CffField, ...], extra: dict[str, Any]
) -> dict[str, Any]:
    """Emit modeled fields in table order, then extra keys in source order."""
    result: dict[str, Any] = {}
    for entry in fields:
        value = getattr(obj, entry.attr)
        if value is None or value == ():
            continue
        result[entry.key] = encode_value(value)
    for key, value in extra.items():
        result.setdefault(key, encode_value(value))
    return result
