"""Reading and writing CITATION.cff YAML."""

from __future__ import annotations

from typing import Any, Iterable

import yaml

from cslcff.cff.document import CffDocument, document_from_cff
from cslcff.cff.fields import YamlFloat, sequence_of
from cslcff.cff.references import Reference, reference_from_cff
from cslcff.core.exceptions import SchemaError
from cslcff.core.logging import get_logger

logger = get_logger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class CffLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates as strings and remembers float text.

    CFF dates are parsed by the model, and unmodeled keys keep their
    original text this way. Floats load as YamlFloat so a value such as
    "version: 1.10" is written back unchanged.
    """


CffLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_float(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> YamlFloat:
    return YamlFloat(loader.construct_yaml_float(node), node.value)


CffLoader.add_constructor("tag:yaml.org,2002:float", _construct_float)


class CffDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    # Multi-line text (abstracts, notes) reads better as a literal block
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


def _represent_float(dumper: yaml.SafeDumper, data: YamlFloat) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:float", data.text)


CffDumper.add_representer(str, _represent_str)
CffDumper.add_representer(YamlFloat, _represent_float)


def _dump(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=CffDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=4096,
    )


def _load(text: str) -> Any:
    try:
        return yaml.load(text, Loader=CffLoader)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}") from e


def parse_cff(text: str) -> CffDocument:
    """Parse a CITATION.cff document.

    Raises:
        SchemaError: On YAML errors, a non-mapping top level, a missing
            ``cff-version``, a reference without ``type`` or an invalid date
    """
    data = _load(text)
    try:
        document = document_from_cff(data)
    except ValueError as e:
        raise SchemaError(str(e)) from e
    logger.debug(
        "Parsed CFF document",
        cff_version=document.cff_version,
        references=len(document.references),
    )
    return document


def parse_references(data: Any) -> tuple[Reference, ...]:
    """Build references from a YAML sequence (text or already loaded data).

    This reads the standalone fragment format written by dump_references.
    """
    if isinstance(data, str):
        data = _load(data)
    if data is None:
        return ()
    try:
        return sequence_of(reference_from_cff)(data)
    except ValueError as e:
        raise SchemaError(f"references: {e}") from e


def dump_cff(document: CffDocument) -> str:
    """Serialize a document as CFF YAML."""
    return _dump(document.to_cff())


def dump_references(references: Iterable[Reference]) -> str:
    """Serialize references as a bare YAML sequence."""
    data = [reference.to_cff() for reference in references]
    if not data:
        return "[]\n"
    return _dump(data)
