"""
Conversion entry points and merge modes.

    from cslcff.converter import convert_text, MergeMode

    result = convert_text(csl_json)                       # YAML sequence
    result = convert_text(csl_json, MergeMode.INSERT, target=cff_text)
    result.output      # full updated CITATION.cff
    result.warnings    # LossyMappingWarning instances, in record order

Insert appends the new references after the existing ones; replace makes
them the whole reference list. Neither reorders nor deduplicates.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Union

from cslcff.cff.codec import dump_cff, dump_references, parse_cff
from cslcff.cff.document import CffDocument
from cslcff.cff.references import Reference
from cslcff.converter.mapping import convert_items
from cslcff.core.config import ConverterConfig
from cslcff.core.exceptions import LossyMappingWarning, SchemaError, TargetDocumentError
from cslcff.core.logging import get_logger
from cslcff.csl.codec import parse_csl_json
from cslcff.csl.items import CslItem

logger = get_logger(__name__)


class MergeMode(str, Enum):
    """Where converted references go."""

    STANDALONE = "standalone"
    INSERT = "insert"
    REPLACE = "replace"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion.

    ``document`` is the updated CFF document for insert/replace and None
    for standalone output.
    """

    references: tuple[Reference, ...]
    output: str
    warnings: tuple[LossyMappingWarning, ...] = ()
    document: Optional[CffDocument] = None


def merge_references(
    document: CffDocument, references: Iterable[Reference], mode: MergeMode
) -> CffDocument:
    """Put references into a document according to the merge mode.

    Raises:
        ValueError: For MergeMode.STANDALONE, which has no document
    """
    mode = MergeMode(mode)
    if mode is MergeMode.INSERT:
        return document.with_references(document.references + tuple(references))
    if mode is MergeMode.REPLACE:
        return document.with_references(references)
    raise ValueError("standalone output is not merged into a document")


def _load_target(target: Union[str, CffDocument]) -> CffDocument:
    if isinstance(target, CffDocument):
        return target
    try:
        return parse_cff(target)
    except SchemaError as e:
        raise TargetDocumentError(f"Target is not a valid CFF document: {e}") from e


def convert(
    csl_records: Iterable[CslItem],
    mode: MergeMode = MergeMode.STANDALONE,
    target: Optional[Union[str, CffDocument]] = None,
    *,
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """Convert CSL items to CFF references and emit them.

    Args:
        csl_records: Parsed CSL items, in bibliography order
        mode: Standalone fragment, insert into target, or replace in target
        target: CFF text or document; required for insert and replace
        config: Converter settings; defaults apply when omitted

    Returns:
        ConversionResult with the references, warnings and YAML output

    Raises:
        TargetDocumentError: If the target text is not a valid CFF document
        ValueError: If insert/replace is requested without a target
    """
    config = config or ConverterConfig()
    mode = MergeMode(mode)

    if mode is MergeMode.STANDALONE:
        references, warnings = convert_items(csl_records, config=config)
        logger.info(
            "Converted records",
            count=len(references),
            mode=mode.value,
            warnings=len(warnings),
        )
        return ConversionResult(references, dump_references(references), warnings)

    if target is None:
        raise ValueError(f"{mode.value} mode needs a target CFF document")

    document = _load_target(target)
    if not document.message:
        # CFF requires a message
        document = replace(document, message=config.message)
        logger.debug("Added default message to target document")
    references, warnings = convert_items(
        csl_records, cff_version=document.cff_version, config=config
    )
    merged = merge_references(document, references, mode)
    logger.info(
        "Converted records",
        count=len(references),
        mode=mode.value,
        total=len(merged.references),
        warnings=len(warnings),
    )
    return ConversionResult(references, dump_cff(merged), warnings, merged)


def convert_text(
    csl_json: str,
    mode: MergeMode = MergeMode.STANDALONE,
    target: Optional[Union[str, CffDocument]] = None,
    *,
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """Like convert(), starting from CSL-JSON text.

    Raises:
        SchemaError: If the CSL-JSON is invalid
    """
    return convert(parse_csl_json(csl_json), mode, target, config=config)
