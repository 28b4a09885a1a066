"""
Tests for conversion entry points and merge modes.

Organization
------------
- TestStandalone: YAML sequence output
- TestInsert / TestReplace: updating an existing CITATION.cff
- TestTargetErrors: invalid or missing targets
"""

import pytest
import yaml

from cslcff.cff.codec import parse_cff
from cslcff.cff.document import CffDocument
from cslcff.cff.names import CffPerson
from cslcff.cff.references import Reference
from cslcff.converter.merge import (
    ConversionResult,
    MergeMode,
    convert,
    convert_text,
    merge_references,
)
from cslcff.core.config import ConverterConfig
from cslcff.core.exceptions import SchemaError, TargetDocumentError
from cslcff.csl.codec import parse_csl_json


class TestStandalone:
    """Tests for standalone output."""

    def test_two_author_article(self, scenario_json: str) -> None:
        result = convert_text(scenario_json)

        assert yaml.safe_load(result.output) == [
            {
                "type": "article",
                "authors": [
                    {"family-names": "Vaidya", "given-names": "Nina"},
                    {"family-names": "Solgaard", "given-names": "Olav"},
                ],
                "title": "3D printed optics with nanometer resolution",
                "doi": "10.1038/s41378-018-0015-4",
            }
        ]
        assert result.warnings == ()
        assert result.document is None

    def test_order_preserved(self, zotero_json: str) -> None:
        items = parse_csl_json(zotero_json)

        result = convert(items)
        data = yaml.safe_load(result.output)

        assert [entry.get("title") for entry in data] == [item.title for item in items]
        assert len(result.references) == 3

    def test_warnings_returned(self, zotero_json: str) -> None:
        result = convert_text(zotero_json)

        assert len(result.warnings) == 5

    def test_empty_input(self) -> None:
        result = convert_text("[]")

        assert result.output == "[]\n"
        assert result.references == ()

    def test_invalid_json(self) -> None:
        with pytest.raises(SchemaError):
            convert_text("{not json")

    def test_config_applies(self) -> None:
        result = convert_text(
            '[{"type": "webpage", "title": "Home"}]',
            config=ConverterConfig(map_types=True, anonymous_authors=False),
        )

        assert yaml.safe_load(result.output) == [{"type": "website", "title": "Home"}]

    def test_result_is_frozen(self) -> None:
        result = ConversionResult(references=(), output="[]\n")

        with pytest.raises(AttributeError):
            result.output = "x"  # type: ignore[misc]


class TestInsert:
    """Tests for MergeMode.INSERT."""

    def test_appends_after_existing(self, zotero_json: str, citation_cff: str) -> None:
        original = parse_cff(citation_cff)

        result = convert_text(zotero_json, MergeMode.INSERT, target=citation_cff)
        updated = parse_cff(result.output)

        assert len(updated.references) == len(original.references) + 3
        assert updated.references[:2] == original.references
        assert updated.references[2:] == result.references

    def test_other_fields_untouched(self, zotero_json: str, citation_cff: str) -> None:
        original = parse_cff(citation_cff)

        updated = parse_cff(
            convert_text(zotero_json, MergeMode.INSERT, target=citation_cff).output
        )

        assert updated.with_references(()) == original.with_references(())

    def test_document_in_result(self, scenario_json: str, citation_cff: str) -> None:
        result = convert_text(scenario_json, "insert", target=citation_cff)

        assert result.document is not None
        assert result.document.references[-1].title == (
            "3D printed optics with nanometer resolution"
        )

    def test_document_target(self, scenario_json: str) -> None:
        document = CffDocument(cff_version="1.2.0", message="cite me")

        result = convert_text(scenario_json, MergeMode.INSERT, target=document)

        assert len(result.document.references) == 1
        assert result.output.startswith("cff-version: 1.2.0\nmessage: cite me\n")

    def test_target_scalars_unchanged(self, scenario_json: str) -> None:
        target = "cff-version: 1.2.0\nmessage: m\ntitle: t\nversion: 1.10\n"

        result = convert_text(scenario_json, MergeMode.INSERT, target=target)

        assert result.output.startswith(target)
        assert "version: 1.10\n" in result.output

    def test_missing_message_filled(self, scenario_json: str) -> None:
        config = ConverterConfig(message="Please cite this.")

        result = convert_text(
            scenario_json, MergeMode.INSERT, target="cff-version: 1.2.0\n", config=config
        )

        assert result.document.message == "Please cite this."
        assert "message: Please cite this.\n" in result.output

    def test_uses_target_version(self) -> None:
        target = "cff-version: 1.0.3\nmessage: old\n"

        result = convert_text(
            '[{"type": "book", "author": [{"literal": "ACME"}]}]',
            MergeMode.INSERT,
            target=target,
        )

        assert result.references[0].authors == (CffPerson(family_names="ACME"),)
        assert [w.field for w in result.warnings] == ["author[0]"]


class TestReplace:
    """Tests for MergeMode.REPLACE."""

    def test_matches_standalone(self, zotero_json: str, citation_cff: str) -> None:
        standalone = convert_text(zotero_json)

        result = convert_text(zotero_json, MergeMode.REPLACE, target=citation_cff)

        assert parse_cff(result.output).references == standalone.references

    def test_no_original_survives(self, zotero_json: str, citation_cff: str) -> None:
        original = parse_cff(citation_cff)

        result = convert_text(zotero_json, MergeMode.REPLACE, target=citation_cff)
        updated = parse_cff(result.output)

        for reference in original.references:
            assert reference not in updated.references
        assert updated.title == original.title

    def test_empty_input_on_null_references(self) -> None:
        target = "cff-version: 1.2.0\nmessage: m\nreferences:\n"

        result = convert_text("[]", MergeMode.REPLACE, target=target)

        assert result.output == "cff-version: 1.2.0\nmessage: m\n"

    def test_empty_input_clears_references(self, citation_cff: str) -> None:
        result = convert_text("[]", MergeMode.REPLACE, target=citation_cff)

        assert parse_cff(result.output).references == ()


class TestTargetErrors:
    def test_invalid_target(self, scenario_json: str) -> None:
        with pytest.raises(TargetDocumentError) as exc_info:
            convert_text(scenario_json, MergeMode.INSERT, target="message: no version\n")

        assert isinstance(exc_info.value.__cause__, SchemaError)
        assert "cff-version" in str(exc_info.value)

    def test_target_not_yaml(self, scenario_json: str) -> None:
        with pytest.raises(TargetDocumentError):
            convert_text(scenario_json, MergeMode.REPLACE, target="a: [b\n")

    def test_missing_target(self, scenario_json: str) -> None:
        with pytest.raises(ValueError, match="target"):
            convert_text(scenario_json, MergeMode.INSERT)

    def test_unknown_mode(self, scenario_json: str) -> None:
        with pytest.raises(ValueError):
            convert_text(scenario_json, "prepend")


class TestMergeReferences:
    def test_insert(self) -> None:
        document = CffDocument(cff_version="1.2.0", references=(Reference(type="book"),))

        merged = merge_references(document, [Reference(type="article")], MergeMode.INSERT)

        assert [r.type.value for r in merged.references] == ["book", "article"]

    def test_replace(self) -> None:
        document = CffDocument(cff_version="1.2.0", references=(Reference(type="book"),))

        merged = merge_references(document, [Reference(type="article")], "replace")

        assert [r.type.value for r in merged.references] == ["article"]

    def test_standalone_rejected(self) -> None:
        with pytest.raises(ValueError):
            merge_references(CffDocument(cff_version="1.2.0"), [], MergeMode.STANDALONE)
