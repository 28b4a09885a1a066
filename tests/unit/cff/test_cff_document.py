"""Tests for CFF documents and entity-author support by version."""

import datetime

import pytest

from cslcff.cff.document import (
    DOCUMENT_FIELD_ORDER,
    CffDocument,
    document_from_cff,
    supports_entity_authors,
)
from cslcff.cff.references import Reference


class TestDocumentFromCff:
    """Tests for document_from_cff()."""

    def test_missing_version(self) -> None:
        with pytest.raises(ValueError, match="cff-version"):
            document_from_cff({"message": "hi"})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            document_from_cff(["cff-version"])

    def test_references_default_to_empty_tuple(self) -> None:
        document = document_from_cff({"cff-version": "1.2.0"})

        assert document.references == ()

    def test_fields(self) -> None:
        document = document_from_cff(
            {
                "cff-version": "1.2.0",
                "title": "tool",
                "date-released": "2022-09-14",
                "license": ["MIT", "Apache-2.0"],
                "references": [{"type": "book"}],
                "preferred-citation": {"type": "article"},
            }
        )

        assert document.date_released == datetime.date(2022, 9, 14)
        assert document.license == ("MIT", "Apache-2.0")
        assert document.references == (Reference(type="book"),)
        assert document.preferred_citation == Reference(type="article")

    def test_reference_without_type(self) -> None:
        with pytest.raises(ValueError, match=r"references: \[1\]"):
            document_from_cff(
                {"cff-version": "1.2.0", "references": [{"type": "book"}, {"title": "x"}]}
            )


class TestCffDocument:
    def test_hashable_with_extra(self) -> None:
        document = CffDocument(
            cff_version="1.2.0",
            references=(Reference(type="book", extra={"status": "preprint"}),),
            extra={"x-custom": {"a": 1}},
        )

        assert hash(document) == hash(document.with_references(document.references))

    def test_requires_version(self) -> None:
        with pytest.raises(ValueError):
            CffDocument(cff_version="")

    def test_with_references(self) -> None:
        document = CffDocument(cff_version="1.2.0", title="tool")

        updated = document.with_references([Reference(type="book")])

        assert updated.references == (Reference(type="book"),)
        assert updated.title == "tool"
        assert document.references == ()

    def test_list_references_become_tuple(self) -> None:
        document = CffDocument(cff_version="1.2.0", references=[Reference(type="book")])

        assert isinstance(document.references, tuple)

    def test_to_cff_order(self) -> None:
        document = CffDocument(
            cff_version="1.2.0",
            references=(Reference(type="book"),),
            title="tool",
            message="cite me",
            extra={"x-custom": 1},
        )

        assert list(document.to_cff()) == [
            "cff-version",
            "message",
            "title",
            "references",
            "x-custom",
        ]

    def test_order_table(self) -> None:
        assert DOCUMENT_FIELD_ORDER[0] == "cff-version"
        assert DOCUMENT_FIELD_ORDER[-1] == "references"


class TestSupportsEntityAuthors:
    @pytest.mark.parametrize(
        "version, expected",
        [
            ("1.0.3", False),
            ("1.1.0", True),
            ("1.2.0", True),
            ("2.0.0", True),
            ("next", True),
        ],
    )
    def test_versions(self, version: str, expected: bool) -> None:
        assert supports_entity_authors(version) is expected
