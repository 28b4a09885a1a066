"""
Tests for Exception Hierarchy.

Organization
------------
- TestBaseException: CslCffError
- TestDocumentExceptions: SchemaError, TargetDocumentError
- TestConfigValidationError
- TestLossyMappingWarning
- TestErrorInfo: get_error_info, get_root_cause
"""

import json

import pytest

from cslcff.core.exceptions import (
    ConfigValidationError,
    CslCffError,
    LossyMappingWarning,
    SchemaError,
    TargetDocumentError,
    get_error_info,
    get_root_cause,
)


class TestBaseException:
    """Tests for CslCffError."""

    def test_message(self) -> None:
        error = CslCffError("something broke")

        assert str(error) == "something broke"
        assert error.user_message == "something broke"

    def test_default_error_info(self) -> None:
        error = CslCffError("x")

        assert error.error_code == "CCF-ERR-000"
        assert error.how_to_fix

    def test_instance_overrides(self) -> None:
        error = CslCffError(
            "x", error_code="CCF-X-001", why_it_happened="because", how_to_fix=["a"]
        )

        assert error.error_code == "CCF-X-001"
        assert error.why_it_happened == "because"
        assert error.how_to_fix == ["a"]
        # Class defaults untouched
        assert CslCffError.error_code == "CCF-ERR-000"

    @pytest.mark.parametrize(
        "exc",
        [
            SchemaError("bad"),
            TargetDocumentError("bad"),
            ConfigValidationError("bad"),
        ],
    )
    def test_all_catchable_as_base(self, exc: CslCffError) -> None:
        with pytest.raises(CslCffError):
            raise exc


class TestDocumentExceptions:
    """Tests for SchemaError and TargetDocumentError."""

    def test_schema_error_path(self) -> None:
        error = SchemaError("missing required field 'type'", path="[2]")

        assert error.path == "[2]"
        assert str(error) == "missing required field 'type' (at [2])"
        assert error.error_code == "CCF-SCH-001"

    def test_schema_error_without_path(self) -> None:
        error = SchemaError("Invalid JSON")

        assert error.path is None
        assert str(error) == "Invalid JSON"

    def test_target_error_code(self) -> None:
        assert TargetDocumentError("x").error_code == "CCF-TGT-001"


class TestConfigValidationError:
    def test_field_and_value(self) -> None:
        error = ConfigValidationError("bad level", field="log_level", value="LOUD")

        assert error.field == "log_level"
        assert error.value == "LOUD"
        assert error.error_code == "CCF-CFG-001"


class TestLossyMappingWarning:
    """Tests for the advisory warning type."""

    def test_is_user_warning_not_error(self) -> None:
        warning = LossyMappingWarning("id", "dropped")

        assert isinstance(warning, UserWarning)
        assert not isinstance(warning, CslCffError)

    def test_message_with_location(self) -> None:
        warning = LossyMappingWarning("author[1]", "literal name", 3, "smith2020")

        assert str(warning) == "[record 3, id=smith2020] author[1]: literal name"

    def test_message_without_location(self) -> None:
        assert str(LossyMappingWarning("note", "dropped")) == "note: dropped"

    def test_at_returns_located_copy(self) -> None:
        warning = LossyMappingWarning("note", "dropped")
        located = warning.at(1, "x")

        assert located.record_index == 1
        assert located.record_id == "x"
        assert warning.record_index is None

    def test_equality(self) -> None:
        first = LossyMappingWarning("note", "dropped", 0, None)
        second = LossyMappingWarning("note", "dropped", 0, None)

        assert first == second
        assert len({first, second}) == 1
        assert first != LossyMappingWarning("note", "dropped", 1, None)

    def test_to_dict(self) -> None:
        warning = LossyMappingWarning("page", "first range kept", 2, "a")

        assert warning.to_dict() == {
            "field": "page",
            "reason": "first range kept",
            "record_index": 2,
            "record_id": "a",
        }


class TestErrorInfo:
    """Tests for get_error_info and get_root_cause."""

    def test_info_from_package_error(self) -> None:
        info = get_error_info(SchemaError("x"))

        assert info["error_code"] == "CCF-SCH-001"

    def test_info_for_missing_file(self) -> None:
        info = get_error_info(FileNotFoundError("refs.json"))

        assert info["error_code"] == "CCF-FILE-001"

    def test_info_for_json_error(self) -> None:
        with pytest.raises(json.JSONDecodeError) as excinfo:
            json.loads("[")

        assert get_error_info(excinfo.value)["error_code"] == "CCF-SCH-002"

    def test_info_for_os_error_subclass(self) -> None:
        assert get_error_info(IsADirectoryError("x"))["error_code"] == "CCF-SYS-001"

    def test_info_fallback(self) -> None:
        assert get_error_info(RuntimeError("x"))["error_code"] == "CCF-ERR-999"

    def test_root_cause_follows_chain(self) -> None:
        root = ValueError("root")
        try:
            try:
                raise root
            except ValueError as e:
                raise SchemaError("wrapped") from e
        except SchemaError as wrapped:
            assert wrapped.get_root_cause() is root
            assert get_root_cause(wrapped) is root

    def test_root_cause_of_plain_exception(self) -> None:
        exc = ValueError("alone")

        assert get_root_cause(exc) is exc
