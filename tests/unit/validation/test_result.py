"""Unit tests for validation results and validation errors."""

import pytest

from src.core.exceptions import APIError, ErrorCode, Severity, VerdictError
from src.validation.assertions.base import StructuredViolation, ViolationRecord
from src.validation.errors import (
    ConstraintArgumentError,
    InvalidStructureError,
    TypeMismatchError,
    UnknownConstraintError,
    UnsupportedKindError,
)
from src.validation.kinds import Kind
from src.validation.result import MESSAGE, ValidationResult

RANGE = ViolationRecord(
    code="between",
    message="the value must be between 1 and 3 (is 4)",
    template="the value must be between {min} and {max} (is {actual})",
    values={"min": 1, "max": 3, "actual": 4},
)
REQUIRED = ViolationRecord(
    code="required",
    message="the value is required",
    template="the value is required",
)


@pytest.mark.unit
class TestValidationResult:
    """Test the aggregated validation error."""

    def test_empty_result_is_rejected(self) -> None:
        """Verify a result always holds at least one violation."""
        with pytest.raises(ValueError, match="at least one violation"):
            ValidationResult({})

    def test_coded_error_contract(self) -> None:
        """Verify the result is a 422 invalid_entity error."""
        result = ValidationResult({"count": [RANGE]})

        assert isinstance(result, VerdictError)
        assert isinstance(result, APIError)
        assert result.error_code == ErrorCode.INVALID_ENTITY.value
        assert result.status_code == 422
        assert result.message == MESSAGE
        assert result.severity is Severity.LOW
        assert result.is_expected is True
        assert result.mask_error is False
        assert str(result) == "[invalid_entity] entity validation failed"

    def test_detail_shape(self) -> None:
        """Verify detail lists records per path with all four attributes."""
        result = ValidationResult({"code": [REQUIRED, RANGE]})

        assert result.detail == {
            "code": [
                {
                    "code": "required",
                    "message": "the value is required",
                    "template": "the value is required",
                    "values": {},
                },
                {
                    "code": "between",
                    "message": "the value must be between 1 and 3 (is 4)",
                    "template": (
                        "the value must be between {min} and {max} (is {actual})"
                    ),
                    "values": {"min": 1, "max": 3, "actual": 4},
                },
            ]
        }

    def test_unknown_violation_fallback(self) -> None:
        """Verify exceptions without structure are reported as unknown."""
        result = ValidationResult({"value": [TypeError("bad type")]})

        assert result.detail == {
            "value": [
                {
                    "code": "unknown",
                    "message": "bad type",
                    "template": "",
                    "values": None,
                }
            ]
        }

    def test_fields_are_read_only(self) -> None:
        """Verify violations cannot be changed once collected."""
        violations = [REQUIRED]
        result = ValidationResult({"name": violations})
        violations.append(RANGE)

        assert result.fields["name"] == (REQUIRED,)
        with pytest.raises(TypeError):
            result.fields["other"] = (RANGE,)  # type: ignore[index]

    def test_codes(self) -> None:
        """Verify codes are listed per path and missing paths are empty."""
        result = ValidationResult({"a": [REQUIRED, RANGE], "b": [RANGE]})

        assert result.codes("a") == ["required", "between"]
        assert result.codes("b") == ["between"]
        assert result.codes("missing") == []

    def test_path_order_is_preserved(self) -> None:
        """Verify paths keep the order in which they were reported."""
        result = ValidationResult({"z": [REQUIRED], "a": [REQUIRED], "m": [REQUIRED]})

        assert list(result.fields) == ["z", "a", "m"]
        assert list(result.detail) == ["z", "a", "m"]

    def test_record_is_structured_violation(self) -> None:
        """Verify records satisfy the structured violation contract."""
        assert isinstance(REQUIRED, StructuredViolation)
        assert not isinstance(ValueError("x"), StructuredViolation)

    def test_wrap_keeps_detail(self) -> None:
        """Verify wrapping a result keeps its violations."""
        result = ValidationResult({"name": [REQUIRED]})

        wrapped = result.wrap(RuntimeError("while saving"))

        assert wrapped.error_code == "invalid_entity"
        assert wrapped.status_code == 422
        assert wrapped.detail == result.detail
        assert wrapped.message == "entity validation failed: while saving"


@pytest.mark.unit
class TestValidationErrors:
    """Test build-time and runtime validation errors."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (InvalidStructureError("not a structure"), ErrorCode.INVALID_STRUCTURE),
            (UnknownConstraintError("max"), ErrorCode.UNKNOWN_CONSTRAINT),
            (
                ConstraintArgumentError("between", "a:b"),
                ErrorCode.INVALID_CONSTRAINT_ARGUMENT,
            ),
            (
                UnsupportedKindError("between", Kind.BOOLEAN),
                ErrorCode.UNSUPPORTED_CONSTRAINT,
            ),
            (TypeMismatchError(int, str), ErrorCode.TYPE_MISMATCH),
        ],
    )
    def test_programming_errors_are_masked(
        self, error: VerdictError, code: ErrorCode
    ) -> None:
        """Verify engine errors are 500s with high severity and hidden messages."""
        assert error.error_code == code.value
        assert error.status_code == 500
        assert error.severity is Severity.HIGH
        assert error.mask_error is True
        assert error.should_alert is True

    def test_unsupported_kind_message(self) -> None:
        """Verify the message names constraint and kind."""
        error = UnsupportedKindError("between", Kind.BOOLEAN)

        assert error.message == "constraint 'between' does not support boolean fields"

    def test_argument_error_message_includes_cause(self) -> None:
        """Verify the parse failure is appended and chained."""
        cause = ValueError("invalid literal for int() with base 10: 'a'")

        error = ConstraintArgumentError("between", "a:b", cause)

        assert error.message == (
            "parse args of 'between' ('a:b'): "
            "invalid literal for int() with base 10: 'a'"
        )
        assert error.__cause__ is cause

    def test_type_mismatch(self) -> None:
        """Verify the mismatch names both classes and is a TypeError."""
        error = TypeMismatchError(int, str)

        assert isinstance(error, TypeError)
        assert error.message == "type mismatch: expected int, got str"
        assert error.expected is int
        assert error.actual is str
