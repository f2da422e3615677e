"""The error returned when an entity fails struct validation."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from src.core.exceptions import ErrorCode, Severity, VerdictError
from src.validation.assertions.base import StructuredViolation

MESSAGE = "entity validation failed"

type Violations = Sequence[StructuredViolation | Exception]


class ValidationResult(VerdictError):
    """Violations of one validation call, keyed by dotted field path.

    A result is never empty: a validator that finds no violation returns
    ``None`` instead. It implements the coded error contract with code
    ``invalid_entity`` and status 422, so request handlers can raise it as-is.

    Args:
        fields: Violations per field path, in the order they were found
    """

    def __init__(self, fields: Mapping[str, Violations]) -> None:
        if not fields:
            raise ValueError("a validation result needs at least one violation")
        super().__init__(
            ErrorCode.INVALID_ENTITY,
            MESSAGE,
            status_code=422,
            severity=Severity.LOW,
        )
        self.fields: Mapping[str, tuple[StructuredViolation | Exception, ...]] = (
            MappingProxyType({path: tuple(v) for path, v in fields.items()})
        )

    @property
    def detail(self) -> dict[str, list[dict[str, Any]]]:
        """Return the violations as JSON-ready records per field path."""
        return {
            path: [_serialize(violation) for violation in violations]
            for path, violations in self.fields.items()
        }

    def codes(self, path: str) -> list[str]:
        """Return the violation codes recorded for ``path``."""
        return [record["code"] for record in self.detail.get(path, [])]


def _serialize(violation: StructuredViolation | Exception) -> dict[str, Any]:
    if isinstance(violation, StructuredViolation):
        return {
            "code": violation.code,
            "message": violation.message,
            "template": violation.template,
            "values": violation.values,
        }
    return {
        "code": "unknown",
        "message": str(violation),
        "template": "",
        "values": None,
    }
