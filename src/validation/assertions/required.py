"""The ``required`` constraint: the value must be present.

Numbers, booleans, fixed-size tuples and nested structures have no representation of
"unset", so for those kinds the constraint always passes. Optional fields
must not be ``None``; text, sequences and mappings must not be empty.
"""

from collections.abc import Callable, Sized
from dataclasses import dataclass

from src.validation.assertions.base import (
    Assertion,
    AssertionOutcome,
    Violation,
    ViolationRecord,
)
from src.validation.kinds import Kind

REQUIRED_MESSAGE = "the value is required"


def violation() -> Violation:
    """Return the violation reported by every ``required`` variant."""
    return Violation(
        ViolationRecord(
            code="required",
            message=REQUIRED_MESSAGE,
            template=REQUIRED_MESSAGE,
        )
    )


@dataclass(frozen=True)
class AlwaysPresent:
    """Presence check for kinds whose zero value counts as present."""

    def validate(self, value: object) -> AssertionOutcome:  # noqa: ARG002
        return None


@dataclass(frozen=True)
class NotNone:
    """Presence check for optional fields."""

    def validate(self, value: object) -> AssertionOutcome:
        if value is None:
            return violation()
        return None


@dataclass(frozen=True)
class NotEmpty:
    """Presence check for text, sequences and mappings."""

    def validate(self, value: object) -> AssertionOutcome:
        if value is None:
            return violation()
        if isinstance(value, Sized) and len(value) == 0:
            return violation()
        return None


_BY_KIND: dict[Kind, Callable[[], Assertion]] = {
    Kind.OPTIONAL: NotNone,
    Kind.TEXT: NotEmpty,
    Kind.SEQUENCE: NotEmpty,
    Kind.MAPPING: NotEmpty,
}


def parse_required(kind: Kind, args: str) -> Assertion:  # noqa: ARG001
    """Build the ``required`` assertion for ``kind``; arguments are ignored."""
    return _BY_KIND.get(kind, AlwaysPresent)()
