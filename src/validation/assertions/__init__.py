"""Built-in constraint assertions.

- **required**: presence checks, chosen per field kind
- **between**: inclusive value range or length range

Custom constraints implement ``Assertion`` and are added to a
``src.validation.registry.Registry``.
"""

from src.validation.assertions.base import (
    Assertion,
    AssertionConstructor,
    AssertionOutcome,
    Nested,
    StructuredViolation,
    Violation,
    ViolationRecord,
)

__all__ = [
    "Assertion",
    "AssertionConstructor",
    "AssertionOutcome",
    "Nested",
    "StructuredViolation",
    "Violation",
    "ViolationRecord",
]
