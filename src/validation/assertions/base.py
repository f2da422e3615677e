"""Assertion contract and the outcomes an assertion can produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.validation.kinds import Kind
    from src.validation.result import ValidationResult


@runtime_checkable
class StructuredViolation(Protocol):
    """Accessor contract of a localizable violation."""

    @property
    def code(self) -> str:
        """Machine-readable violation code."""
        ...

    @property
    def message(self) -> str:
        """Rendered human-readable message."""
        ...

    @property
    def template(self) -> str:
        """Message pattern with ``{name}`` placeholders."""
        ...

    @property
    def values(self) -> dict[str, Any] | None:
        """Values substituted into the template."""
        ...


@dataclass(frozen=True)
class ViolationRecord:
    """One failed assertion, with everything needed to re-render its message.

    ``values`` defaults to an empty mapping, so records without placeholders
    (such as ``required``) serialize as ``{}`` rather than ``null``; only the
    fallback record for unstructured violations carries ``None``.
    """

    code: str
    message: str
    template: str
    values: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Violation:
    """Outcome of an assertion that failed for the value itself.

    ``record`` is normally a ``ViolationRecord``. Assertions that cannot
    describe their failure in structured form (for example when the value has
    an unexpected type) may put any exception there instead.
    """

    record: StructuredViolation | Exception


@dataclass(frozen=True)
class Nested:
    """Outcome of a nested struct validation that failed."""

    result: ValidationResult


type AssertionOutcome = Violation | Nested | None


class Assertion(Protocol):
    """A single bound constraint check."""

    def validate(self, value: object) -> AssertionOutcome:
        """Check ``value`` and return ``None`` when it satisfies the constraint."""
        ...


class AssertionConstructor(Protocol):
    """Builds an assertion for a field kind from a constraint argument string."""

    def __call__(self, kind: Kind, args: str) -> Assertion:
        """Return the assertion, or raise a build error."""
        ...
