"""The ``between:<lower>:<upper>`` constraint.

Numbers are compared by value and everything with a length by its length.
Both bounds are inclusive. Bounds are parsed once, when the validator is
built; ``upper < lower`` is accepted and simply never satisfied.
"""

from collections.abc import Callable, Sized
from dataclasses import dataclass

from src.validation.assertions.base import (
    Assertion,
    AssertionOutcome,
    Violation,
    ViolationRecord,
)
from src.validation.errors import ConstraintArgumentError, UnsupportedKindError
from src.validation.kinds import Kind

NAME = "between"
VALUE_TEMPLATE = "the value must be between {min} and {max} (is {actual})"
LENGTH_TEMPLATE = "length must be between {min} and {max} (is {actual})"


def _record(
    template: str, fmt: str, lower: object, upper: object, actual: object
) -> ViolationRecord:
    return ViolationRecord(
        code=NAME,
        message=template.format(
            min=format(lower, fmt), max=format(upper, fmt), actual=format(actual, fmt)
        ),
        template=template,
        values={"min": lower, "max": upper, "actual": actual},
    )


def _bad_type(expected: str, value: object) -> Violation:
    return Violation(
        TypeError(f"bad type, expected {expected}, got {type(value).__name__}")
    )


@dataclass(frozen=True)
class BetweenInt:
    """Asserts that an integer lies within ``[lower, upper]``."""

    lower: int
    upper: int

    def validate(self, value: object) -> AssertionOutcome:
        if isinstance(value, bool) or not isinstance(value, int):
            return _bad_type("int", value)
        if value < self.lower or value > self.upper:
            return Violation(
                _record(VALUE_TEMPLATE, "d", self.lower, self.upper, value)
            )
        return None


@dataclass(frozen=True)
class BetweenFloat:
    """Asserts that a float lies within ``[lower, upper]``."""

    lower: float
    upper: float

    def validate(self, value: object) -> AssertionOutcome:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return _bad_type("float", value)
        if value < self.lower or value > self.upper:
            return Violation(
                _record(VALUE_TEMPLATE, "f", self.lower, self.upper, float(value))
            )
        return None


@dataclass(frozen=True)
class BetweenLen:
    """Asserts that the length of a sized value lies within ``[lower, upper]``."""

    lower: int
    upper: int

    def validate(self, value: object) -> AssertionOutcome:
        if not isinstance(value, Sized):
            return _bad_type("str, sequence, tuple or mapping", value)
        length = len(value)
        if length < self.lower or length > self.upper:
            return Violation(
                _record(LENGTH_TEMPLATE, "d", self.lower, self.upper, length)
            )
        return None


def _split(args: str) -> tuple[str, str]:
    parts = args.split(":")
    if len(parts) != 2:  # noqa: PLR2004 - lower and upper
        raise ConstraintArgumentError(NAME, args)
    return parts[0], parts[1]


def _parse_int(args: str) -> Assertion:
    lower, upper = _split(args)
    try:
        return BetweenInt(int(lower), int(upper))
    except ValueError as e:
        raise ConstraintArgumentError(NAME, args, e) from e


def _parse_float(args: str) -> Assertion:
    lower, upper = _split(args)
    try:
        return BetweenFloat(float(lower), float(upper))
    except ValueError as e:
        raise ConstraintArgumentError(NAME, args, e) from e


def _parse_len(args: str) -> Assertion:
    lower, upper = _split(args)
    try:
        bounds = int(lower), int(upper)
    except ValueError as e:
        raise ConstraintArgumentError(NAME, args, e) from e
    if min(bounds) < 0:
        raise ConstraintArgumentError(NAME, args)
    return BetweenLen(*bounds)


_BY_KIND: dict[Kind, Callable[[str], Assertion]] = {
    Kind.INTEGER: _parse_int,
    Kind.FLOAT: _parse_float,
    Kind.TEXT: _parse_len,
    Kind.SEQUENCE: _parse_len,
    Kind.ARRAY: _parse_len,
    Kind.MAPPING: _parse_len,
}


def parse_between(kind: Kind, args: str) -> Assertion:
    """Build the ``between`` assertion for ``kind``.

    Raises:
        UnsupportedKindError: If ``kind`` has neither a value nor a length.
        ConstraintArgumentError: If ``args`` is not ``<lower>:<upper>``.
    """
    parse = _BY_KIND.get(kind)
    if parse is None:
        raise UnsupportedKindError(NAME, kind)
    return parse(args)
