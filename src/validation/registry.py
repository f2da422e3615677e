"""Registry mapping constraint names to assertion constructors.

A registry is an explicit value: callers create one (usually with
``Registry.default()``), optionally register their own constraints, and hand
it to ``struct_validator``. Nothing is registered globally.

Example:
    >>> registry = Registry.default()
    >>> registry.register("even", parse_even)
    >>> validator = struct_validator(Order, registry)
"""

from collections.abc import Mapping
from typing import Self

from src.validation.assertions.base import Assertion, AssertionConstructor
from src.validation.assertions.between import parse_between
from src.validation.assertions.required import parse_required
from src.validation.errors import UnknownConstraintError
from src.validation.kinds import Kind

BUILTIN_CONSTRUCTORS: Mapping[str, AssertionConstructor] = {
    "required": parse_required,
    "between": parse_between,
}


class Registry:
    """Resolves constraint names into assertions."""

    def __init__(
        self, constructors: Mapping[str, AssertionConstructor] | None = None
    ) -> None:
        self._constructors: dict[str, AssertionConstructor] = dict(constructors or {})

    @classmethod
    def default(cls) -> Self:
        """Return a new registry holding the built-in constraints."""
        return cls(BUILTIN_CONSTRUCTORS)

    def register(self, name: str, constructor: AssertionConstructor) -> None:
        """Register ``constructor`` under ``name``, replacing any previous one."""
        self._constructors[name] = constructor

    def names(self) -> list[str]:
        """Return the registered constraint names, sorted."""
        return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return name in self._constructors

    def resolve(self, name: str, kind: Kind, args: str) -> Assertion:
        """Build the assertion ``name`` for a field of ``kind``.

        Args:
            name: The constraint name from the tag.
            kind: The declared kind of the field.
            args: Everything after the first ``:`` of the tag spec.

        Returns:
            Assertion: The bound assertion.

        Raises:
            UnknownConstraintError: If ``name`` is not registered.
        """
        constructor = self._constructors.get(name)
        if constructor is None:
            raise UnknownConstraintError(name)
        return constructor(kind, args)
