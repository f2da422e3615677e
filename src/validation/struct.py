"""Build struct validators from constraint tags and apply them to values.

Building is the expensive step: tags are parsed, constraint names resolved
and arguments parsed exactly once per structure, and nested structures get
validators of their own. The built ``StructValidator`` is immutable and can be
shared freely between threads and requests.

Example:
    >>> @dataclass
    ... class Signup:
    ...     email: str = field(metadata={"validate": "required", "json": "email"})
    ...     age: int = field(metadata={"validate": "between:18:130"})
    >>> validator = struct_validator(Signup)
    >>> result = validator.validate(Signup(email="", age=12))
    >>> sorted(result.fields)
    ['age', 'email']
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from loguru import logger

from src.validation.assertions.base import (
    Assertion,
    AssertionOutcome,
    Nested,
    StructuredViolation,
    Violation,
)
from src.validation.errors import TypeMismatchError
from src.validation.kinds import FieldDescriptor, Kind, StructuralType, describe
from src.validation.registry import Registry
from src.validation.result import ValidationResult


@dataclass(frozen=True)
class ConstraintSpec:
    """One ``name[:args]`` entry of a constraint tag."""

    name: str
    args: str = ""

    @classmethod
    def parse_tag(cls, tag: str | None) -> list["ConstraintSpec"]:
        """Split a constraint tag into its specs, in declaration order."""
        if not tag or not tag.strip():
            return []
        specs = []
        for part in tag.split(","):
            name, _, args = part.strip().partition(":")
            specs.append(cls(name, args))
        return specs


@dataclass(frozen=True)
class FieldSpec:
    """The assertions of one field and the name it is reported under."""

    alias: str
    assertions: tuple[Assertion, ...]


def field_alias(descriptor: FieldDescriptor) -> str:
    """Return the external name of a field.

    The alias is the first comma-delimited segment of the serialization tag,
    falling back to the declared name when that segment is missing or empty.
    """
    if descriptor.serialization_tag:
        alias = descriptor.serialization_tag.split(",", 1)[0]
        if alias:
            return alias
    return descriptor.name


class StructValidator:
    """Validator bound to exactly one structure.

    Use ``struct_validator`` to build one.

    Args:
        structure: The structure this validator accepts
        fields: Field specs keyed by declared field name
    """

    def __init__(
        self, structure: StructuralType, fields: Mapping[str, FieldSpec]
    ) -> None:
        self.structure = structure
        self.fields: Mapping[str, FieldSpec] = MappingProxyType(dict(fields))

    @property
    def bound_type(self) -> type:
        """The class of the values this validator accepts."""
        return self.structure.type

    def validate(self, value: object) -> ValidationResult | None:
        """Run every assertion of every field against ``value``.

        All assertions run, so a single call reports every violation.

        Args:
            value: An instance of the bound class.

        Returns:
            ValidationResult | None: The violations, or None if there are none.

        Raises:
            TypeMismatchError: If ``value`` is not exactly of the bound class.
        """
        if type(value) is not self.bound_type:
            raise TypeMismatchError(self.bound_type, type(value))

        collected: dict[str, list[StructuredViolation | Exception]] = {}
        for name, spec in self.fields.items():
            field_value = getattr(value, name)
            for assertion in spec.assertions:
                outcome: AssertionOutcome = assertion.validate(field_value)
                match outcome:
                    case None:
                        pass
                    case Violation(record=record):
                        collected.setdefault(spec.alias, []).append(record)
                    case Nested(result=nested):
                        for path, violations in nested.fields.items():
                            collected.setdefault(f"{spec.alias}.{path}", []).extend(
                                violations
                            )

        if collected:
            return ValidationResult(collected)
        return None

    def check(self, value: object) -> None:
        """Validate ``value`` and raise the result if there are violations.

        Raises:
            ValidationResult: If ``value`` violates any constraint.
            TypeMismatchError: If ``value`` is not exactly of the bound class.
        """
        result = self.validate(value)
        if result is not None:
            raise result

    def __repr__(self) -> str:
        return f"StructValidator({self.structure.name}, fields={list(self.fields)})"


@dataclass(frozen=True)
class NestedStruct:
    """Assertion running a nested struct validator.

    A field value of another class (a subclass instance, or None) is reported
    as a violation of the field instead of aborting the outer validation.
    """

    validator: StructValidator

    def validate(self, value: object) -> AssertionOutcome:
        try:
            result = self.validator.validate(value)
        except TypeMismatchError as e:
            return Violation(e)
        if result is None:
            return None
        return Nested(result)


def _field_spec(descriptor: FieldDescriptor, registry: Registry) -> FieldSpec | None:
    assertions: list[Assertion] = [
        registry.resolve(spec.name, descriptor.kind, spec.args)
        for spec in ConstraintSpec.parse_tag(descriptor.constraint_tag)
    ]

    if descriptor.kind is Kind.STRUCTURED:
        nested = _build(descriptor.nested(), registry)
        assertions.append(NestedStruct(nested))

    if not assertions:
        return None
    return FieldSpec(alias=field_alias(descriptor), assertions=tuple(assertions))


def _build(structure: StructuralType, registry: Registry) -> StructValidator:
    fields = {}
    for descriptor in structure.fields:
        spec = _field_spec(descriptor, registry)
        if spec is not None:
            fields[descriptor.name] = spec
    return StructValidator(structure, fields)


def struct_validator(
    target: object, registry: Registry | None = None
) -> StructValidator:
    """Build a validator for a dataclass or Pydantic model.

    Nested structures are validated recursively. Self-referencing structures
    must go through an optional field, which is not recursed into.

    Args:
        target: The structure class, or an instance of it.
        registry: Constraints available to tags. Defaults to the built-ins.

    Returns:
        StructValidator: The immutable validator.

    Raises:
        InvalidStructureError: If ``target`` is not a structure.
        UnknownConstraintError: If a tag names an unregistered constraint.
        ConstraintArgumentError: If constraint arguments cannot be parsed.
        UnsupportedKindError: If a constraint does not apply to a field's kind.
    """
    if registry is None:
        registry = Registry.default()
    validator = _build(describe(target), registry)
    logger.debug(
        "Built struct validator for {}",
        validator.structure.name,
        validated_fields=list(validator.fields),
    )
    return validator
