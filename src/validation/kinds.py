"""Structural type descriptions derived from dataclasses and Pydantic models.

The validation engine never inspects arbitrary runtime types. Instead every
field of a structure is classified once into a ``Kind`` when the structure is
described, and constraint constructors dispatch on that kind.

Supported structures:
- **dataclasses**: tags live in field metadata, e.g.
  ``field(metadata={"validate": "required", "json": "name,omitempty"})``
- **Pydantic models**: the constraint tag lives in ``json_schema_extra``
  (``Field(json_schema_extra={"validate": "required"})``), the serialization
  tag is the field's ``serialization_alias`` or ``alias``
"""

import collections.abc
import dataclasses
import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from src.validation.errors import InvalidStructureError

CONSTRAINT_TAG_KEY = "validate"
SERIALIZATION_TAG_KEY = "json"


class Kind(Enum):
    """Classification of a field's declared type."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"
    SEQUENCE = "sequence"
    ARRAY = "array"
    MAPPING = "mapping"
    STRUCTURED = "structured"
    OPTIONAL = "optional"
    OTHER = "other"

    def __str__(self) -> str:
        return f"{self.value} fields"


_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def is_structure(tp: object) -> bool:
    """Report whether ``tp`` is a dataclass or Pydantic model class."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def classify(annotation: object) -> tuple[Kind, object]:
    """Classify a type annotation.

    Args:
        annotation: A resolved type annotation.

    Returns:
        tuple[Kind, object]: The kind and the class the kind was derived
            from (the inner type for ``Annotated`` and optionals).
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        return classify(get_args(annotation)[0])

    if origin is Union or origin is types.UnionType:
        members = get_args(annotation)
        if type(None) in members:
            inner = [m for m in members if m is not type(None)]
            return Kind.OPTIONAL, inner[0] if len(inner) == 1 else annotation
        return Kind.OTHER, annotation

    target = origin or annotation
    if not isinstance(target, type):
        return Kind.OTHER, annotation

    # bool is a subclass of int, so it has to be checked first
    if issubclass(target, bool):
        kind = Kind.BOOLEAN
    elif issubclass(target, int):
        kind = Kind.INTEGER
    elif issubclass(target, float):
        kind = Kind.FLOAT
    elif issubclass(target, (str, bytes)):
        kind = Kind.TEXT
    elif issubclass(target, tuple):
        # tuple[X, ...] is variable-length
        args = get_args(annotation)
        kind = Kind.SEQUENCE if args and args[-1] is Ellipsis else Kind.ARRAY
    elif issubclass(target, _MAPPING_ORIGINS):
        kind = Kind.MAPPING
    elif issubclass(target, _SEQUENCE_ORIGINS):
        kind = Kind.SEQUENCE
    elif is_structure(target):
        kind = Kind.STRUCTURED
    else:
        kind = Kind.OTHER
    return kind, target


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a structure, classified."""

    name: str
    kind: Kind
    type: object
    constraint_tag: str | None = None
    serialization_tag: str | None = None

    def nested(self) -> "StructuralType":
        """Describe the structure held by a STRUCTURED field.

        Raises:
            InvalidStructureError: If the field is not structured.
        """
        if self.kind is not Kind.STRUCTURED:
            raise InvalidStructureError(f"field {self.name!r} is not a structure")
        return describe(self.type)


@dataclass(frozen=True)
class StructuralType:
    """Immutable description of a structure and its fields."""

    type: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def name(self) -> str:
        """Qualified name of the described class."""
        return self.type.__qualname__


def _dataclass_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError as e:
        raise InvalidStructureError(
            f"cannot resolve annotations of {cls.__qualname__}: {e}", cause=e
        ) from e
    descriptors = []
    for f in dataclasses.fields(cls):
        kind, tp = classify(hints.get(f.name, f.type))
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                kind=kind,
                type=tp,
                constraint_tag=f.metadata.get(CONSTRAINT_TAG_KEY),
                serialization_tag=f.metadata.get(SERIALIZATION_TAG_KEY),
            )
        )
    return tuple(descriptors)


def _model_fields(cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    descriptors = []
    for name, info in cls.model_fields.items():
        kind, tp = classify(info.annotation)
        extra: Any = info.json_schema_extra
        tag = extra.get(CONSTRAINT_TAG_KEY) if isinstance(extra, dict) else None
        descriptors.append(
            FieldDescriptor(
                name=name,
                kind=kind,
                type=tp,
                constraint_tag=tag,
                serialization_tag=info.serialization_alias or info.alias,
            )
        )
    return tuple(descriptors)


def describe(target: object) -> StructuralType:
    """Derive the structural description of a class or instance.

    Args:
        target: A dataclass or Pydantic model class, or an instance of one.

    Returns:
        StructuralType: The description of the structure.

    Raises:
        InvalidStructureError: If ``target`` is not a structure.
    """
    cls = target if isinstance(target, type) else type(target)

    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return StructuralType(type=cls, fields=_model_fields(cls))
    if dataclasses.is_dataclass(cls):
        return StructuralType(type=cls, fields=_dataclass_fields(cls))

    name = getattr(cls, "__qualname__", repr(cls))
    raise InvalidStructureError(
        f"expected a dataclass or pydantic model, got {name}"
    )
