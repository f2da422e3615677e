"""Declarative, tag-driven struct validation.

Constraints are declared on dataclass fields (or Pydantic model fields) as a
small comma-separated language, e.g. ``"required,between:1:64"``. A validator
is built once per structure and reused for every value:

- **kinds**: classifies field types into ``Kind`` values
- **assertions**: the built-in ``required`` and ``between`` constraints
- **registry**: maps constraint names to assertion constructors
- **struct**: builds and runs ``StructValidator`` instances
- **result**: ``ValidationResult``, the 422 error listing every violation
- **errors**: build-time and type mismatch errors
"""

from src.validation.errors import (
    ConstraintArgumentError,
    InvalidStructureError,
    TypeMismatchError,
    UnknownConstraintError,
    UnsupportedKindError,
    ValidatorBuildError,
)
from src.validation.kinds import Kind, StructuralType, describe
from src.validation.registry import Registry
from src.validation.result import ValidationResult
from src.validation.struct import StructValidator, struct_validator

__all__ = [
    "ConstraintArgumentError",
    "InvalidStructureError",
    "Kind",
    "Registry",
    "StructValidator",
    "StructuralType",
    "TypeMismatchError",
    "UnknownConstraintError",
    "UnsupportedKindError",
    "ValidationResult",
    "ValidatorBuildError",
    "describe",
    "struct_validator",
]
