"""Errors raised while building or applying struct validators.

Build-time errors abort validator construction; there is never a partially
built validator. ``TypeMismatchError`` is raised at validation time when a
validator is applied to a value of the wrong class. All of them signal
programming errors rather than bad client input, so they carry a 500 status
and high severity, and responses hide their message.
"""

from src.core.exceptions import ErrorCode, Severity, VerdictError


class ValidatorBuildError(VerdictError):
    """Base class for errors raised while building a struct validator.

    Args:
        message: Description of the failure
        error_code: Error code of the concrete failure
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.INVALID_STRUCTURE,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            error_code,
            message,
            status_code=500,
            severity=Severity.HIGH,
            cause=cause,
            masked=True,
        )


class InvalidStructureError(ValidatorBuildError):
    """Raised when a validator is requested for a non-structured type.

    Also raised when the annotations of a structure cannot be resolved.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, ErrorCode.INVALID_STRUCTURE, cause)


class UnknownConstraintError(ValidatorBuildError):
    """Raised when a constraint tag names an unregistered constraint."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown constraint: {name!r}", ErrorCode.UNKNOWN_CONSTRAINT)
        self.name = name


class ConstraintArgumentError(ValidatorBuildError):
    """Raised when the arguments of a constraint cannot be parsed."""

    def __init__(
        self, name: str, args: str, cause: BaseException | None = None
    ) -> None:
        reason = f": {cause}" if cause else ""
        super().__init__(
            f"parse args of {name!r} ({args!r}){reason}",
            ErrorCode.INVALID_CONSTRAINT_ARGUMENT,
            cause,
        )
        self.name = name
        self.args_string = args


class UnsupportedKindError(ValidatorBuildError):
    """Raised when a constraint cannot apply to a field's declared kind."""

    def __init__(self, name: str, kind: object) -> None:
        super().__init__(
            f"constraint {name!r} does not support {kind}",
            ErrorCode.UNSUPPORTED_CONSTRAINT,
        )
        self.name = name
        self.kind = kind


class TypeMismatchError(VerdictError, TypeError):
    """Raised when a validator receives a value of a different class."""

    def __init__(self, expected: type, actual: type) -> None:
        super().__init__(
            ErrorCode.TYPE_MISMATCH,
            f"type mismatch: expected {expected.__qualname__}, "
            f"got {actual.__qualname__}",
            status_code=500,
            severity=Severity.HIGH,
            masked=True,
        )
        self.expected = expected
        self.actual = actual
