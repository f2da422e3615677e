"""Coded error hierarchy shared by the validation engine and the HTTP layer.

Every error the application returns to a client carries four things: a
machine-readable code, an HTTP status, a human-readable message and an
optional detail payload. The HTTP layer only relies on that contract (see
``APIError``), so any exception exposing those attributes can be serialized,
including the validation engine's ``ValidationResult``.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **Severity enum**: Error classification for logging and alerting
- **VerdictError**: Base exception implementing the coded error contract
- **ErrorMap**: Lookup of known errors by code
- **GENERIC_ERROR**: Fallback wrapper for exceptions without a code
"""

from enum import Enum
from typing import Any, Protocol, Self, runtime_checkable


class ErrorCode(Enum):
    """Standardized error codes for the Verdict application."""

    GENERIC = "generic"
    """An unspecified error occurred."""

    INVALID_ENTITY = "invalid_entity"
    """A submitted entity failed struct validation."""

    TYPE_MISMATCH = "type_mismatch"
    """A validator was applied to a value of a different type."""

    UNKNOWN_CONSTRAINT = "unknown_constraint"
    """A constraint tag references a constraint that is not registered."""

    INVALID_CONSTRAINT_ARGUMENT = "invalid_constraint_argument"
    """A constraint tag carries arguments that cannot be parsed."""

    UNSUPPORTED_CONSTRAINT = "unsupported_constraint"
    """A constraint cannot be applied to the declared kind of a field."""

    INVALID_STRUCTURE = "invalid_structure"
    """A validator was requested for something that is not a structure."""

    NOT_FOUND = "not_found"
    """The requested resource could not be found."""

    METHOD_NOT_ALLOWED = "method_not_allowed"
    """The resource exists but does not accept the request method."""

    BAD_REQUEST = "bad_request"
    """The request could not be understood."""


class Severity(Enum):
    """Severity levels used to pick log levels and alerting."""

    LOW = "LOW"
    """Caused by client input, part of normal operation."""

    MEDIUM = "MEDIUM"
    """Affects a single operation but not the service."""

    HIGH = "HIGH"
    """Programming or configuration errors that need attention."""

    CRITICAL = "CRITICAL"
    """Failures that may take the service down."""


@runtime_checkable
class APIError(Protocol):
    """Contract of an error that can be returned to an HTTP client."""

    @property
    def error_code(self) -> str:
        """Unique code identifying the error."""
        ...

    @property
    def status_code(self) -> int:
        """HTTP status code of the response."""
        ...

    @property
    def message(self) -> str:
        """Human-readable error message."""
        ...

    @property
    def detail(self) -> Any:  # noqa: ANN401 - detail payloads are free-form
        """Optional data associated with the error."""
        ...


class VerdictError(Exception):
    """Base exception class for all Verdict application exceptions.

    Instances double as templates: module-level errors such as
    ``GENERIC_ERROR`` are never raised directly but copied with ``wrap`` or
    ``apply`` so that the template itself stays untouched.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        status_code: HTTP status used when the error reaches a client
        severity: Severity level of the error (defaults to MEDIUM)
        detail: Optional data returned to the client alongside the message
        cause: The original exception that caused this error
        masked: Hide message and detail from clients when True
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        status_code: int = 500,
        severity: Severity = Severity.MEDIUM,
        detail: Any = None,  # noqa: ANN401 - detail payloads are free-form
        cause: BaseException | None = None,
        *,
        masked: bool = False,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.status_code = status_code
        self.severity = severity
        self._detail = detail
        self.cause = cause
        self._masked = masked

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def detail(self) -> Any:  # noqa: ANN401 - detail payloads are free-form
        """Return the optional data associated with the error."""
        return self._detail

    @property
    def mask_error(self) -> bool:
        """Whether message and detail must be hidden from clients."""
        return self._masked

    @property
    def is_expected(self) -> bool:
        """Determine if this is an expected error based on severity.

        Returns:
            bool: True if the error is expected (LOW or MEDIUM severity)
        """
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    @property
    def should_alert(self) -> bool:
        """Determine if this error should trigger alerts.

        Returns:
            bool: True if the error should trigger alerts (HIGH or CRITICAL severity)
        """
        return self.severity in (Severity.HIGH, Severity.CRITICAL)

    def wrap(self, cause: BaseException) -> "VerdictError":
        """Return a copy of this error caused by ``cause``.

        The copy keeps code, status, severity and detail, and appends the
        cause's message to its own.

        Args:
            cause: The underlying exception.

        Returns:
            VerdictError: A new error chained to ``cause``.
        """
        return VerdictError(
            self.error_code,
            f"{self.message}: {cause}",
            status_code=self.status_code,
            severity=self.severity,
            detail=self.detail,
            cause=cause,
            masked=self._masked,
        )

    def apply(self, detail: Any) -> "VerdictError":  # noqa: ANN401
        """Return a copy of this error carrying ``detail``."""
        return VerdictError(
            self.error_code,
            self.message,
            status_code=self.status_code,
            severity=self.severity,
            detail=detail,
            cause=self.cause,
            masked=self._masked,
        )

    def matches(self, other: object) -> bool:
        """Report whether ``other`` is the same kind of error.

        Two coded errors are the same kind when they share a code, which
        lets callers compare a raised copy against its template.

        Args:
            other: The error to compare against.

        Returns:
            bool: True for the same instance or an error with the same code.
        """
        if other is self:
            return True
        if not isinstance(other, VerdictError):
            return False
        return self.error_code == other.error_code

    def __str__(self) -> str:
        """Return a string representation of the exception.

        Returns:
            str: A formatted string containing the error code and message
        """
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception.

        Returns:
            str: A string showing the class name, error code, message, status
                and severity
        """
        class_name = self.__class__.__name__
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', status_code={self.status_code}, "
            f"severity={self.severity.value})"
        )


class ErrorMap(dict[str, VerdictError]):
    """Lookup table of errors keyed by their code."""

    @classmethod
    def of(cls, *errors: VerdictError) -> Self:
        """Build a map from errors, keyed by their own codes."""
        return cls({error.error_code: error for error in errors})

    def resolve(self, code: str) -> VerdictError | None:
        """Return the error registered for ``code``, if any."""
        return self.get(code)


GENERIC_ERROR = VerdictError(ErrorCode.GENERIC, "generic error", 500)
"""Fallback for exceptions that do not implement the coded error contract."""


def as_api_error(exc: BaseException) -> APIError:
    """Return ``exc`` when it is a coded error, else wrap it in GENERIC_ERROR.

    Args:
        exc: Any exception.

    Returns:
        APIError: An error implementing the coded error contract.
    """
    if isinstance(exc, APIError):
        return exc
    return GENERIC_ERROR.wrap(exc)
