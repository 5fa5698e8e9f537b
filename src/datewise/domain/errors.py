"""Domain error hierarchy.

Every error raised by the domain layer derives from :class:`DatewiseError`
(itself a ``ValueError``).  Each class carries a stable ``code`` that the
service layer copies into ``ServiceError.code``.
"""

from __future__ import annotations

from typing import Any, ClassVar


class DatewiseError(ValueError):
    """Base class for all datewise domain errors."""

    code: ClassVar[str] = "DATEWISE_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidDateError(DatewiseError):
    """Input cannot be parsed as a calendar date/time."""

    code = "INVALID_DATE"


class UnknownRangeError(DatewiseError):
    """Unrecognized named range identifier."""

    code = "UNKNOWN_RANGE"


class UnknownPeriodError(DatewiseError):
    """Unrecognized billing period or boundary period identifier."""

    code = "UNKNOWN_PERIOD"


class InvalidArgumentError(DatewiseError):
    """A numeric or enumerated argument violates a precondition."""

    code = "INVALID_ARGUMENT"


class InvalidTimezoneError(InvalidArgumentError):
    """Zone id is not known to the timezone database."""

    code = "INVALID_TIMEZONE"


class InvalidRangeError(InvalidArgumentError):
    """Range bounds are reversed (start after end)."""

    code = "INVALID_RANGE"


class ConfigurationError(DatewiseError):
    """A policy input would make an operation meaningless or non-terminating."""

    code = "CONFIGURATION"
