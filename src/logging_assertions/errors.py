"""Assertion failures raised by the logger test double.

Every failure derives from :class:`AssertionError` so test runners report it
as a failed assertion rather than an error in the test itself.
"""

from __future__ import annotations


class LoggingAssertionFailedError(AssertionError):
    """Base class for every mismatch detected by the logger mock."""

    def __init__(self, message: str, *, expected_label: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.expected_label = expected_label

    def __str__(self) -> str:
        return self.message


class UnexpectedCallKindError(LoggingAssertionFailedError):
    """The logger was called with another kind of operation than expected."""


class QueueExhaustedError(LoggingAssertionFailedError):
    """The logger was called more times than declared."""


class WrongLevelError(LoggingAssertionFailedError):
    pass


class WrongMessageError(LoggingAssertionFailedError):
    pass


class WrongArgumentCountError(LoggingAssertionFailedError):
    pass


class ArgumentValueMismatchError(LoggingAssertionFailedError):
    pass


class MissingTemplateArgumentsError(LoggingAssertionFailedError):
    """The logged state does not carry message template arguments."""


class WrongStateTypeError(LoggingAssertionFailedError):
    pass


class StateMismatchError(LoggingAssertionFailedError):
    """A scope state differs from the expected one (keys or values)."""


class MissingExpectedExceptionError(LoggingAssertionFailedError):
    pass


class ExceptionMismatchError(LoggingAssertionFailedError):
    pass


class IncompleteSequenceError(LoggingAssertionFailedError):
    """The logger was called fewer times than declared."""
