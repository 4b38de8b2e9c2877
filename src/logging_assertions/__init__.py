"""Strict, ordered assertions on structured logger calls."""

from logging_assertions.arguments import LogMessageTemplateArguments
from logging_assertions.errors import (
    ArgumentValueMismatchError,
    ExceptionMismatchError,
    IncompleteSequenceError,
    LoggingAssertionFailedError,
    MissingExpectedExceptionError,
    MissingTemplateArgumentsError,
    QueueExhaustedError,
    StateMismatchError,
    UnexpectedCallKindError,
    WrongArgumentCountError,
    WrongLevelError,
    WrongMessageError,
    WrongStateTypeError,
)
from logging_assertions.logging_utils import setup_logging
from logging_assertions.mock import LoggerMock
from logging_assertions.recorder import Logger, LoggerRecorder, ScopeCloser
from logging_assertions.templates import ORIGINAL_FORMAT_KEY, FormattedLogValues
from logging_assertions.types import LogLevel

__all__: list[str] = [
    "ORIGINAL_FORMAT_KEY",
    "ArgumentValueMismatchError",
    "ExceptionMismatchError",
    "FormattedLogValues",
    "IncompleteSequenceError",
    "LogLevel",
    "LogMessageTemplateArguments",
    "Logger",
    "LoggerMock",
    "LoggerRecorder",
    "LoggingAssertionFailedError",
    "MissingExpectedExceptionError",
    "MissingTemplateArgumentsError",
    "QueueExhaustedError",
    "ScopeCloser",
    "StateMismatchError",
    "UnexpectedCallKindError",
    "WrongArgumentCountError",
    "WrongLevelError",
    "WrongMessageError",
    "WrongStateTypeError",
    "setup_logging",
]
