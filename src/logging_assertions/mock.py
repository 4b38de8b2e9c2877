"""Logger mock with a strict, ordered expectation sequence.

Typical use::

    mock = LoggerMock()
    (
        mock.setup_sequence()
        .log_information("Loading {Count} orders")
            .with_argument_values(3)
        .begin_scope({"OrderId": 1234})
            .log_error("Payment refused")
                .with_exception(PaymentError("card expired"))
        .end_scope()
    )

    OrderProcessor(mock.object).run()

    mock.verify_logs()

The setup methods return stage objects that only expose the continuations
valid at that point: ``with_arguments`` right after a message, and
``with_exception`` right after an error or critical message.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from typing import Any

from rich.console import Console

from logging_assertions.expectations import (
    BeginScopeExpectation,
    EndScopeExpectation,
    ExpectationNode,
    ExpectationQueue,
    MessageExpectation,
)
from logging_assertions.logging_utils import DEFAULT_LOGGER, LoggingManager
from logging_assertions.matchers import (
    ArgumentsPredicate,
    ExceptionPredicate,
    MappingStateMatcher,
    StructuralStateMatcher,
    TypedStateMatcher,
    argument_values_predicate,
    deep_equals,
    exception_predicate,
)
from logging_assertions.recorder import LoggerRecorder
from logging_assertions.report import incomplete_sequence_message, render_expectations, verify_queue
from logging_assertions.stdlib import RecordingHandler, capture_logger
from logging_assertions.types import ERROR_LEVELS, Equality, LogLevel


def category_name(category: type | str | None) -> str:
    """Logger name for a category: ``module.QualName`` for classes."""
    if category is None:
        return ""
    if isinstance(category, type):
        return f"{category.__module__}.{category.__qualname__}"
    return category


class SetupSequence:
    """Declares the expected logger calls, in order."""

    def __init__(self, mock: LoggerMock) -> None:
        self._mock = mock

    def _append(self, node: ExpectationNode) -> None:
        self._mock.queue.enqueue(node)

    def _message(self, level: LogLevel, message: str) -> MessageExpectation:
        node = MessageExpectation(level=level, message=message)
        self._append(node)
        return node

    def log(self, level: LogLevel, message: str) -> MessageSetup:
        node = self._message(level, message)
        if level in ERROR_LEVELS:
            return ErrorMessageSetup(self._mock, node)
        return MessageSetup(self._mock, node)

    def log_trace(self, message: str) -> MessageSetup:
        return MessageSetup(self._mock, self._message(LogLevel.TRACE, message))

    def log_debug(self, message: str) -> MessageSetup:
        return MessageSetup(self._mock, self._message(LogLevel.DEBUG, message))

    def log_information(self, message: str) -> MessageSetup:
        return MessageSetup(self._mock, self._message(LogLevel.INFORMATION, message))

    def log_warning(self, message: str) -> MessageSetup:
        return MessageSetup(self._mock, self._message(LogLevel.WARNING, message))

    def log_error(self, message: str) -> ErrorMessageSetup:
        return ErrorMessageSetup(self._mock, self._message(LogLevel.ERROR, message))

    def log_critical(self, message: str) -> ErrorMessageSetup:
        return ErrorMessageSetup(self._mock, self._message(LogLevel.CRITICAL, message))

    def begin_scope(self, expected: Any) -> SetupSequence:
        """Expect a scope whose state is structurally equivalent to ``expected``."""
        self._append(BeginScopeExpectation(StructuralStateMatcher(expected, self._mock.equality)))
        return SetupSequence(self._mock)

    def begin_scope_as_dictionary(self, expected: Any) -> SetupSequence:
        """Expect a scope whose state is a mapping equivalent to ``expected``'s members."""
        self._append(BeginScopeExpectation(MappingStateMatcher(expected, self._mock.equality)))
        return SetupSequence(self._mock)

    def begin_scope_of(self, state_type: type, assertion: Callable[[Any], Any]) -> SetupSequence:
        """Expect a scope whose state is a ``state_type`` accepted by ``assertion``."""
        self._append(BeginScopeExpectation(TypedStateMatcher(state_type, assertion)))
        return SetupSequence(self._mock)

    def end_scope(self) -> SetupSequence:
        self._append(EndScopeExpectation())
        return SetupSequence(self._mock)


class MessageSetup(SetupSequence):
    """Stage reached right after declaring a message."""

    def __init__(self, mock: LoggerMock, node: MessageExpectation) -> None:
        super().__init__(mock)
        self._node = node

    def with_arguments(self, count: int, predicate: ArgumentsPredicate) -> SetupSequence:
        """Match the template arguments instead of the rendered message."""
        self._node.use_arguments(count, predicate)
        return SetupSequence(self._mock)

    def with_argument_values(self, *values: Any) -> SetupSequence:
        """Match the template arguments positionally against ``values``."""
        return self.with_arguments(len(values), argument_values_predicate(values, self._mock.equality))


class ErrorMessageSetup(MessageSetup):
    """Stage reached right after declaring an error or critical message."""

    def with_exception(self, expected: BaseException | ExceptionPredicate) -> MessageSetup:
        """Require an error, equal by type and message or accepted by a predicate."""
        self._node.exception_matcher = exception_predicate(expected)
        return MessageSetup(self._mock, self._node)


class LoggerMock:
    """Mock of the structured logger interface.

    Declare the calls with :meth:`setup_sequence`, hand :attr:`object` to the
    code under test and finish the test with :meth:`verify_logs`.
    """

    def __init__(
        self,
        category: type | str | None = None,
        *,
        equality: Equality = deep_equals,
        logger: LoggingManager = DEFAULT_LOGGER,
    ) -> None:
        self.queue = ExpectationQueue()
        self.equality = equality
        self.logger = logger
        self.object = LoggerRecorder(self.queue, category_name(category), logger=logger)

    def setup_sequence(self) -> SetupSequence:
        return SetupSequence(self)

    def verify_logs(self) -> None:
        """Fail when some declared calls never happened."""
        if not self.queue.is_fully_consumed():
            self.logger.log(f"[FAIL] {incomplete_sequence_message(self.queue)}")
        verify_queue(self.queue)
        self.logger.log(f"[OK] All {len(self.queue)} expected logger calls were made.")

    verify = verify_logs

    def describe(self, console: Console | None = None) -> None:
        render_expectations(self.queue, console)

    @contextlib.contextmanager
    def capture(self, target: logging.Logger | str) -> Iterator[RecordingHandler]:
        """Verify the records of a standard library logger against this mock."""
        if isinstance(target, str):
            target = logging.getLogger(target)
        with capture_logger(target, self.object) as handler:
            yield handler
