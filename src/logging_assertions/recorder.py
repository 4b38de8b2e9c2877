"""Recording logger handed to the code under test.

Every call pulls the head of the expectation queue, checks that it is the
right kind of operation, matches the payload and only then advances the
queue. Nested scopes are not tracked separately: a scope close must simply
find an ``EndScope`` expectation at the head of the queue.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, NoReturn, Protocol, TypeVar

from logging_assertions.errors import (
    LoggingAssertionFailedError,
    UnexpectedCallKindError,
    WrongLevelError,
)
from logging_assertions.expectations import (
    BeginScopeExpectation,
    EndScopeExpectation,
    ExpectationNode,
    ExpectationQueue,
    MessageExpectation,
)
from logging_assertions.logging_utils import DEFAULT_LOGGER, LoggingManager
from logging_assertions.templates import FormattedLogValues, format_log_values
from logging_assertions.types import Formatter, LogLevel

LIBRARY_NAME = "logging-assertions"

NodeT = TypeVar("NodeT", bound=ExpectationNode)


class ScopeHandle(Protocol):
    def close(self) -> None: ...

    def __enter__(self) -> Any: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None: ...


class Logger(Protocol):
    """The structured logging interface observed by the mock."""

    def log(
        self,
        level: LogLevel,
        state: Any,
        error: BaseException | None,
        formatter: Formatter,
    ) -> None: ...

    def begin_scope(self, state: Any) -> ScopeHandle: ...

    def is_enabled(self, level: LogLevel) -> bool: ...


class ScopeCloser:
    """Closes a logging scope, consuming the matching ``EndScope`` expectation."""

    def __init__(self, recorder: LoggerRecorder, state: Any) -> None:
        self.recorder = recorder
        self.state = state

    def __enter__(self) -> ScopeCloser:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            self.close()
        else:
            self.recorder.close_scope_after_error(exc)

    def close(self) -> None:
        self.recorder.close_scope()


class LoggerRecorder:
    """Implementation of :class:`Logger` backed by an expectation queue."""

    def __init__(
        self,
        queue: ExpectationQueue,
        name: str = "",
        *,
        logger: LoggingManager = DEFAULT_LOGGER,
    ) -> None:
        self.queue = queue
        self.name = name
        self.logger = logger

    def _expect(self, node_type: type[NodeT], method_call: str) -> NodeT:
        try:
            node = self.queue.peek_next()
        except LoggingAssertionFailedError as exc:
            self.logger.log(f"[FAIL] {exc}")
            raise

        if not isinstance(node, node_type):
            self._fail(
                UnexpectedCallKindError(
                    f"The '{method_call}' method has been called but expected other action "
                    f"(Expected: {node.kind.value})",
                    expected_label=node.display_label,
                )
            )
        return node

    def _fail(self, error: LoggingAssertionFailedError) -> NoReturn:
        self.logger.log(f"[FAIL] {error}")
        raise error

    def _consume(self, node: ExpectationNode) -> None:
        self.queue.advance(node)
        self.logger.debug(
            "Matched %s (%d/%d)",
            node.display_label,
            self.queue.consumed_count,
            len(self.queue),
        )

    def log(
        self,
        level: LogLevel,
        state: Any,
        error: BaseException | None = None,
        formatter: Formatter = format_log_values,
    ) -> None:
        node = self._expect(MessageExpectation, "log()")

        if node.level != level:
            self._fail(
                WrongLevelError(
                    "Wrong log level for the log() method call. "
                    f"(Expected: {node.level.label}, Actual: {level.label})",
                    expected_label=node.display_label,
                )
            )

        try:
            node.match(level, state, error, formatter)
        except LoggingAssertionFailedError as exc:
            if exc.expected_label is None:
                exc.expected_label = node.display_label
            self.logger.log(f"[FAIL] {exc}")
            raise

        self._consume(node)

    def begin_scope(self, state: Any) -> ScopeCloser:
        node = self._expect(BeginScopeExpectation, "begin_scope()")

        try:
            node.match(state)
        except LoggingAssertionFailedError as exc:
            exc.expected_label = node.display_label
            self.logger.log(f"[FAIL] {exc}")
            raise

        self._consume(node)
        return ScopeCloser(self, state)

    def close_scope(self) -> None:
        node = self._expect(EndScopeExpectation, "close()")
        self._consume(node)

    def close_scope_after_error(self, error: BaseException) -> None:
        """Close a scope left by an exception without masking that exception."""
        if self.queue.is_fully_consumed():
            return
        node = self.queue.peek_next()
        if isinstance(node, EndScopeExpectation):
            self._consume(node)
        else:
            self.logger.debug("Scope left by %s; expected %s was not consumed", type(error).__name__, node.display_label)

    def is_enabled(self, level: LogLevel) -> bool:
        raise NotImplementedError(f"The mock of this method is not supported by the '{LIBRARY_NAME}' library.")

    # Leveled helpers building a message-template state.

    def _log_template(self, level: LogLevel, template: str, args: tuple[Any, ...], exc: BaseException | None) -> None:
        self.log(level, FormattedLogValues(template, args), exc, format_log_values)

    def trace(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.TRACE, template, args, exc)

    def debug(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.DEBUG, template, args, exc)

    def information(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.INFORMATION, template, args, exc)

    def warning(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.WARNING, template, args, exc)

    def error(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.ERROR, template, args, exc)

    def critical(self, template: str, *args: Any, exc: BaseException | None = None) -> None:
        self._log_template(LogLevel.CRITICAL, template, args, exc)
