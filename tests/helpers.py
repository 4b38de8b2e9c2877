"""Reusable test utilities: recording stubs and sample code under test."""

from __future__ import annotations

import dataclasses
from types import SimpleNamespace


class RecordingLogger:
    """In-memory stand-in for ``LoggingManager`` capturing diagnostics."""

    def __init__(self):
        self.messages: list[str] = []
        self.setup_calls: list[bool] = []

    def setup(self, verbose: bool) -> None:
        self.setup_calls.append(verbose)

    def log(self, msg: str) -> None:
        self.messages.append(msg)

    def debug(self, msg: str, *args: object) -> None:
        self.messages.append(f"DEBUG:{msg % args if args else msg}")


@dataclasses.dataclass
class State:
    scope_level: int
    scope_name: str | None = None


class ObjectToLog:
    """Code under test: drives a structured logger in a few fixed patterns."""

    def __init__(self, logger):
        self.logger = logger

    def invoke(self) -> None:
        self.logger.trace("Log Trace {0}", 1)
        self.logger.debug("Log Debug {0}", 2)
        self.logger.information("Log Information {0}", 3)
        self.logger.warning("Log Warning {0}", 4)
        self.logger.error("Log Error {0}", 5)

    def invoke_with_exception(self, exception: BaseException) -> None:
        self.logger.information("Log before error")
        self.logger.error("Log Error {Id}", 1234, exc=exception)
        self.logger.trace("Log Trace after error")
        self.logger.debug("Log Debug after error")
        self.logger.information("Log Information after error")
        self.logger.warning("Log Warning after error")
        self.logger.error("Log Error after error")

    def invoke_with_exception_chained_with_other_sequence(self, exception: BaseException) -> None:
        self.logger.error("Log Error", exc=exception)

        with self.logger.begin_scope(SimpleNamespace(scope="Scope 1")):
            self.logger.trace("Log Trace after error")
            self.logger.debug("Log Debug after error")
            self.logger.information("Log Information after error")

        self.logger.warning("Log Warning after error")
        self.logger.error("Log Error after error")

    def invoke_with_exception_chained_with_log_error(self, exception: BaseException) -> None:
        self.logger.error("Log Error", exc=exception)
        self.logger.error("Log Error after error")

    def _invoke_with_scopes(self, first, second) -> None:
        self.logger.trace("Log Trace {0}", 1)

        with self.logger.begin_scope(first):
            self.logger.debug("Log Debug {0}", 2)

            with self.logger.begin_scope(second):
                self.logger.information("Log Information {0}", 3)

            self.logger.warning("Log Warning {0}", 4)

        self.logger.error("Log Error {0}", 5)

    def invoke_with_scope(self) -> None:
        self._invoke_with_scopes(State(1, "Scope level 1"), State(2, "Scope level 2"))

    def invoke_with_scope_as_namespace(self) -> None:
        self._invoke_with_scopes(
            SimpleNamespace(scope_level=1, scope_name="Scope level 1"),
            SimpleNamespace(scope_level=2, scope_name="Scope level 2"),
        )

    def invoke_with_scope_as_dictionary(self) -> None:
        self._invoke_with_scopes(
            {"scope_level": 1, "scope_name": "Scope level 1"},
            {"scope_level": 2, "scope_name": "Scope level 2"},
        )

    def invoke_with_message_template(self) -> None:
        self.logger.information(
            "Log information with parameters {Id}, {Name} and {Object}",
            1234,
            "The name",
            SimpleNamespace(property="I am object"),
        )
        self.logger.error("Log error after message template")

    def invoke_with_exception_in_scope(self) -> None:
        self.logger.trace("Log Trace {0}", 1)

        with self.logger.begin_scope(State(1, "Scope level 1")):
            self.logger.debug("Log Debug {0}", 2)

            with self.logger.begin_scope(State(2, "Scope level 2")):
                self.logger.information("Log Information {0}", 3)

                raise ValueError("The exception")


class Token:
    """Value object whose state is private and compared through ``__eq__``."""

    def __init__(self, value: int) -> None:
        self._value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Token) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Token({self._value})"
