"""Expectation nodes and the ordered queue they are consumed from."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterator
from typing import Any, ClassVar

from logging_assertions.errors import MissingExpectedExceptionError, QueueExhaustedError
from logging_assertions.matchers import (
    ArgumentsPredicate,
    ExactMessageMatcher,
    ExceptionPredicate,
    ScopeStateMatcher,
    TemplateArgumentsMatcher,
)
from logging_assertions.types import Formatter, LogLevel


class ExpectationKind(enum.Enum):
    MESSAGE = "Message"
    BEGIN_SCOPE = "BeginScope"
    END_SCOPE = "EndScope"


@dataclasses.dataclass(eq=False)
class ExpectationNode:
    """One declared logger interaction."""

    kind: ClassVar[ExpectationKind]

    @property
    def display_label(self) -> str:
        return self.kind.value


@dataclasses.dataclass(eq=False)
class MessageExpectation(ExpectationNode):
    """A leveled message, matched by exact text or by template arguments."""

    kind: ClassVar[ExpectationKind] = ExpectationKind.MESSAGE

    level: LogLevel
    message: str
    matcher: ExactMessageMatcher | TemplateArgumentsMatcher = dataclasses.field(init=False)
    exception_matcher: ExceptionPredicate | None = None

    def __post_init__(self) -> None:
        self.matcher = ExactMessageMatcher(self.message)

    @property
    def display_label(self) -> str:
        return f"{self.kind.value}: ({self.message})"

    def use_arguments(self, count: int, predicate: ArgumentsPredicate) -> None:
        """Switch to template-argument matching; the message stays the label."""
        self.matcher = TemplateArgumentsMatcher(count, predicate)

    def match(self, level: LogLevel, state: Any, error: BaseException | None, formatter: Formatter) -> None:
        self.matcher.match(level, state, error, formatter)

        if self.exception_matcher is not None:
            if error is None:
                raise MissingExpectedExceptionError(
                    "Expected an exception but no exception has been raised.",
                    expected_label=self.display_label,
                )
            self.exception_matcher(error)


@dataclasses.dataclass(eq=False)
class BeginScopeExpectation(ExpectationNode):
    kind: ClassVar[ExpectationKind] = ExpectationKind.BEGIN_SCOPE

    matcher: ScopeStateMatcher

    def match(self, state: Any) -> None:
        self.matcher.match(state)


@dataclasses.dataclass(eq=False)
class EndScopeExpectation(ExpectationNode):
    kind: ClassVar[ExpectationKind] = ExpectationKind.END_SCOPE


class ExpectationQueue:
    """Insertion-ordered expectations with a single read cursor.

    The cursor only moves through :meth:`advance`, which the recorder calls
    once the head node has matched.
    """

    def __init__(self) -> None:
        self._nodes: list[ExpectationNode] = []
        self._consumed_count = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ExpectationNode]:
        return iter(self._nodes)

    @property
    def consumed_count(self) -> int:
        return self._consumed_count

    def enqueue(self, node: ExpectationNode) -> ExpectationNode:
        self._nodes.append(node)
        return node

    def peek_next(self) -> ExpectationNode:
        """Return the head node without consuming it."""
        if self._consumed_count >= len(self._nodes):
            raise QueueExhaustedError(f"The logger has been called too many times (Expected: {len(self._nodes)} calls)")
        return self._nodes[self._consumed_count]

    def advance(self, node: ExpectationNode) -> None:
        """Consume ``node``, which must be the current head."""
        if self._consumed_count >= len(self._nodes) or self._nodes[self._consumed_count] is not node:
            raise ValueError(f"Cannot consume {node.display_label}: it is not the next expectation.")
        self._consumed_count += 1

    def unconsumed_labels(self) -> list[str]:
        return [node.display_label for node in self._nodes[self._consumed_count :]]

    def is_fully_consumed(self) -> bool:
        return self._consumed_count == len(self._nodes)
