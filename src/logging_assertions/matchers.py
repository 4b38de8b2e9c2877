"""Payload matchers: compare what was logged against what was declared.

Matchers are stateless once built and raise a
:class:`~logging_assertions.errors.LoggingAssertionFailedError` subclass on the
first difference they find. Comparison of arbitrary objects goes through an
``Equality`` callable, :func:`deep_equals` unless the mock is given another.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import inspect
import numbers
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from logging_assertions.arguments import LogMessageTemplateArguments
from logging_assertions.errors import (
    ArgumentValueMismatchError,
    ExceptionMismatchError,
    MissingTemplateArgumentsError,
    StateMismatchError,
    WrongArgumentCountError,
    WrongMessageError,
    WrongStateTypeError,
)
from logging_assertions.templates import ORIGINAL_FORMAT_KEY
from logging_assertions.types import Equality, Formatter, LogLevel

ArgumentsPredicate = Callable[[LogMessageTemplateArguments], Any]
ExceptionPredicate = Callable[[BaseException], Any]

_SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    numbers.Number,
    decimal.Decimal,
    enum.Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    type(None),
)


def is_scalar(value: Any) -> bool:
    """Return True for values compared as a whole rather than member-wise."""
    return isinstance(value, _SCALAR_TYPES)


def _is_plain_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not hasattr(value, "_asdict")


def _is_compared_whole(value: Any) -> bool:
    return is_scalar(value) or _is_plain_sequence(value) or isinstance(value, (set, frozenset))


def project_members(value: Any) -> dict[str, Any]:
    """Project an object onto a ``{member name: value}`` mapping.

    Mappings are copied; dataclasses, named tuples, ``__dict__`` attributes,
    ``__slots__`` and properties contribute their public members.
    """
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: getattr(value, field.name)
            for field in dataclasses.fields(value)
            if not field.name.startswith("_")
        }
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return dict(value._asdict())

    members: dict[str, Any] = {}
    for name, item in getattr(value, "__dict__", {}).items():
        if not name.startswith("_"):
            members[name] = item
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if not name.startswith("_") and hasattr(value, name):
                members[name] = getattr(value, name)
    for name, _ in inspect.getmembers(type(value), lambda attr: isinstance(attr, property)):
        if not name.startswith("_"):
            members[name] = getattr(value, name)
    return members


def deep_equals(actual: Any, expected: Any) -> bool:
    """Structural equality: ``==`` first, then member by member."""
    if actual is expected or actual == expected:
        return True
    if is_scalar(actual) or is_scalar(expected):
        return False
    if _is_plain_sequence(actual) and _is_plain_sequence(expected):
        return len(actual) == len(expected) and all(
            deep_equals(item, other) for item, other in zip(actual, expected)
        )

    actual_members = project_members(actual)
    expected_members = project_members(expected)
    if not actual_members and not expected_members:
        return False
    return actual_members.keys() == expected_members.keys() and all(
        deep_equals(actual_members[name], expected_members[name]) for name in expected_members
    )


def _quoted(names: Sequence[str]) -> str:
    return ", ".join(f'"{name}"' for name in names)


def compare_members(
    actual: Mapping[str, Any],
    expected: Mapping[str, Any],
    *,
    equality: Equality,
    container: str = "an object",
    unit: str = "member",
) -> None:
    """Compare two projected states key by key, reporting offending names."""
    missing = [name for name in expected if name not in actual]
    if missing:
        raise StateMismatchError(
            f"Expected state to be {container} with {len(expected)} {unit}(s), "
            f"but it misses {unit}(s) {{{_quoted(missing)}}}"
        )

    additional = [name for name in actual if name not in expected]
    if additional:
        raise StateMismatchError(
            f"Expected state to be {container} with {len(expected)} {unit}(s), "
            f"but has additional {unit}(s) {{{_quoted(additional)}}}"
        )

    for name, expected_value in expected.items():
        actual_value = actual[name]
        if not equality(actual_value, expected_value):
            raise StateMismatchError(
                f'Expected state["{name}"] to be {expected_value!r}, but found {actual_value!r}.'
            )


# Message matchers -----------------------------------------------------------


class ExactMessageMatcher:
    """Match the fully rendered message text."""

    def __init__(self, message: str) -> None:
        self.message = message

    def match(self, level: LogLevel, state: Any, error: BaseException | None, formatter: Formatter) -> None:
        actual = formatter(state, error)
        if actual != self.message:
            raise WrongMessageError(
                f"Wrong log message for the log({level.label}) method call. "
                f"(Expected: '{self.message}', Actual: '{actual}')"
            )


def template_pairs(state: Any, level: LogLevel) -> list[tuple[str, Any]]:
    """Return the ``(name, value)`` pairs of a structured state."""
    pairs: list[tuple[str, Any]] | None = None
    if isinstance(state, Mapping):
        pairs = [(str(key), value) for key, value in state.items()]
    elif isinstance(state, Sequence) and not isinstance(state, (str, bytes, bytearray)):
        if all(isinstance(pair, tuple) and len(pair) == 2 for pair in state):
            pairs = list(state)

    if pairs is None or all(key != ORIGINAL_FORMAT_KEY for key, _ in pairs):
        raise MissingTemplateArgumentsError(
            f"The log({level.label}) method call has been made without message template arguments. "
            f"(State: {type(state).__name__})"
        )
    return pairs


class TemplateArgumentsMatcher:
    """Match the count of template arguments, then hand them to a predicate."""

    def __init__(self, count: int, predicate: ArgumentsPredicate) -> None:
        if count < 0:
            raise ValueError(f"The expected argument count must be positive or zero, got {count}.")
        self.count = count
        self.predicate = predicate

    def match(self, level: LogLevel, state: Any, error: BaseException | None, formatter: Formatter) -> None:
        pairs = template_pairs(state, level)
        original_format = next(value for key, value in pairs if key == ORIGINAL_FORMAT_KEY)
        arguments = [(key, value) for key, value in pairs if key != ORIGINAL_FORMAT_KEY]

        if len(arguments) != self.count:
            raise WrongArgumentCountError(
                f"Incorrect template message argument count for the '{original_format}' template message. "
                f"(Expected: '{self.count}', Actual: '{len(arguments)}')"
            )

        self.predicate(LogMessageTemplateArguments(arguments))


def argument_values_predicate(values: Sequence[Any], equality: Equality) -> ArgumentsPredicate:
    """Build a predicate asserting positional equality with ``values``."""

    def _check(arguments: LogMessageTemplateArguments) -> None:
        for index, expected in enumerate(values):
            actual = arguments[index]
            if not equality(actual, expected):
                raise ArgumentValueMismatchError(
                    f"Expected message template argument at index {index} to be {expected!r}, "
                    f"but found {actual!r}."
                )

    return _check


# Scope state matchers -------------------------------------------------------


class TypedStateMatcher:
    """Check the runtime type of the state, then run a caller assertion."""

    def __init__(self, state_type: type, assertion: Callable[[Any], Any]) -> None:
        if not isinstance(state_type, type):
            raise TypeError(f"Expected a type for the scope state, got {state_type!r}.")
        self.state_type = state_type
        self.assertion = assertion

    def match(self, state: Any) -> None:
        if not isinstance(state, self.state_type):
            raise WrongStateTypeError(
                "The 'begin_scope()' has been called with a wrong state argument type "
                f"(Expected: {self.state_type.__name__}, Actual: {type(state).__name__})."
            )
        self.assertion(state)


class StructuralStateMatcher:
    """Compare public members of the state with those of an expected object."""

    def __init__(self, expected: Any, equality: Equality) -> None:
        self.expected = expected
        self.equality = equality

    def _mismatch(self, state: Any) -> StateMismatchError:
        return StateMismatchError(f"Expected state to be {self.expected!r}, but found {state!r}.")

    def match(self, state: Any) -> None:
        if self.equality(state, self.expected):
            return
        if any(_is_compared_whole(value) for value in (state, self.expected)):
            raise self._mismatch(state)

        actual_members = project_members(state)
        expected_members = project_members(self.expected)
        # Nothing public to compare: the states differ as a whole.
        if not actual_members and not expected_members:
            raise self._mismatch(state)

        compare_members(actual_members, expected_members, equality=self.equality)


class MappingStateMatcher:
    """Compare a mapping state with the projected members of an expected object."""

    def __init__(self, expected: Any, equality: Equality) -> None:
        self.expected = expected
        self.equality = equality

    def match(self, state: Any) -> None:
        if not isinstance(state, Mapping):
            raise WrongStateTypeError(
                "The 'begin_scope()' has been called with a wrong state argument type "
                f"(Expected: Mapping, Actual: {type(state).__name__})."
            )

        compare_members(
            {str(key): value for key, value in state.items()},
            project_members(self.expected),
            equality=self.equality,
            container="a dictionary",
            unit="key",
        )


ScopeStateMatcher = TypedStateMatcher | StructuralStateMatcher | MappingStateMatcher


# Exception matchers ---------------------------------------------------------


def qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def expected_exception_predicate(expected: BaseException) -> ExceptionPredicate:
    """Match an error by its type and message, not by identity."""

    def _check(actual: BaseException) -> None:
        if type(actual) is not type(expected) or str(actual) != str(expected):
            raise ExceptionMismatchError(
                f'Expected exception to refer to {qualified_name(type(expected))} with message "{expected}", '
                f'but found {qualified_name(type(actual))} with message "{actual}".'
            )

    return _check


def exception_predicate(expected: BaseException | ExceptionPredicate) -> ExceptionPredicate:
    """Normalise ``with_exception`` input into a predicate."""
    if isinstance(expected, BaseException):
        return expected_exception_predicate(expected)
    if isinstance(expected, type) or not callable(expected):
        raise TypeError(f"Expected an exception instance or a predicate, got {expected!r}.")
    return expected
