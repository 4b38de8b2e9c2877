"""Tests for payload matchers and structural equality."""

import collections
import dataclasses
from types import SimpleNamespace

import pytest

from logging_assertions.errors import (
    ExceptionMismatchError,
    MissingTemplateArgumentsError,
    StateMismatchError,
    WrongArgumentCountError,
    WrongMessageError,
)
from logging_assertions.matchers import (
    ExactMessageMatcher,
    MappingStateMatcher,
    StructuralStateMatcher,
    TemplateArgumentsMatcher,
    TypedStateMatcher,
    deep_equals,
    exception_predicate,
    is_scalar,
    project_members,
    qualified_name,
    template_pairs,
)
from logging_assertions.templates import ORIGINAL_FORMAT_KEY, FormattedLogValues, format_log_values
from logging_assertions.types import LogLevel
from tests.helpers import Token

Point = collections.namedtuple("Point", ["x", "y"])


@dataclasses.dataclass
class Order:
    order_id: int
    city: str
    _internal: str = "hidden"


class Slotted:
    __slots__ = ("name", "_secret")

    def __init__(self, name: str) -> None:
        self.name = name
        self._secret = "s"


class WithProperty:
    def __init__(self) -> None:
        self.visible = 1

    @property
    def computed(self) -> int:
        return self.visible + 1


class CustomError(Exception):
    pass


def test_project_members_covers_common_shapes():
    assert project_members({"a": 1}) == {"a": 1}
    assert project_members(Order(1, "Paris")) == {"order_id": 1, "city": "Paris"}
    assert project_members(Point(1, 2)) == {"x": 1, "y": 2}
    assert project_members(Slotted("n")) == {"name": "n"}
    assert project_members(WithProperty()) == {"visible": 1, "computed": 2}
    assert project_members(SimpleNamespace(a=1, _b=2)) == {"a": 1}


def test_is_scalar():
    assert is_scalar("text")
    assert is_scalar(3.5)
    assert is_scalar(None)
    assert is_scalar(LogLevel.DEBUG)
    assert not is_scalar({"a": 1})
    assert not is_scalar(SimpleNamespace())


def test_deep_equals_structural():
    assert deep_equals(SimpleNamespace(order_id=1, city="Paris"), {"order_id": 1, "city": "Paris"})
    assert deep_equals(Order(1, "Paris"), SimpleNamespace(order_id=1, city="Paris"))
    assert deep_equals([SimpleNamespace(a=1)], [{"a": 1}])
    assert deep_equals({"nested": SimpleNamespace(a=1)}, {"nested": {"a": 1}})
    assert not deep_equals({"a": 1}, {"a": 2})
    assert not deep_equals({"a": 1}, {"a": 1, "b": 2})
    assert not deep_equals([1, 2], [1])
    assert not deep_equals("1", 1)
    assert not deep_equals(object(), object())


def test_exact_message_matcher():
    matcher = ExactMessageMatcher("Log Trace 1")

    matcher.match(LogLevel.TRACE, FormattedLogValues("Log Trace {0}", [1]), None, format_log_values)

    with pytest.raises(WrongMessageError) as excinfo:
        matcher.match(LogLevel.TRACE, FormattedLogValues("Log Trace {0}", [2]), None, format_log_values)
    assert str(excinfo.value) == (
        "Wrong log message for the log(Trace) method call. (Expected: 'Log Trace 1', Actual: 'Log Trace 2')"
    )


def test_exact_message_matcher_uses_formatter_with_error():
    matcher = ExactMessageMatcher("boom: bad")
    error = ValueError("bad")

    matcher.match(LogLevel.ERROR, "boom", error, lambda state, exc: f"{state}: {exc}")


def test_template_pairs_accepts_mapping_and_pairs():
    assert template_pairs({"Id": 1, ORIGINAL_FORMAT_KEY: "{Id}"}, LogLevel.DEBUG) == [
        ("Id", 1),
        (ORIGINAL_FORMAT_KEY, "{Id}"),
    ]
    assert template_pairs([("Id", 1), (ORIGINAL_FORMAT_KEY, "{Id}")], LogLevel.DEBUG) == [
        ("Id", 1),
        (ORIGINAL_FORMAT_KEY, "{Id}"),
    ]


@pytest.mark.parametrize("state", ["plain text", {"Id": 1}, [("Id", 1)], 42])
def test_template_pairs_rejects_states_without_template(state):
    with pytest.raises(MissingTemplateArgumentsError, match=r"log\(Debug\) method call has been made without"):
        template_pairs(state, LogLevel.DEBUG)


def test_template_arguments_matcher_strips_original_format():
    seen = []
    matcher = TemplateArgumentsMatcher(2, lambda args: seen.append(list(args)))

    matcher.match(LogLevel.INFORMATION, FormattedLogValues("{A}-{B}", ["x", "y"]), None, format_log_values)

    assert seen == [["x", "y"]]


def test_template_arguments_matcher_wrong_count():
    matcher = TemplateArgumentsMatcher(1, lambda args: None)

    with pytest.raises(WrongArgumentCountError) as excinfo:
        matcher.match(LogLevel.INFORMATION, FormattedLogValues("{A}-{B}", ["x", "y"]), None, format_log_values)

    assert str(excinfo.value) == (
        "Incorrect template message argument count for the '{A}-{B}' template message. (Expected: '1', Actual: '2')"
    )


def test_template_arguments_matcher_rejects_negative_count():
    with pytest.raises(ValueError):
        TemplateArgumentsMatcher(-1, lambda args: None)


def test_typed_state_matcher_requires_type():
    with pytest.raises(TypeError):
        TypedStateMatcher("Order", lambda state: None)


def test_structural_matcher_scalars():
    StructuralStateMatcher("request 123", deep_equals).match("request 123")

    with pytest.raises(StateMismatchError) as excinfo:
        StructuralStateMatcher("request 123", deep_equals).match("request 456")
    assert str(excinfo.value) == "Expected state to be 'request 123', but found 'request 456'."


def test_structural_matcher_reports_additional_members():
    matcher = StructuralStateMatcher(SimpleNamespace(order_id=1), deep_equals)

    with pytest.raises(StateMismatchError) as excinfo:
        matcher.match(Order(1, "Paris"))

    assert str(excinfo.value) == (
        'Expected state to be an object with 1 member(s), but has additional member(s) {"city"}'
    )


def test_structural_matcher_lists_every_missing_member():
    matcher = StructuralStateMatcher({"a": 1, "b": 2, "c": 3}, deep_equals)

    with pytest.raises(StateMismatchError, match='misses member\\(s\\) \\{"b", "c"\\}'):
        matcher.match({"a": 1})


def test_structural_matcher_uses_injected_equality():
    calls = []

    def members_always_equal(actual, expected):
        calls.append((actual, expected))
        return not isinstance(actual, dict)

    StructuralStateMatcher({"a": 1}, members_always_equal).match({"a": 2})

    assert calls == [({"a": 2}, {"a": 1}), (2, 1)]


def test_structural_matcher_accepts_equal_state_without_projection():
    StructuralStateMatcher([1, SimpleNamespace(a=1)], deep_equals).match([1, {"a": 1}])
    StructuralStateMatcher({1, 2}, deep_equals).match({2, 1})
    StructuralStateMatcher(Token(1), deep_equals).match(Token(1))


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        ([1, 2], [3, 4]),
        (("a", 1), ("b", 2)),
        ({1}, {2}),
        ([1, 2], {"a": 1}),
    ],
    ids=["list", "tuple", "set", "list-vs-mapping"],
)
def test_structural_matcher_compares_collections_as_a_whole(expected, actual):
    with pytest.raises(StateMismatchError) as excinfo:
        StructuralStateMatcher(expected, deep_equals).match(actual)

    assert str(excinfo.value) == f"Expected state to be {expected!r}, but found {actual!r}."


def test_structural_matcher_rejects_objects_without_public_members():
    with pytest.raises(StateMismatchError, match=r"Expected state to be Token\(1\), but found Token\(2\)\."):
        StructuralStateMatcher(Token(1), deep_equals).match(Token(2))


def test_mapping_matcher_accepts_equivalent_mapping():
    MappingStateMatcher(Order(1, "Paris"), deep_equals).match({"order_id": 1, "city": "Paris"})


def test_exception_predicate_literal_matches_type_and_message():
    check = exception_predicate(CustomError("failed"))

    check(CustomError("failed"))

    with pytest.raises(ExceptionMismatchError) as excinfo:
        check(CustomError("other"))
    assert str(excinfo.value) == (
        f'Expected exception to refer to {__name__}.CustomError with message "failed", '
        f'but found {__name__}.CustomError with message "other".'
    )

    with pytest.raises(ExceptionMismatchError):
        check(ValueError("failed"))


def test_exception_predicate_passes_callables_through():
    def predicate(error):
        return None

    assert exception_predicate(predicate) is predicate


@pytest.mark.parametrize("value", [ValueError, "ValueError", 3])
def test_exception_predicate_rejects_other_values(value):
    with pytest.raises(TypeError):
        exception_predicate(value)


def test_qualified_name():
    assert qualified_name(ValueError) == "ValueError"
    assert qualified_name(CustomError) == f"{__name__}.CustomError"
