"""Read-only view over the arguments of a logged message template."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any


class LogMessageTemplateArguments:
    """Template arguments addressable by position or by placeholder name.

    Iterating yields the values in placeholder order::

        def check(args):
            assert args["OrderId"] == 1234
            assert args[1] == "Paris"
            assert list(args) == [1234, "Paris"]
    """

    def __init__(self, arguments: Iterable[tuple[str, Any]]) -> None:
        self._arguments: list[tuple[str, Any]] = list(arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            for name, value in self._arguments:
                if name == key:
                    return value
            raise KeyError(f"The given message template argument '{key}' was not present.")

        if key < 0 or key >= len(self._arguments):
            raise IndexError(f"Message template argument index {key} is out of range.")
        return self._arguments[key][1]

    def __contains__(self, name: object) -> bool:
        return any(existing == name for existing, _ in self._arguments)

    def __iter__(self) -> Iterator[Any]:
        return (value for _, value in self._arguments)

    def keys(self) -> list[str]:
        return [name for name, _ in self._arguments]

    def items(self) -> list[tuple[str, Any]]:
        return list(self._arguments)

    def __repr__(self) -> str:
        return f"LogMessageTemplateArguments({self._arguments!r})"
