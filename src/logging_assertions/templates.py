"""Message templates with named placeholders.

A template such as ``"Order {OrderId} shipped to {City}"`` is rendered by
substituting the arguments positionally, while the structured state keeps each
value under its placeholder name. The state also carries the unformatted
template under the reserved :data:`ORIGINAL_FORMAT_KEY` entry, so assertions
can inspect either the rendered text or the individual arguments.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterator, Sequence
from typing import Any, overload

ORIGINAL_FORMAT_KEY = "{OriginalFormat}"

_PLACEHOLDER = re.compile(r"\{\{|\}\}|\{([^{}]*)\}")


@dataclasses.dataclass(frozen=True)
class Placeholder:
    name: str
    alignment: int | None = None
    format_spec: str = ""

    @classmethod
    def parse(cls, body: str) -> Placeholder:
        """Split ``Name,alignment:format`` into its parts."""
        head, _, format_spec = body.partition(":")
        name, _, alignment = head.partition(",")
        return cls(
            name=name.strip(),
            alignment=int(alignment) if alignment.strip() else None,
            format_spec=format_spec,
        )

    def render(self, value: Any) -> str:
        text = format(value, self.format_spec) if self.format_spec else str(value)
        if self.alignment is None:
            return text
        width = abs(self.alignment)
        return text.rjust(width) if self.alignment > 0 else text.ljust(width)


class MessageTemplate:
    """Parsed form of a message template."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.placeholders: list[Placeholder] = [
            Placeholder.parse(match.group(1))
            for match in _PLACEHOLDER.finditer(text)
            if match.group(1) is not None
        ]

    @property
    def names(self) -> list[str]:
        return [placeholder.name for placeholder in self.placeholders]

    def render(self, args: Sequence[Any]) -> str:
        """Substitute ``args`` into the template in placeholder order."""
        if len(args) != len(self.placeholders):
            raise ValueError(
                f"The format string '{self.text}' does not have the expected number of named parameters. "
                f"Expected {len(self.placeholders)} parameter(s) but found {len(args)} parameter(s)."
            )

        values = iter(args)
        placeholders = iter(self.placeholders)

        def _substitute(match: re.Match[str]) -> str:
            token = match.group(0)
            if token == "{{":
                return "{"
            if token == "}}":
                return "}"
            return next(placeholders).render(next(values))

        return _PLACEHOLDER.sub(_substitute, self.text)


class FormattedLogValues(Sequence[tuple[str, Any]]):
    """Structured log state: ``(name, value)`` pairs plus the original template."""

    def __init__(self, template: str, args: Sequence[Any] = ()) -> None:
        self.template = MessageTemplate(template)
        self.args = tuple(args)
        # Without arguments the template is logged verbatim, braces included.
        self._message = self.template.render(self.args) if self.args else template
        self._pairs: list[tuple[str, Any]] = list(zip(self.template.names, self.args))
        self._pairs.append((ORIGINAL_FORMAT_KEY, template))

    @overload
    def __getitem__(self, index: int) -> tuple[str, Any]: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[tuple[str, Any]]: ...

    def __getitem__(self, index):
        return self._pairs[index]

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._pairs)

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"FormattedLogValues({self.template.text!r}, {self.args!r})"


def format_log_values(state: Any, error: BaseException | None) -> str:
    """Default formatter: the rendered message, ignoring the error."""
    return str(state)
