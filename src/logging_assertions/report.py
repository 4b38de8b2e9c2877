"""Teardown reporting for an expectation queue."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from logging_assertions.errors import IncompleteSequenceError
from logging_assertions.expectations import ExpectationQueue


def incomplete_sequence_message(queue: ExpectationQueue) -> str:
    """Describe the expectations left unconsumed, one label per line."""
    lines = [
        f"Logger has been called too few times (Expected: {len(queue)} calls, Actual: {queue.consumed_count} calls).",
    ]
    lines.extend(f"- {label}" for label in queue.unconsumed_labels())
    return "\n".join(lines)


def verify_queue(queue: ExpectationQueue) -> None:
    """Raise :class:`IncompleteSequenceError` unless every expectation was consumed."""
    if queue.is_fully_consumed():
        return
    raise IncompleteSequenceError(incomplete_sequence_message(queue))


def build_expectations_table(queue: ExpectationQueue) -> Table:
    table = Table(title="Expected logger calls")
    table.add_column("#", justify="right")
    table.add_column("Expectation")
    table.add_column("Status")

    for position, node in enumerate(queue, start=1):
        consumed = position <= queue.consumed_count
        table.add_row(
            str(position),
            Text(node.display_label),
            "[green]consumed[/green]" if consumed else "[yellow]pending[/yellow]",
        )
    return table


def render_expectations(queue: ExpectationQueue, console: Console | None = None) -> Table:
    """Print the expectation table, e.g. while debugging a failing test."""
    table = build_expectations_table(queue)
    (console or Console()).print(table)
    return table
