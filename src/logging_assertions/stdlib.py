"""Bridge from the standard :mod:`logging` module to a recording logger.

Code under test that logs through ``logging.getLogger(...)`` can be verified
with the same expectations as code using the structured interface: each
record becomes a ``log()`` call whose state carries the ``%``-style arguments
as template arguments named ``"0"``, ``"1"``, ... (or by mapping key).
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from logging_assertions.recorder import Logger
from logging_assertions.templates import ORIGINAL_FORMAT_KEY
from logging_assertions.types import level_from_stdlib

# Lowest level that still goes through ``Logger.isEnabledFor``.
CAPTURE_LEVEL = 1


def record_state(record: logging.LogRecord) -> list[tuple[str, Any]]:
    """Return the structured state of a log record."""
    args = record.args
    if isinstance(args, Mapping):
        pairs = [(str(key), value) for key, value in args.items()]
    elif args:
        pairs = [(str(index), value) for index, value in enumerate(args)]
    else:
        pairs = []
    pairs.append((ORIGINAL_FORMAT_KEY, str(record.msg)))
    return pairs


class RecordingHandler(logging.Handler):
    """Forward every record to a :class:`~logging_assertions.recorder.Logger`.

    Assertion failures are raised from :meth:`emit` straight back into the
    logging call of the code under test; they are never routed through
    :meth:`logging.Handler.handleError`.
    """

    def __init__(self, recorder: Logger) -> None:
        super().__init__(level=logging.NOTSET)
        self.recorder = recorder

    def emit(self, record: logging.LogRecord) -> None:
        error = record.exc_info[1] if record.exc_info else None

        def _render(state: Any, exc: BaseException | None) -> str:
            return record.getMessage()

        self.recorder.log(level_from_stdlib(record.levelno), record_state(record), error, _render)


@contextlib.contextmanager
def capture_logger(target: logging.Logger, recorder: Logger) -> Iterator[RecordingHandler]:
    """Route ``target`` exclusively to ``recorder`` for the duration of the block."""
    handler = RecordingHandler(recorder)
    saved_handlers = list(target.handlers)
    saved_level = target.level
    saved_propagate = target.propagate
    saved_disabled = target.disabled

    target.handlers = [handler]
    target.setLevel(CAPTURE_LEVEL)
    target.propagate = False
    target.disabled = False
    try:
        yield handler
    finally:
        target.handlers = saved_handlers
        target.setLevel(saved_level)
        target.propagate = saved_propagate
        target.disabled = saved_disabled
