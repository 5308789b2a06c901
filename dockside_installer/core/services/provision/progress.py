"""
Progress reporting — user-facing lines emitted while the pipeline runs.

Services report through a ``ProgressReporter``; the CLI attaches a sink that
prints each line. Warnings are also kept so the final summary can repeat
them. This is separate from ``logging``, which stays diagnostic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Literal

logger = logging.getLogger(__name__)

EventKind = Literal["info", "success", "warn"]
Sink = Callable[[EventKind, str], None]


class ProgressReporter:
    """Collects progress events and forwards them to an optional sink."""

    def __init__(self, sink: Sink | None = None) -> None:
        self._sink = sink
        self.events: list[tuple[EventKind, str]] = []

    @property
    def warnings(self) -> list[str]:
        return [msg for kind, msg in self.events if kind == "warn"]

    def _emit(self, kind: EventKind, message: str) -> None:
        self.events.append((kind, message))
        logger.debug("[%s] %s", kind, message)
        if self._sink is not None:
            self._sink(kind, message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)
