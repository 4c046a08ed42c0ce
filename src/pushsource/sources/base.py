"""Connection handle protocol and replay log entries.

A Source keeps its history as a sequence of tagged entries: EventValue
wraps a pushed value, CLOSE_EVENT marks termination. The marker has its
own type and never compares equal to a wrapped value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Connection(Protocol):
    """Handle returned by ``Source.connect``."""

    def disconnect(self) -> None:
        """Stop delivering to the connected sink. Safe to call repeatedly."""
        ...


@dataclass(frozen=True, slots=True)
class EventValue(Generic[T]):
    """A value retained in a source's replay log."""

    value: T


@dataclass(frozen=True, slots=True)
class CloseEvent:
    """Terminal marker retained in a source's replay log."""

    def __repr__(self) -> str:
        return "CLOSE_EVENT"


CLOSE_EVENT = CloseEvent()

# Entry in a replay log
LogEntry = EventValue[Any] | CloseEvent
