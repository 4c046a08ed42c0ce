"""Push-based event source with optional replay.

A Source accepts values through ``push``, keeps an ordered replay log
(unless it runs in shared-stream mode) and forwards every value and the
terminal close signal to its connected sinks. A Source is itself a sink,
so sources chain into trees and DAGs of propagation.

Delivery is synchronous and depth-first: for a chain A -> B -> C, C has
seen a value before ``A.push`` returns. Sink exceptions are not caught;
they abort the current forwarding walk and propagate to the caller.
Cycles are not detected and recurse until ``RecursionError``.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

import structlog

from pushsource.config.models import SourceOptions
from pushsource.sinks.base import Pushable
from pushsource.sources.base import CLOSE_EVENT, CloseEvent, EventValue, LogEntry

logger = structlog.get_logger()

T = TypeVar("T")


class SourceConnection:
    """Disposal handle for one ``Source.connect`` call."""

    __slots__ = ("_release",)

    def __init__(self, release: Callable[[], None]) -> None:
        self._release = release

    def disconnect(self) -> None:
        self._release()


class Source(Generic[T]):
    """Source of events that sinks can connect to.

    Args:
        generator: Optional callable invoked synchronously with the new
            source, typically to seed initial pushes.
        options: ``SourceOptions`` or a mapping it validates
            (``buffer_size``/``bufferSize``, ``use_common_stream``/``useCommonStream``).

    """

    DEFAULT: ClassVar[SourceOptions] = SourceOptions()
    CLOSE_EVENT: ClassVar[CloseEvent] = CLOSE_EVENT

    def __init__(
        self,
        generator: SourceGenerator[T] | None = None,
        options: SourceOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if options is None:
            options = self.DEFAULT
        elif not isinstance(options, SourceOptions):
            options = SourceOptions.model_validate(options)

        self._buffer_size = options.buffer_size
        self._shared_stream = options.use_common_stream
        self._events: deque[LogEntry] | None = (
            None if self._shared_stream else deque()
        )
        # Keyed by id() so sinks are unique by identity, hashable or not. Each
        # registration is its own tuple, so a sink that is disconnected and
        # reconnected mid-walk is not mistaken for the snapshotted entry.
        self._connections: dict[int, tuple[Pushable[T]]] = {}
        self._closed = False

        if generator is not None:
            generator(self)

    # -- Introspection -------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def shared_stream(self) -> bool:
        return self._shared_stream

    @property
    def buffer_size(self) -> int | float | None:
        return self._buffer_size

    @property
    def events(self) -> tuple[LogEntry, ...]:
        """Snapshot of the replay log (always empty in shared-stream mode)."""
        if self._events is None:
            return ()
        return tuple(self._events)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def health(self) -> dict[str, Any]:
        return {
            "closed": self._closed,
            "shared_stream": self._shared_stream,
            "buffered": len(self._events) if self._events is not None else 0,
            "connections": len(self._connections),
        }

    # -- Sink contract -------------------------------------------------------

    def push(self, value: T) -> None:
        """Record *value* and forward it to every connected sink."""
        if self._closed:
            return

        if self._events is not None:
            self._events.append(EventValue(value))
            # Eviction fires while the log is below the cap, not above it.
            if self._buffer_size is not None and self._buffer_size > len(self._events):
                self._events.popleft()

        for key, entry in list(self._connections.items()):
            if self._connections.get(key) is entry:
                entry[0].push(value)

    def close(self) -> None:
        """Close the source and forward the close signal.

        Not guarded against repeated calls: each call appends another close
        marker and notifies the sinks again.
        """
        if self._events is not None:
            self._events.append(CLOSE_EVENT)

        for key, entry in list(self._connections.items()):
            if self._connections.get(key) is entry:
                entry[0].close()

        if not self._closed:
            logger.debug(
                "source.closed",
                connections=len(self._connections),
                buffered=len(self._events) if self._events is not None else 0,
            )
        self._closed = True

    # -- Wiring --------------------------------------------------------------

    def connect(self, sink: Pushable[T]) -> SourceConnection:
        """Register *sink* and replay retained history into it.

        Replay runs on every call, even when *sink* is already registered;
        the existing registration is kept in that case.

        Returns a handle whose ``disconnect()`` removes *sink* from the
        registry. Handles are scoped to the sink, not to this call: any handle
        for *sink*, including one from an earlier connect, removes the
        current registration.
        """
        key = id(sink)
        current = self._connections.get(key)
        if current is None or current[0] is not sink:
            self._connections[key] = (sink,)
        logger.debug(
            "source.connected",
            sink=type(sink).__name__,
            connections=len(self._connections),
            replay=len(self._events) if self._events is not None else 0,
        )

        if self._events is not None:
            for entry in list(self._events):
                if isinstance(entry, CloseEvent):
                    sink.close()
                    break
                sink.push(entry.value)

        def _release() -> None:
            current = self._connections.get(key)
            if current is not None and current[0] is sink:
                del self._connections[key]
                logger.debug(
                    "source.disconnected",
                    sink=type(sink).__name__,
                    connections=len(self._connections),
                )

        return SourceConnection(_release)


# Called once with the freshly built source, before the constructor returns.
SourceGenerator = Callable[[Source[T]], None]
