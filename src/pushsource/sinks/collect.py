"""In-memory sink that records everything it receives."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pushsource.config.models import SinkConfig

T = TypeVar("T")


class CollectingSink(Generic[T]):
    """Keeps received values and the ordered call log.

    ``calls`` holds ``("push", value)`` and ``("close", None)`` tuples in
    delivery order, which makes replay and ordering easy to inspect.
    """

    def __init__(self, config: SinkConfig | None = None) -> None:
        self._config = config or SinkConfig(sink_id="collect")
        self.values: list[T] = []
        self.calls: list[tuple[str, Any]] = []
        self.close_count = 0

    @property
    def sink_id(self) -> str:
        return self._config.sink_id

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    def push(self, value: T) -> None:
        self.values.append(value)
        self.calls.append(("push", value))

    def close(self) -> None:
        self.close_count += 1
        self.calls.append(("close", None))

    def clear(self) -> None:
        self.values.clear()
        self.calls.clear()
        self.close_count = 0
