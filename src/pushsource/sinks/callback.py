"""Sink adapter for plain callables."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class CallbackSink(Generic[T]):
    """Adapts an ``on_push`` callable (and optional ``on_close``) to a sink."""

    def __init__(
        self,
        on_push: Callable[[T], None],
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._on_push = on_push
        self._on_close = on_close

    def push(self, value: T) -> None:
        self._on_push(value)

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
