"""Sink that writes every value to the structured log."""

from __future__ import annotations

from typing import Any

import structlog

from pushsource.config.models import SinkConfig, SinkType

logger = structlog.get_logger()


class LoggingSink:
    """Emits one ``log_sink.value`` event per value and ``log_sink.closed`` on close."""

    def __init__(self, config: SinkConfig) -> None:
        if config.sink_type != SinkType.LOG:
            msg = f"LoggingSink requires sink_type 'log', got '{config.sink_type}'"
            raise ValueError(msg)
        self._config = config
        self._count = 0

    @property
    def sink_id(self) -> str:
        return self._config.sink_id

    @property
    def count(self) -> int:
        return self._count

    def push(self, value: Any) -> None:
        self._count += 1
        getattr(logger, self._config.log_level)(
            "log_sink.value", sink_id=self.sink_id, seq=self._count, value=value
        )

    def close(self) -> None:
        getattr(logger, self._config.log_level)(
            "log_sink.closed", sink_id=self.sink_id, total=self._count
        )
