"""Build terminal sinks from their configuration."""

from __future__ import annotations

from typing import Any

from pushsource.config.models import SinkConfig, SinkType
from pushsource.sinks.base import Pushable
from pushsource.sinks.collect import CollectingSink
from pushsource.sinks.log import LoggingSink


def create_sink(config: SinkConfig) -> Pushable[Any]:
    """Return a new sink of the configured type, tagged with its ``sink_id``."""
    match config.sink_type:
        case SinkType.COLLECT:
            return CollectingSink(config)
        case SinkType.LOG:
            return LoggingSink(config)
    msg = f"Unknown sink type '{config.sink_type}' for sink '{config.sink_id}'"
    raise ValueError(msg)
