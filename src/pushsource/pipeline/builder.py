"""Build a Source and its configured sinks from a SourceConfig."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from pushsource.config.models import SourceConfig
from pushsource.sinks.base import Pushable
from pushsource.sinks.factory import create_sink
from pushsource.sources.base import Connection
from pushsource.sources.source import Source, SourceGenerator

logger = structlog.get_logger()


@dataclass
class SourceGraph:
    """A built source with its terminal sinks and their connection handles."""

    source_id: str
    source: Source[Any]
    sinks: dict[str, Pushable[Any]] = field(default_factory=dict)
    connections: dict[str, Connection] = field(default_factory=dict)

    def disconnect_all(self) -> None:
        for sink_id, conn in self.connections.items():
            conn.disconnect()
            logger.debug(
                "builder.sink_disconnected", source_id=self.source_id, sink_id=sink_id
            )
        self.connections.clear()


def build_source(
    config: SourceConfig,
    generator: SourceGenerator[Any] | None = None,
) -> SourceGraph:
    """Create the source, then connect every enabled sink in config order.

    The generator runs inside the Source constructor, before any configured
    sink is attached, so configured sinks receive its pushes through replay
    (or not at all in shared-stream mode).
    """
    source: Source[Any] = Source(generator, config.options)
    graph = SourceGraph(source_id=config.source_id, source=source)

    for sink_cfg in config.sinks:
        if not sink_cfg.enabled:
            logger.info(
                "builder.sink_disabled",
                source_id=config.source_id,
                sink_id=sink_cfg.sink_id,
            )
            continue
        sink = create_sink(sink_cfg)
        graph.sinks[sink_cfg.sink_id] = sink
        graph.connections[sink_cfg.sink_id] = source.connect(sink)
        logger.info(
            "builder.sink_connected",
            source_id=config.source_id,
            sink_id=sink_cfg.sink_id,
            sink_type=str(sink_cfg.sink_type),
        )

    return graph
