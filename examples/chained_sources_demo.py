#!/usr/bin/env python3
"""Runnable demo: replay, shared streams and chained sources.

    uv run python examples/chained_sources_demo.py
"""

from __future__ import annotations

import structlog

from pushsource import Source
from pushsource.config.defaults import build_source_config
from pushsource.observability.logging import configure_logging
from pushsource.pipeline.builder import build_source
from pushsource.sinks.callback import CallbackSink

logger = structlog.get_logger()


def main() -> None:
    configure_logging("info")

    # 1. A replaying source seeded by its generator
    def seed(src: Source[str]) -> None:
        for word in ("alpha", "beta", "gamma"):
            src.push(word)

    words: Source[str] = Source(seed)
    late = CallbackSink(lambda v: logger.info("demo.late_joiner", value=v))
    words.connect(late)  # replays alpha, beta, gamma

    # 2. A shared stream only delivers what arrives after connect
    ticks: Source[int] = Source(options={"useCommonStream": True})
    ticks.push(0)
    ticks.connect(CallbackSink(lambda v: logger.info("demo.tick", value=v)))
    ticks.push(1)

    # 3. Chain a configured source behind the words source
    graph = build_source(
        build_source_config(
            {
                "source_id": "audit",
                "sinks": [{"sink_id": "audit-log", "sink_type": "log"}],
            }
        )
    )
    words.connect(graph.source)  # replays history into the chained source
    words.push("delta")
    words.close()

    logger.info("demo.done", words=words.health(), audit=graph.source.health())


if __name__ == "__main__":
    main()
