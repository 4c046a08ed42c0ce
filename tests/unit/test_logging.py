"""Unit tests for structlog configuration and core log events."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from pushsource.observability.logging import configure_logging
from pushsource.sinks.collect import CollectingSink
from pushsource.sources.source import Source


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]):
        configure_logging("info", json=True)
        structlog.get_logger().info("hello", answer=42)
        out = capsys.readouterr().out
        assert '"event": "hello"' in out
        assert '"answer": 42' in out
        assert '"level": "info"' in out

    def test_filters_below_level(self, capsys: pytest.CaptureFixture[str]):
        configure_logging("warning", json=True)
        log = structlog.get_logger()
        log.info("quiet")
        log.warning("loud")
        out = capsys.readouterr().out
        assert "quiet" not in out
        assert "loud" in out

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("verbose")


class TestSourceLogEvents:
    def test_lifecycle_events(self):
        source: Source[int] = Source()
        with capture_logs() as logs:
            conn = source.connect(CollectingSink())
            source.push(1)
            source.close()
            source.close()
            conn.disconnect()
            conn.disconnect()

        events = [e["event"] for e in logs]
        # Values are not logged; close is logged once; disconnect once.
        assert events == ["source.connected", "source.closed", "source.disconnected"]
        assert logs[0]["sink"] == "CollectingSink"
        assert logs[1]["buffered"] == 2
