"""Push-based event sources with replay and fan-out."""

from pushsource.config.models import SourceOptions
from pushsource.sinks.base import Pushable
from pushsource.sources.base import CLOSE_EVENT, CloseEvent, Connection, EventValue
from pushsource.sources.source import Source, SourceConnection, SourceGenerator

__version__ = "0.1.0"
__all__ = [
    "CLOSE_EVENT",
    "CloseEvent",
    "Connection",
    "EventValue",
    "Pushable",
    "Source",
    "SourceConnection",
    "SourceGenerator",
    "SourceOptions",
    "__version__",
]
