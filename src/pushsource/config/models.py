"""Pydantic configuration models for sources and their sinks."""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


class SourceOptions(BaseModel):
    """Construction options for a Source.

    Accepts both snake_case and camelCase keys, so option mappings written
    as ``{"bufferSize": 10, "useCommonStream": True}`` validate as-is.

    ``buffer_size`` takes any number. Fractional and negative sizes are kept
    as given; the eviction rule compares them against the log length, so a
    negative size never evicts. Positive infinity is stored as ``None``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    # None means unbounded history.
    buffer_size: int | float | None = Field(default=None, alias="bufferSize")
    # True: every sink shares one live stream, nothing is retained or replayed.
    # False: history is kept and replayed to each new sink independently.
    use_common_stream: bool = Field(default=False, alias="useCommonStream")

    @field_validator("buffer_size", mode="before")
    @classmethod
    def infinite_means_unbounded(cls, v: Any) -> Any:
        if isinstance(v, float) and math.isinf(v) and v > 0:
            return None
        return v

    @property
    def unbounded(self) -> bool:
        return self.buffer_size is None


class SinkType(StrEnum):
    """Built-in terminal sink types."""

    COLLECT = "collect"
    LOG = "log"


class SinkConfig(BaseModel):
    """Configuration for a single terminal sink."""

    sink_id: str
    sink_type: SinkType = SinkType.COLLECT
    enabled: bool = True
    # Only used by log sinks.
    log_level: str = "info"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.lower()
        if level not in _LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_LOG_LEVELS)}, got '{v}'"
            raise ValueError(msg)
        return level


class SourceConfig(BaseModel):
    """A source plus the sinks connected to it at build time."""

    source_id: str = "source"
    options: SourceOptions = Field(default_factory=SourceOptions)
    sinks: list[SinkConfig] = Field(default_factory=list)

    @field_validator("source_id")
    @classmethod
    def validate_source_id(cls, v: str) -> str:
        if not re.match(r"^[a-zA-Z_][\w.-]*$", v):
            msg = (
                f"source_id '{v}' must start with a letter or underscore and "
                f"contain only word characters, dots or dashes"
            )
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_unique_sink_ids(self) -> Self:
        seen: set[str] = set()
        for sink in self.sinks:
            if sink.sink_id in seen:
                msg = f"Duplicate sink_id '{sink.sink_id}'"
                raise ValueError(msg)
            seen.add(sink.sink_id)
        return self
