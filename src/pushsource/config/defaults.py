"""Built-in source definition and how user definitions layer over it."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from pushsource.config.models import SourceConfig

DEFAULTS_FILE = Path(__file__).parent / "defaults" / "source.yaml"

_OPTION_ALIASES = {"bufferSize": "buffer_size", "useCommonStream": "use_common_stream"}


def source_defaults() -> dict[str, Any]:
    """Return a fresh copy of the built-in source definition."""
    with DEFAULTS_FILE.open() as f:
        return yaml.safe_load(f)  # type: ignore[no-any-return]


def normalize_options(options: dict[str, Any]) -> dict[str, Any]:
    """Spell option keys in snake_case (``bufferSize`` -> ``buffer_size``)."""
    return {_OPTION_ALIASES.get(k, k): v for k, v in options.items()}


def apply_defaults(definition: dict[str, Any]) -> dict[str, Any]:
    """Layer a user definition over the built-in one.

    Options merge key by key. Every other key, ``sinks`` included, replaces
    the default outright. The input is not modified.
    """
    options = definition.get("options") or {}
    if not isinstance(options, dict):
        msg = f"'options' must be a mapping, got {type(options).__name__}"
        raise TypeError(msg)

    base = source_defaults()
    merged = {**base, **definition}
    merged["options"] = {**base["options"], **normalize_options(options)}
    return merged


def build_source_config(definition: dict[str, Any]) -> SourceConfig:
    """Validate a user definition merged with the built-in defaults."""
    return SourceConfig.model_validate(apply_defaults(definition))
