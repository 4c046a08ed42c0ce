"""Load source definitions from YAML files.

String values may reference the environment as ``${VAR}`` or
``${VAR:-default}``; references are expanded before validation, so
``buffer_size: ${BUFFER:-8}`` style settings still reach the models as
strings pydantic can coerce.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pushsource.config.defaults import build_source_config
from pushsource.config.models import SourceConfig

_ENV_REF = re.compile(r"\$\{(?P<name>[A-Za-z_]\w*)(?::-(?P<default>[^}]*))?\}")


def expand_env(value: Any, where: str = "") -> Any:
    """Expand environment references in every string of a parsed definition.

    *where* is the dotted key path of *value*; errors name it so a missing
    variable can be traced to the setting that uses it.
    """
    if isinstance(value, dict):
        return {
            k: expand_env(v, f"{where}.{k}" if where else str(k))
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [expand_env(v, f"{where}[{i}]") for i, v in enumerate(value)]
    if not isinstance(value, str):
        return value

    def _lookup(match: re.Match[str]) -> str:
        env_val = os.environ.get(match["name"])
        if env_val is not None:
            return env_val
        if match["default"] is not None:
            return match["default"]
        msg = (
            f"{where or '<root>'}: environment variable '{match['name']}' "
            f"is not set and has no default"
        )
        raise ValueError(msg)

    return _ENV_REF.sub(_lookup, value)


def read_definition(path: str | Path) -> dict[str, Any]:
    """Read one source definition file with environment references expanded.

    An empty file is an empty definition, i.e. all defaults.
    """
    p = Path(path)
    if not p.is_file():
        msg = f"Source definition not found: {p}"
        raise FileNotFoundError(msg)
    try:
        data = yaml.safe_load(p.read_text())
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = f" (line {mark.line + 1})" if mark is not None else ""
        msg = f"{p}{line}: not a valid YAML source definition: {exc}"
        raise ValueError(msg) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{p}: expected a source definition mapping, got {type(data).__name__}"
        raise TypeError(msg)
    return expand_env(data)  # type: ignore[no-any-return]


def load_source_config(path: str | Path) -> SourceConfig:
    """Load a source definition and validate it against the built-in defaults."""
    definition = read_definition(path)
    source_id = definition.get("source_id", "source")
    try:
        return build_source_config(definition)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        msg = f"Invalid definition for source '{source_id}' ({path}): {problems}"
        raise ValueError(msg) from exc
