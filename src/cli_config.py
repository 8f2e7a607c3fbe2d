"""Configuration file loading and merging with CLI arguments.

Extracted from the entrypoint to keep it slim. Precedence: CLI flags, then
the configuration file, then built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants
from detection.engine import EngineOptions

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A configuration file could not be loaded or has invalid values."""


@dataclass
class Config:
    """Values that may be set in a configuration file."""
    exclude_dirs: Optional[List[str]] = None
    extra_indexes: Optional[List[str]] = None
    preferred_index: Optional[str] = None
    remap: Optional[Dict[str, str]] = None


def _load_raw(path: str) -> Dict[str, Any]:
    lower = path.lower()
    with open(path, "rb") as fh:
        if lower.endswith((".yaml", ".yml")):
            data = yaml.safe_load(fh)
        elif lower.endswith(".json"):
            data = json.load(fh)
        else:
            data = tomllib.load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    # pyproject-style [tool.pydepsync] tables are accepted too
    tool = data.get("tool")
    if isinstance(tool, dict) and isinstance(tool.get("pydepsync"), dict):
        return tool["pydepsync"]
    return data


def _string_list(data: Dict[str, Any], key: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def parse_config(data: Dict[str, Any]) -> Config:
    """Validate a decoded configuration mapping."""
    preferred = data.get("preferred_index")
    if preferred is not None and not isinstance(preferred, str):
        raise ConfigError("'preferred_index' must be a string")

    remap = data.get("remap")
    if remap is not None:
        if not isinstance(remap, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in remap.items()
        ):
            raise ConfigError("'remap' must be a table of strings")
        remap = dict(remap)

    return Config(
        exclude_dirs=_string_list(data, "exclude_dirs"),
        extra_indexes=_string_list(data, "extra_indexes"),
        preferred_index=preferred,
        remap=remap,
    )


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from ``path`` or from ``.pydepsync.toml``.

    An explicit ``path`` that cannot be loaded raises ``ConfigError``. The
    implicit default file is best-effort: problems are logged and defaults
    are used.
    """
    if path:
        try:
            return parse_config(_load_raw(path))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load config file {path}: {exc}") from exc

    default_path = Constants.CONFIG_FILE
    if not os.path.isfile(default_path):
        return Config()
    try:
        return parse_config(_load_raw(default_path))
    except (OSError, ValueError, ConfigError) as exc:
        logger.warning("Failed to parse config file at %s: %s", default_path, exc)
        return Config()


def merge_args_and_config(args, config: Config) -> EngineOptions:
    """Build engine options; non-empty CLI values replace config values."""
    remap_args = getattr(args, "REMAP", None) or []
    return EngineOptions(
        exclude_dirs=list(getattr(args, "EXCLUDE_DIRS", None) or config.exclude_dirs or []),
        extra_indexes=list(getattr(args, "EXTRA_INDEXES", None) or config.extra_indexes or []),
        preferred_index=getattr(args, "PREFERRED_INDEX", None) or config.preferred_index,
        extras_to_remap=dict(remap_args) if remap_args else dict(config.remap or {}),
    )
