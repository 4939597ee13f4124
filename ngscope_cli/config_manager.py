"""Layered TOML configuration for analysis options.

Precedence, lowest first: built-in defaults, ``~/.ngscope/config.toml``,
``<project>/ngscope.toml``, then explicit command-line flags.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from . import config

logger = logging.getLogger(__name__)

_BOOL_KEYS = ("include_tests", "include_styles", "include_node_modules")


def load_config_file(path: Path) -> Dict[str, Any]:
    """Return the ``[analysis]`` table of *path*, or ``{}``.

    A missing file is silent; an unreadable or malformed one is logged and
    ignored.
    """
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring config file %s: %s", path, exc)
        return {}
    section = data.get("analysis", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config file %s: [analysis] is not a table", path)
        return {}
    return _coerce(section, path)


def _coerce(section: Dict[str, Any], source: Path) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key in _BOOL_KEYS:
        if key in section:
            values[key] = bool(section[key])
    if "max_depth" in section:
        try:
            values["max_depth"] = max(int(section["max_depth"]), 0)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer max_depth in %s", source)
    unknown = set(section) - set(_BOOL_KEYS) - {"max_depth"}
    if unknown:
        logger.debug("Unknown analysis keys in %s: %s", source, ", ".join(sorted(unknown)))
    return values


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Merge defaults, the user file and the project file."""
    merged = dict(config.DEFAULT_ANALYSIS)
    merged.update(load_config_file(config.USER_CONFIG_FILE))
    if project_root is not None:
        merged.update(load_config_file(project_root / config.PROJECT_CONFIG_NAME))
    return merged


def resolve_options(project_root: Optional[Path], **overrides: Any) -> Dict[str, Any]:
    """Apply explicit CLI overrides (``None`` means "not given") on top of the files."""
    options = load_config(project_root)
    for key, value in overrides.items():
        if value is not None:
            options[key] = value
    return options


def save_config(path: Path, analysis: Optional[Dict[str, Any]] = None) -> bool:
    """Write an ``[analysis]`` table to *path*, keeping other tables intact."""
    data: Dict[str, Any] = {}
    if path.is_file():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = toml.load(f)
        except (OSError, toml.TomlDecodeError) as exc:
            logger.warning("Overwriting unreadable config file %s: %s", path, exc)
            data = {}
    data["analysis"] = dict(analysis if analysis is not None else config.DEFAULT_ANALYSIS)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            toml.dump(data, f)
    except OSError as exc:
        logger.warning("Could not write config file %s: %s", path, exc)
        return False
    return True
