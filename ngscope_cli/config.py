"""Configuration constants and user paths for ngscope."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("NGSCOPE_HOME", str(Path.home() / ".ngscope"))).expanduser()
USER_CONFIG_FILE = BASE_DIR / "config.toml"
PROJECT_CONFIG_NAME = "ngscope.toml"

DEFAULT_MAX_DEPTH = 10
STYLE_EXTENSIONS = {"css", "scss", "sass", "less"}

# Never descended into, whatever the options say.
ALWAYS_SKIPPED_DIRS = {".angular", ".vscode", ".git"}
DEPENDENCY_DIR = "node_modules"

DEFAULT_ANALYSIS = {
    "include_tests": False,
    "include_styles": False,
    "include_node_modules": False,
    "max_depth": DEFAULT_MAX_DEPTH,
}
