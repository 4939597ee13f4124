"""Exception types raised by the analyzer."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class NgScopeError(Exception):
    """Base class for ngscope failures."""


class SourceReadError(NgScopeError):
    """A project file or directory could not be read. Fatal for the whole run."""

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to read '{self.path}': {cause}")
