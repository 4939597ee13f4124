"""Pattern-based field lookups scoped to one text span.

A lookup that finds nothing returns ``None`` (or an empty list); a missing
field is a normal outcome, never an error.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Pattern

from .scanning import bracket_interior, split_top_level

CLASS_DECL_RE = re.compile(r"export\s+class\s+([A-Za-z0-9_]+)")
IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")

# Field names must not be the tail of a longer identifier (``xpath:``).
_FIELD_PREFIX = r"(?<![\w$]){name}\s*:\s*"


@lru_cache(maxsize=64)
def _string_pattern(name: str) -> Pattern[str]:
    return re.compile(_FIELD_PREFIX.format(name=re.escape(name)) + r"['\"`]([^'\"`]+)['\"`]")


@lru_cache(maxsize=64)
def _identifier_pattern(name: str) -> Pattern[str]:
    return re.compile(_FIELD_PREFIX.format(name=re.escape(name)) + r"([A-Za-z0-9_]+)")


@lru_cache(maxsize=64)
def _array_pattern(name: str) -> Pattern[str]:
    return re.compile(_FIELD_PREFIX.format(name=re.escape(name)) + r"\[")


def string_field(text: str, name: str) -> Optional[str]:
    """First quoted value following ``name:``."""
    match = _string_pattern(name).search(text)
    return match.group(1) if match else None


def identifier_field(text: str, name: str) -> Optional[str]:
    """First bare identifier following ``name:``."""
    match = _identifier_pattern(name).search(text)
    return match.group(1) if match else None


def array_interior(text: str, name: str) -> Optional[str]:
    """Interior of the first ``name: [ ... ]``, matched by depth, or None."""
    match = _array_pattern(name).search(text)
    if match is None:
        return None
    return bracket_interior(text, match.end() - 1)


def leading_identifier(item: str) -> Optional[str]:
    match = IDENTIFIER_RE.search(item)
    return match.group(0) if match else None


def list_field(text: str, name: str) -> List[str]:
    """Referenced names in the first ``name: [ ... ]`` array.

    Each top-level item contributes its first identifier-like token; items
    without one are skipped. Source order and duplicates are preserved. An
    absent field and an empty array both give ``[]``.
    """
    interior = array_interior(text, name)
    if interior is None:
        return []
    names: List[str] = []
    for item in split_top_level(interior):
        ident = leading_identifier(item)
        if ident:
            names.append(ident)
    return names


def class_name(text: str) -> Optional[str]:
    match = CLASS_DECL_RE.search(text)
    return match.group(1) if match else None


def selector(text: str) -> Optional[str]:
    return string_field(text, "selector")


def injectable_scope(text: str) -> Optional[str]:
    return string_field(text, "providedIn")
