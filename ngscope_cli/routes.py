"""Routing-tree extraction from ``routes = [ ... ]`` array literals."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from . import fields
from .models import RouteNode
from .scanning import balanced_blocks, bracket_interior, split_top_level

logger = logging.getLogger(__name__)

# ``const routes: Routes = [``, ``export const routes: Route[] = [``, ``routes = [``
ROUTES_DECL_RE = re.compile(r"(?<![\w$.])routes\s*(?::\s*[\w$.<>\[\]]+\s*)?=\s*\[")
LAZY_IMPORT_RE = re.compile(r"""import\(\s*['"`]([^'"`]+)['"`]\s*\)""")
# Comments ahead of a property, e.g. after the previous entry's comma.
LEADING_COMMENTS_RE = re.compile(r"^(?:\s*(?://[^\n]*|/\*.*?\*/))+", re.DOTALL)


def routes_interior(text: str) -> Optional[str]:
    """Interior of the first routes array declaration, or None."""
    match = ROUTES_DECL_RE.search(text)
    if match is None:
        return None
    interior = bracket_interior(text, match.end() - 1)
    if interior is None:
        logger.debug("Routes array opened at offset %d is never closed", match.start())
    return interior


def route_properties(span: str) -> Dict[str, str]:
    """Own ``key: value`` entries of one route object literal.

    Only depth-zero entries of the object are returned, so fields belonging
    to nested children never leak into the parent. The first occurrence of a
    key wins.
    """
    body = span.strip()
    if body.startswith("{") and body.endswith("}"):
        body = body[1:-1]
    props: Dict[str, str] = {}
    for entry in split_top_level(body):
        key, sep, value = LEADING_COMMENTS_RE.sub("", entry).partition(":")
        if not sep:
            continue
        key = key.strip().strip("'\"")
        props.setdefault(key, value.strip())
    return props


def _lazy_module(value: str) -> Optional[str]:
    literal = fields.string_field(f"loadChildren: {value}", "loadChildren")
    if literal is not None:
        return literal
    match = LAZY_IMPORT_RE.search(value)
    return match.group(1) if match else None


def parse_route_object(span: str) -> RouteNode:
    """Build one node; a span without ``path`` still yields a node with ``""``."""
    props = route_properties(span)

    path = ""
    if "path" in props:
        path = fields.string_field(f"path: {props['path']}", "path") or ""

    component = None
    if "component" in props:
        component = fields.identifier_field(f"component: {props['component']}", "component")

    lazy_module = _lazy_module(props["loadChildren"]) if "loadChildren" in props else None

    children: List[RouteNode] = []
    value = props.get("children", "")
    if value.startswith("["):
        interior = bracket_interior(value, 0)
        if interior is not None:
            children = build_route_tree(interior)

    return RouteNode(path=path, component=component, lazy_module=lazy_module, children=children)


def build_route_tree(interior: str) -> List[RouteNode]:
    """One node per depth-zero object literal in an array interior."""
    return [parse_route_object(block) for block in balanced_blocks(interior, "{")]


def extract_routes(text: str) -> List[RouteNode]:
    interior = routes_interior(text)
    if interior is None:
        return []
    return build_route_tree(interior)
