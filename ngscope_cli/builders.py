"""Per-entity builders that turn one file's text into structured values."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from . import fields
from .classify import classify_import
from .models import DeclaredUnit, DependencyEdge, ModuleComposition, UnitKind

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

IMPORT_STATEMENT_RE = re.compile(r"""import\s+\{([^}]+)\}\s+from\s+['"]([^'"]+)['"]""")
ALIASED_NAME_RE = re.compile(r"^(?:type\s+)?([\w$]+)\s+as\s+([\w$]+)$")
TYPE_ONLY_PREFIX_RE = re.compile(r"^type\s+(?=[\w$])")

MODULE_LIST_FIELDS = ("declarations", "imports", "exports", "providers", "bootstrap")


def pascal_case(stem: str) -> str:
    """``user-profile`` -> ``UserProfile``; ``-`` and ``_`` start a new word."""
    words = re.split(r"[-_]", stem)
    return "".join(word[:1].upper() + word[1:] for word in words)


def unit_stem(path: PathLike, kind: UnitKind) -> str:
    """File stem without the kind marker: ``user-profile.component.ts`` -> ``user-profile``."""
    return Path(path).stem.removesuffix(kind.marker)


def resolve_unit_name(text: str, stem: str, kind: UnitKind) -> str:
    """Declared class name, else a name synthesized from the file stem."""
    declared = fields.class_name(text)
    if declared:
        return declared
    synthesized = f"{pascal_case(stem)}{kind.value}"
    logger.debug("No class declaration for stem %r, using %s", stem, synthesized)
    return synthesized


def build_component(
    path: PathLike,
    text: str,
    template_path: Optional[PathLike] = None,
    style_paths: Iterable[PathLike] = (),
    test_path: Optional[PathLike] = None,
) -> DeclaredUnit:
    kind = UnitKind.COMPONENT
    return DeclaredUnit(
        name=resolve_unit_name(text, unit_stem(path, kind), kind),
        kind=kind,
        path=str(path),
        selector=fields.selector(text),
        template_path=str(template_path) if template_path else None,
        style_paths=[str(p) for p in style_paths],
        test_path=str(test_path) if test_path else None,
    )


def build_service(path: PathLike, text: str, test_path: Optional[PathLike] = None) -> DeclaredUnit:
    kind = UnitKind.SERVICE
    return DeclaredUnit(
        name=resolve_unit_name(text, unit_stem(path, kind), kind),
        kind=kind,
        path=str(path),
        injectable_scope=fields.injectable_scope(text),
        test_path=str(test_path) if test_path else None,
    )


def build_module(path: PathLike, text: str) -> ModuleComposition:
    kind = UnitKind.MODULE
    lists = {name: fields.list_field(text, name) for name in MODULE_LIST_FIELDS}
    return ModuleComposition(
        name=resolve_unit_name(text, unit_stem(path, kind), kind),
        path=str(path),
        **lists,
    )


def split_import_names(names_text: str) -> List[Tuple[str, Optional[str]]]:
    """Split the braced part of an import into ``(name, alias)`` pairs.

    Import lists are never bracket-nested, so a flat comma split is enough.
    """
    pairs: List[Tuple[str, Optional[str]]] = []
    for raw in names_text.split(","):
        item = " ".join(raw.split())
        if not item:
            continue
        aliased = ALIASED_NAME_RE.match(item)
        if aliased:
            pairs.append((aliased.group(1), aliased.group(2)))
        else:
            pairs.append((TYPE_ONLY_PREFIX_RE.sub("", item), None))
    return pairs


def build_dependencies(path: PathLike, text: str) -> List[DependencyEdge]:
    """One edge per named import of every ``import { ... } from '...'``.

    Aliased imports are classified by the exported name, not the alias.
    """
    source = str(path)
    edges: List[DependencyEdge] = []
    for match in IMPORT_STATEMENT_RE.finditer(text):
        target = match.group(2).strip()
        for name, alias in split_import_names(match.group(1)):
            edges.append(DependencyEdge(
                source=source,
                target=target,
                import_kind=classify_import(name),
                name=name,
                alias=alias,
            ))
    return edges
