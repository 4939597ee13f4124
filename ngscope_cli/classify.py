"""Naming-convention classifiers for identifiers and file names.

Both are total functions over strings: they look at suffixes only and never
consult the actual declaration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from .config import STYLE_EXTENSIONS
from .models import FileKind, ImportKind

IMPORT_SUFFIXES: Tuple[Tuple[Tuple[str, ...], ImportKind], ...] = (
    (("Component",), ImportKind.COMPONENT),
    (("Service",), ImportKind.SERVICE),
    (("Module",), ImportKind.MODULE),
    (("Directive",), ImportKind.DIRECTIVE),
    (("Pipe",), ImportKind.PIPE),
    (("Guard",), ImportKind.GUARD),
    (("Resolver",), ImportKind.RESOLVER),
    (("Model", "Interface"), ImportKind.MODEL),
)

# Order matters: NgRx and template markers win over the generic suffixes.
FILE_SUFFIXES: Tuple[Tuple[Tuple[str, ...], FileKind], ...] = (
    ((".action.ts", ".actions.ts"), FileKind.NGRX_ACTION),
    ((".html",), FileKind.TEMPLATE),
    ((".reducer.ts",), FileKind.NGRX_REDUCER),
    ((".effects.ts",), FileKind.NGRX_EFFECT),
    ((".selector.ts", ".selectors.ts"), FileKind.NGRX_SELECTOR),
    ((".ngrx.ts",), FileKind.NGRX_OTHER),
    ((".component.ts",), FileKind.COMPONENT),
    ((".service.ts",), FileKind.SERVICE),
    ((".module.ts",), FileKind.MODULE),
    ((".directive.ts",), FileKind.DIRECTIVE),
    ((".pipe.ts",), FileKind.PIPE),
    ((".guard.ts",), FileKind.GUARD),
    ((".resolver.ts",), FileKind.RESOLVER),
    ((".model.ts", ".interface.ts"), FileKind.MODEL),
)

CONFIG_FILES = {"tsconfig.json", "angular.json"}


def classify_import(name: str) -> ImportKind:
    for suffixes, kind in IMPORT_SUFFIXES:
        if name.endswith(suffixes):
            return kind
    return ImportKind.OTHER


def is_style_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lstrip(".") in STYLE_EXTENSIONS


def classify_file(path: Union[str, Path]) -> FileKind:
    file_name = Path(path).name
    for suffixes, kind in FILE_SUFFIXES:
        if file_name.endswith(suffixes):
            return kind
    if file_name in CONFIG_FILES:
        return FileKind.CONFIG
    if file_name.endswith(".spec.ts"):
        return FileKind.TEST
    if is_style_file(path):
        return FileKind.STYLE
    return FileKind.OTHER
