"""Structured entities produced by one extraction pass."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class UnitKind(str, Enum):
    COMPONENT = "Component"
    SERVICE = "Service"
    MODULE = "Module"

    @property
    def marker(self) -> str:
        """File-name marker, e.g. ``.component`` in ``app.component.ts``."""
        return f".{self.value.lower()}"


class ImportKind(str, Enum):
    COMPONENT = "Component"
    SERVICE = "Service"
    MODULE = "Module"
    DIRECTIVE = "Directive"
    PIPE = "Pipe"
    GUARD = "Guard"
    RESOLVER = "Resolver"
    MODEL = "Model"
    OTHER = "Other"


class FileKind(str, Enum):
    COMPONENT = "Component"
    SERVICE = "Service"
    MODULE = "Module"
    DIRECTIVE = "Directive"
    PIPE = "Pipe"
    TEMPLATE = "Template"
    GUARD = "Guard"
    RESOLVER = "Resolver"
    MODEL = "Model"
    CONFIG = "Config"
    STYLE = "Style"
    TEST = "Test"
    NGRX_ACTION = "NgRxAction"
    NGRX_REDUCER = "NgRxReducer"
    NGRX_EFFECT = "NgRxEffect"
    NGRX_SELECTOR = "NgRxSelector"
    NGRX_OTHER = "NgRxOther"
    OTHER = "Other"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))  # type: ignore[call-overload]


@dataclass(frozen=True)
class DeclaredUnit(_Serializable):
    """One class-like declaration (component or service) found in one file."""

    name: str
    kind: UnitKind
    path: str
    selector: Optional[str] = None
    injectable_scope: Optional[str] = None
    template_path: Optional[str] = None
    style_paths: List[str] = field(default_factory=list)
    test_path: Optional[str] = None


@dataclass(frozen=True)
class ModuleComposition(_Serializable):
    name: str
    path: str
    declarations: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    providers: List[str] = field(default_factory=list)
    bootstrap: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyEdge(_Serializable):
    """One named import. A statement importing N names yields N edges."""

    source: str
    target: str
    import_kind: ImportKind
    name: str
    alias: Optional[str] = None


@dataclass(frozen=True)
class RouteNode(_Serializable):
    path: str
    component: Optional[str] = None
    lazy_module: Optional[str] = None
    children: List["RouteNode"] = field(default_factory=list)


@dataclass
class FileNode(_Serializable):
    name: str
    path: str
    file_kind: FileKind


@dataclass
class DirectoryNode(_Serializable):
    name: str
    path: str
    directories: List["DirectoryNode"] = field(default_factory=list)
    files: List[FileNode] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.files and not self.directories

    def iter_files(self):
        yield from self.files
        for sub in self.directories:
            yield from sub.iter_files()


@dataclass
class ProjectStructure(_Serializable):
    root: DirectoryNode
