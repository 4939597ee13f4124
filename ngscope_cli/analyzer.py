"""Project traversal and per-category analysis.

The walker decides which files are looked at; the ``*_from_sources``
functions only ever see ``(path, text)`` pairs and can be fed from anywhere.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .builders import build_component, build_dependencies, build_module, build_service, unit_stem
from .classify import classify_file, is_style_file
from .config import ALWAYS_SKIPPED_DIRS, DEFAULT_MAX_DEPTH, DEPENDENCY_DIR, STYLE_EXTENSIONS
from .errors import SourceReadError
from .models import (
    DeclaredUnit,
    DependencyEdge,
    DirectoryNode,
    FileNode,
    ModuleComposition,
    ProjectStructure,
    RouteNode,
    UnitKind,
)
from .routes import extract_routes

logger = logging.getLogger(__name__)

Source = Tuple[Path, str]
FilePredicate = Callable[[Path], bool]


# ===================================================================
# File predicates
# ===================================================================

def is_component_file(path: Path) -> bool:
    return path.name.endswith(".component.ts") and not path.name.endswith(".spec.ts")


def is_service_file(path: Path) -> bool:
    return path.name.endswith(".service.ts") and not path.name.endswith(".spec.ts")


def is_module_file(path: Path) -> bool:
    return path.name.endswith(".module.ts")


def is_typescript_file(path: Path) -> bool:
    return path.suffix == ".ts"


def is_routing_file(path: Path) -> bool:
    name = path.name
    return ("routing" in name and name.endswith(".module.ts")) or name.endswith(".routes.ts")


def is_test_file(path: Path) -> bool:
    return ".spec." in path.name


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, exc) from exc


def find_related_file(directory: Path, stem: str, suffix: str) -> Optional[Path]:
    """``<directory>/<stem>.<suffix>`` if it exists."""
    candidate = directory / f"{stem}.{suffix}"
    return candidate if candidate.exists() else None


def is_angular_project(path: Path) -> bool:
    if (path / "angular.json").exists():
        return True
    package_json = path / "package.json"
    if package_json.exists():
        try:
            content = package_json.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False
        return '"@angular/core"' in content or "'@angular/core'" in content
    return False


# ===================================================================
# Source-level analyses
# ===================================================================

def components_from_sources(sources: Iterable[Source], discover_related: bool = True) -> List[DeclaredUnit]:
    components: List[DeclaredUnit] = []
    for path, text in sources:
        if not discover_related:
            components.append(build_component(path, text))
            continue
        stem = unit_stem(path, UnitKind.COMPONENT)
        parent = path.parent
        styles = [
            p for p in (
                find_related_file(parent, stem, f"component.{ext}") for ext in sorted(STYLE_EXTENSIONS)
            ) if p is not None
        ]
        components.append(build_component(
            path,
            text,
            template_path=find_related_file(parent, stem, "component.html"),
            style_paths=styles,
            test_path=find_related_file(parent, stem, "component.spec.ts"),
        ))
    return components


def services_from_sources(sources: Iterable[Source], discover_related: bool = True) -> List[DeclaredUnit]:
    services: List[DeclaredUnit] = []
    for path, text in sources:
        test_path = None
        if discover_related:
            stem = unit_stem(path, UnitKind.SERVICE)
            test_path = find_related_file(path.parent, stem, "service.spec.ts")
        services.append(build_service(path, text, test_path=test_path))
    return services


def modules_from_sources(sources: Iterable[Source]) -> List[ModuleComposition]:
    return [build_module(path, text) for path, text in sources]


def dependencies_from_sources(sources: Iterable[Source]) -> List[DependencyEdge]:
    edges: List[DependencyEdge] = []
    for path, text in sources:
        edges.extend(build_dependencies(path, text))
    return edges


def routes_from_sources(sources: Iterable[Source]) -> List[RouteNode]:
    routes: List[RouteNode] = []
    for path, text in sources:
        found = extract_routes(text)
        if not found:
            logger.debug("No routes array in %s", path)
        routes.extend(found)
    return routes


# ===================================================================
# Analyzer
# ===================================================================

class Analyzer:
    """Walks an Angular project and runs the per-category extractions."""

    def __init__(
        self,
        root_path: Path,
        include_tests: bool = False,
        include_styles: bool = False,
        include_node_modules: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
        on_file: Optional[Callable[[Path], None]] = None,
    ) -> None:
        self.root_path = root_path
        self.include_tests = include_tests
        self.include_styles = include_styles
        self.include_node_modules = include_node_modules
        self.max_depth = max_depth
        self.on_file = on_file

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def is_skipped_dir(self, name: str) -> bool:
        if name in ALWAYS_SKIPPED_DIRS:
            return True
        return name == DEPENDENCY_DIR and not self.include_node_modules

    def is_included_file(self, path: Path) -> bool:
        if not self.include_tests and is_test_file(path):
            return False
        if not self.include_styles and is_style_file(path):
            return False
        return True

    def walk_project_files(self) -> Iterator[Path]:
        """Included files under the root, in sorted traversal order."""
        for dirpath, dirnames, filenames in os.walk(self.root_path, onerror=self._walk_error):
            dirnames[:] = sorted(d for d in dirnames if not self.is_skipped_dir(d))
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if self.is_included_file(path):
                    yield path

    @staticmethod
    def _walk_error(exc: OSError) -> None:
        raise SourceReadError(exc.filename or "", exc) from exc

    def iter_sources(self, predicate: FilePredicate) -> Iterator[Source]:
        for path in self.walk_project_files():
            if not predicate(path):
                continue
            text = read_source(path)
            logger.debug("Scanning %s", path)
            yield path, text
            if self.on_file is not None:
                self.on_file(path)

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    def analyze_structure(self) -> ProjectStructure:
        root = DirectoryNode(name=self.root_path.resolve().name or "root", path=str(self.root_path))
        self._scan_directory(self.root_path, root, 0)
        return ProjectStructure(root=root)

    def _scan_directory(self, dir_path: Path, node: DirectoryNode, depth: int) -> None:
        if depth >= self.max_depth:
            return
        try:
            entries = sorted(dir_path.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise SourceReadError(dir_path, exc) from exc

        for entry in entries:
            if entry.is_dir():
                if self.is_skipped_dir(entry.name):
                    continue
                child = DirectoryNode(name=entry.name, path=str(entry))
                self._scan_directory(entry, child, depth + 1)
                if not child.is_empty():
                    node.directories.append(child)
            elif self.is_included_file(entry):
                node.files.append(FileNode(name=entry.name, path=str(entry), file_kind=classify_file(entry)))

    def analyze_components(self) -> List[DeclaredUnit]:
        return components_from_sources(self.iter_sources(is_component_file))

    def analyze_services(self) -> List[DeclaredUnit]:
        return services_from_sources(self.iter_sources(is_service_file))

    def analyze_modules(self) -> List[ModuleComposition]:
        return modules_from_sources(self.iter_sources(is_module_file))

    def analyze_dependencies(self) -> List[DependencyEdge]:
        return dependencies_from_sources(self.iter_sources(is_typescript_file))

    def analyze_routes(self) -> List[RouteNode]:
        return routes_from_sources(self.iter_sources(is_routing_file))
