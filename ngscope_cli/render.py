"""Console and JSON presentation of analysis results."""

from __future__ import annotations

import json
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .graph_export import ascii_graph
from .models import (
    DeclaredUnit,
    DependencyEdge,
    DirectoryNode,
    FileKind,
    ImportKind,
    ModuleComposition,
    ProjectStructure,
    RouteNode,
)

FILE_KIND_BADGES: Dict[FileKind, str] = {
    FileKind.COMPONENT: "[magenta]C[/magenta]",
    FileKind.SERVICE: "[green]S[/green]",
    FileKind.MODULE: "[yellow]M[/yellow]",
    FileKind.DIRECTIVE: "[cyan]D[/cyan]",
    FileKind.PIPE: "[blue]P[/blue]",
    FileKind.GUARD: "[red]G[/red]",
    FileKind.RESOLVER: "[bright_red]R[/bright_red]",
    FileKind.MODEL: "[bright_blue]I[/bright_blue]",
    FileKind.CONFIG: "[bright_yellow]CF[/bright_yellow]",
    FileKind.STYLE: "[bright_magenta]ST[/bright_magenta]",
    FileKind.TEST: "[bright_green]T[/bright_green]",
    FileKind.TEMPLATE: "[white]H[/white]",
    FileKind.NGRX_ACTION: "[orange1]NGA[/]",
    FileKind.NGRX_REDUCER: "[purple4]NGR[/]",
    FileKind.NGRX_EFFECT: "[sea_green3]NGE[/]",
    FileKind.NGRX_SELECTOR: "[rgb(220,20,60)]NGS[/]",
    FileKind.NGRX_OTHER: "[bright_white]NGO[/bright_white]",
    FileKind.OTHER: "O",
}

IMPORT_KIND_COLORS: Dict[ImportKind, str] = {
    ImportKind.COMPONENT: "cyan",
    ImportKind.SERVICE: "green",
    ImportKind.MODULE: "yellow",
    ImportKind.DIRECTIVE: "magenta",
    ImportKind.PIPE: "blue",
    ImportKind.GUARD: "red",
    ImportKind.RESOLVER: "bright_red",
    ImportKind.MODEL: "bright_blue",
    ImportKind.OTHER: "default",
}


def make_console(**kwargs) -> Console:
    # Paths must never be wrapped mid-line.
    return Console(soft_wrap=True, **kwargs)


def to_json(entities: Iterable) -> str:
    return json.dumps([e.to_dict() for e in entities], indent=2)


def structure_to_json(structure: ProjectStructure) -> str:
    return json.dumps(structure.to_dict(), indent=2)


def _header(console: Console, label: str, title: str, count: int) -> None:
    console.print(f"\n[bold green]{label}:[/bold green] {title} ({count}):")


# ===================================================================
# Structure
# ===================================================================

def print_structure(structure: ProjectStructure, console: Console) -> None:
    console.print("\n[bold green]STRUCTURE:[/bold green] Project Structure:")
    _print_directory(structure.root, 0, console)
    console.print()
    print_summary(structure.root, console)


def _print_directory(directory: DirectoryNode, depth: int, console: Console) -> None:
    indent = "  " * depth
    name = directory.name if depth == 0 else f"{directory.name}/"
    console.print(f"{indent}[bold blue]{escape(name)}[/bold blue]")
    for file in directory.files:
        console.print(f"{indent}  \\[{FILE_KIND_BADGES[file.file_kind]}] {escape(file.name)}")
    for sub in directory.directories:
        _print_directory(sub, depth + 1, console)


def summarize(root: DirectoryNode) -> List[tuple]:
    """``(kind, count)`` rows in declaration order of :class:`FileKind`."""
    counts = Counter(f.file_kind for f in root.iter_files())
    return [(kind, counts[kind]) for kind in FileKind if counts[kind]]


def print_summary(root: DirectoryNode, console: Console) -> None:
    rows = summarize(root)
    table = Table(title="Summary", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Files", justify="right")
    for kind, count in rows:
        table.add_row(kind.value, str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(c for _, c in rows)}[/bold]")
    console.print(table)


# ===================================================================
# Declared units and modules
# ===================================================================

def print_components(components: Sequence[DeclaredUnit], detailed: bool, console: Console) -> None:
    _header(console, "COMPONENTS", "Components", len(components))
    if not components:
        console.print("  No components found")
        return
    for component in components:
        console.print(f"  [yellow]{escape(component.name)}[/yellow] ({escape(component.path)})")
        if not detailed:
            continue
        if component.selector:
            console.print(f"    Selector: {escape(component.selector)}")
        if component.template_path:
            console.print(f"    Template: {escape(component.template_path)}")
        if component.style_paths:
            console.print("    Styles:")
            for style_path in component.style_paths:
                console.print(f"      {escape(style_path)}")
        if component.test_path:
            console.print(f"    Test: {escape(component.test_path)}")
        console.print()


def print_services(services: Sequence[DeclaredUnit], detailed: bool, console: Console) -> None:
    _header(console, "SERVICES", "Services", len(services))
    if not services:
        console.print("  No services found")
        return
    for service in services:
        console.print(f"  [yellow]{escape(service.name)}[/yellow] ({escape(service.path)})")
        if not detailed:
            continue
        if service.injectable_scope:
            console.print(f"    Injectable scope: {escape(service.injectable_scope)}")
        if service.test_path:
            console.print(f"    Test: {escape(service.test_path)}")
        console.print()


def print_modules(modules: Sequence[ModuleComposition], detailed: bool, console: Console) -> None:
    _header(console, "MODULES", "Modules", len(modules))
    if not modules:
        console.print("  No modules found")
        return
    for module in modules:
        console.print(f"  [yellow]{escape(module.name)}[/yellow] ({escape(module.path)})")
        if not detailed:
            continue
        for label, names in (
            ("Declarations", module.declarations),
            ("Imports", module.imports),
            ("Exports", module.exports),
            ("Providers", module.providers),
            ("Bootstrap", module.bootstrap),
        ):
            if names:
                console.print(f"    {label}: {escape(', '.join(names))}")
        console.print()


# ===================================================================
# Dependencies and routes
# ===================================================================

def print_dependencies(edges: Sequence[DependencyEdge], console: Console) -> None:
    _header(console, "DEPENDENCIES", "Dependencies", len(edges))
    if not edges:
        console.print("  No dependencies found")
        return
    grouped: Dict[str, List[DependencyEdge]] = {}
    for edge in edges:
        grouped.setdefault(edge.source, []).append(edge)
    for source in sorted(grouped):
        console.print(f"  {escape(source)}:")
        for edge in grouped[source]:
            color = IMPORT_KIND_COLORS[edge.import_kind]
            kind = edge.import_kind.value
            console.print(f"    {escape(edge.target)} -> [{color}]{kind}[/{color}]")
        console.print()


def print_dependency_graph(edges: Sequence[DependencyEdge], console: Console) -> None:
    console.print("\n[bold green]GRAPH:[/bold green] Dependency Graph:")
    console.print(escape(ascii_graph(list(edges))), highlight=False)


def print_routes(routes: Sequence[RouteNode], console: Console) -> None:
    _header(console, "ROUTES", "Routes", len(routes))
    if not routes:
        console.print("  No routes found")
        return
    for route in routes:
        _print_route(route, 1, console)


def _print_route(route: RouteNode, depth: int, console: Console) -> None:
    line = f"{'  ' * depth}[green]{escape(route.path or '/')}[/green]"
    if route.component:
        line += f" -> [yellow]{escape(route.component)}[/yellow]"
    if route.lazy_module:
        line += f" (lazy: [cyan]{escape(route.lazy_module)}[/cyan])"
    console.print(line)
    for child in route.children:
        _print_route(child, depth + 1, console)
