"""Typer-based CLI for ngscope Angular structure analysis."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__, render
from .analyzer import Analyzer, is_angular_project
from .config import PROJECT_CONFIG_NAME
from .config_manager import load_config, resolve_options, save_config
from .errors import NgScopeError
from .graph_export import export_dot, export_html

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(
    help="🔭 ngscope: structural facts from Angular source trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="⚙️  Configuration: show or initialise ngscope.toml.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")

console = render.make_console()
err_console = render.make_console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ngscope v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log per-file extraction details."),
):
    """ngscope: components, services, modules, imports and routes of an Angular project."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ===================================================================
# Shared option declarations
# ===================================================================

PATH_ARG = typer.Argument(Path("."), exists=True, file_okay=False, help="Path to the Angular project.")
TESTS_OPT = typer.Option(None, "--include-tests/--no-include-tests", "-t", help="Include *.spec.* files.")
STYLES_OPT = typer.Option(None, "--include-styles/--no-include-styles", "-s", help="Include style files.")
NODE_MODULES_OPT = typer.Option(
    None, "--include-node-modules/--no-include-node-modules", help="Descend into node_modules (slow)."
)
DEPTH_OPT = typer.Option(None, "--max-depth", "-m", min=0, help="Maximum depth of the structure tree.")
JSON_OPT = typer.Option(False, "--json", "-j", help="Print JSON instead of text.")


def _make_analyzer(
    path: Path,
    include_tests: Optional[bool],
    include_styles: Optional[bool],
    include_node_modules: Optional[bool],
    max_depth: Optional[int],
) -> Analyzer:
    if not is_angular_project(path):
        typer.echo("WARNING: The specified path does not appear to be an Angular project.", err=True)
        typer.echo("Continuing anyway, but results may not be accurate.", err=True)
    options = resolve_options(
        path,
        include_tests=include_tests,
        include_styles=include_styles,
        include_node_modules=include_node_modules,
        max_depth=max_depth,
    )
    logger.debug("Analysis options: %s", options)
    return Analyzer(path, **options)


@contextmanager
def _scanning(description: str, enabled: bool) -> Iterator[Optional[Callable[[Path], None]]]:
    """Spinner on stderr while files are scanned; silent in JSON mode."""
    if not enabled:
        yield None
        return
    with Progress(
        SpinnerColumn(), TextColumn("[cyan]{task.description}[/cyan]"), console=err_console, transient=True,
    ) as progress:
        task = progress.add_task(description, total=None)
        yield lambda p: progress.update(task, description=f"{description} {p.name}")


def _run(analyzer: Analyzer, description: str, as_json: bool, analysis: Callable[[Analyzer], T]) -> T:
    try:
        with _scanning(description, enabled=not as_json) as on_file:
            analyzer.on_file = on_file
            return analysis(analyzer)
    except NgScopeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


# ===================================================================
# Analysis commands
# ===================================================================

@app.command("structure")
def structure(
    path: Path = PATH_ARG,
    include_tests: Optional[bool] = TESTS_OPT,
    include_styles: Optional[bool] = STYLES_OPT,
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    max_depth: Optional[int] = DEPTH_OPT,
    as_json: bool = JSON_OPT,
):
    """Show the project directory tree with per-file kinds and a summary."""
    analyzer = _make_analyzer(path, include_tests, include_styles, include_node_modules, max_depth)
    result = _run(analyzer, "Analyzing project structure", as_json, Analyzer.analyze_structure)
    if as_json:
        typer.echo(render.structure_to_json(result))
    else:
        render.print_structure(result, console)


@app.command("components")
def components(
    path: Path = PATH_ARG,
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show selector, template, styles, test."),
    include_tests: Optional[bool] = TESTS_OPT,
    include_styles: Optional[bool] = STYLES_OPT,
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    as_json: bool = JSON_OPT,
):
    """List components (*.component.ts)."""
    analyzer = _make_analyzer(path, include_tests, include_styles, include_node_modules, None)
    result = _run(analyzer, "Scanning for components", as_json, Analyzer.analyze_components)
    if as_json:
        typer.echo(render.to_json(result))
    else:
        render.print_components(result, detailed, console)


@app.command("services")
def services(
    path: Path = PATH_ARG,
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show injectable scope and test."),
    include_tests: Optional[bool] = TESTS_OPT,
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    as_json: bool = JSON_OPT,
):
    """List services (*.service.ts)."""
    analyzer = _make_analyzer(path, include_tests, None, include_node_modules, None)
    result = _run(analyzer, "Scanning for services", as_json, Analyzer.analyze_services)
    if as_json:
        typer.echo(render.to_json(result))
    else:
        render.print_services(result, detailed, console)


@app.command("modules")
def modules(
    path: Path = PATH_ARG,
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show declarations, imports, exports, ..."),
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    as_json: bool = JSON_OPT,
):
    """List NgModules and their metadata arrays."""
    analyzer = _make_analyzer(path, None, None, include_node_modules, None)
    result = _run(analyzer, "Scanning for modules", as_json, Analyzer.analyze_modules)
    if as_json:
        typer.echo(render.to_json(result))
    else:
        render.print_modules(result, detailed, console)


@app.command("dependencies")
def dependencies(
    path: Path = PATH_ARG,
    graph: bool = typer.Option(False, "--graph", "-g", help="Show dependencies as an ASCII graph."),
    include_tests: Optional[bool] = TESTS_OPT,
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    as_json: bool = JSON_OPT,
):
    """List named imports of every TypeScript file."""
    analyzer = _make_analyzer(path, include_tests, None, include_node_modules, None)
    result = _run(analyzer, "Scanning for dependencies", as_json, Analyzer.analyze_dependencies)
    if as_json:
        typer.echo(render.to_json(result))
    elif graph:
        render.print_dependency_graph(result, console)
    else:
        render.print_dependencies(result, console)


@app.command("routes")
def routes(
    path: Path = PATH_ARG,
    include_node_modules: Optional[bool] = NODE_MODULES_OPT,
    as_json: bool = JSON_OPT,
):
    """Show the routing tree of routing modules and *.routes.ts files."""
    analyzer = _make_analyzer(path, None, None, include_node_modules, None)
    result = _run(analyzer, "Scanning for routing modules", as_json, Analyzer.analyze_routes)
    if as_json:
        typer.echo(render.to_json(result))
    else:
        render.print_routes(result, console)


@app.command("export-graph")
def export_graph(
    path: Path = PATH_ARG,
    fmt: str = typer.Option("html", "--format", "-f", help="Export format: html or dot."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
    include_tests: Optional[bool] = TESTS_OPT,
):
    """Export the dependency graph to standalone HTML or Graphviz DOT."""
    fmt = fmt.lower()
    if fmt not in {"html", "dot"}:
        raise typer.BadParameter("Format must be one of: html, dot")

    analyzer = _make_analyzer(path, include_tests, None, None, None)
    edges = _run(analyzer, "Scanning for dependencies", False, Analyzer.analyze_dependencies)

    if output is None:
        output = Path.cwd() / f"{path.resolve().name or 'project'}_dependencies.{fmt}"

    if fmt == "html":
        export_html(edges, output)
    else:
        export_dot(edges, output)

    typer.echo(f"Exported {len(edges)} dependencies to {output}")


# ===================================================================
# Configuration commands
# ===================================================================

@config_app.command("show")
def config_show(path: Path = PATH_ARG):
    """Print the effective analysis options for PATH."""
    for key, value in load_config(path).items():
        typer.echo(f"{key} = {value}")


@config_app.command("init")
def config_init(
    path: Path = PATH_ARG,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing ngscope.toml."),
):
    """Write a default ngscope.toml into PATH."""
    target = path / PROJECT_CONFIG_NAME
    if target.exists() and not force:
        typer.echo(f"{target} already exists (use --force to overwrite).", err=True)
        raise typer.Exit(code=1)
    if not save_config(target):
        typer.echo(f"Error: could not write {target}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {target}")


if __name__ == "__main__":
    app()
