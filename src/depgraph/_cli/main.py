import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from depgraph._errors import CycleDetectedError, DepGraphError
from depgraph._graph import DependencyGraph
from depgraph._io import export_order_to_toml, load_graph_from_toml

from .config import ConfigError, DepGraphConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Depgraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> DepGraphConfig:
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug(f"Using configuration rooted at {config.project_root}")
    return config


def _load_graph(path: Path | None, config: DepGraphConfig, *, strict: bool | None) -> DependencyGraph:
    """Load the graph from the CLI path, falling back to [tool.depgraph].graph."""
    effective_path = path if path is not None else config.graph
    if effective_path is None:
        err_console.print(
            "[red]Error: Graph file required. Provide a path argument or configure \\[tool.depgraph].graph[/red]",
        )
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {effective_path}")
    try:
        return load_graph_from_toml(effective_path, strict=config.strict if strict is None else strict)
    except (DepGraphError, OSError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def sort(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to graph definition TOML file"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    build_order: Annotated[
        bool,
        typer.Option("--build-order", help="List prerequisites before the nodes that depend on them"),
    ] = False,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print one key per line instead of a table"),
    ] = False,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Reject duplicate node keys (defaults to the strict setting in pyproject.toml)"),
    ] = None,
) -> None:
    """Sort a graph topologically and print the resulting order."""
    config = _load_config()
    graph = _load_graph(path, config, strict=strict)

    try:
        order = graph.build_order() if build_order else graph.top_sort()
    except CycleDetectedError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if plain:
        for key in order:
            out_console.print(key, markup=False, highlight=False)
    else:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Node")
        for index, key in enumerate(order, start=1):
            table.add_row(str(index), escape(key))
        out_console.print(table)

    effective_output = output if output is not None else config.output
    if effective_output is not None:
        err_console.print(f"[cyan]Exporting order to:[/cyan] {effective_output}")
        export_order_to_toml(order, effective_output)

    err_console.print(f"[green]✓ Sorted {len(order)} node(s)[/green]")


@app.command()
def check(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to graph definition TOML file"),
    ] = None,
    *,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Reject duplicate node keys (defaults to the strict setting in pyproject.toml)"),
    ] = None,
) -> None:
    """Check that a graph definition is well-formed and acyclic."""
    config = _load_config()
    graph = _load_graph(path, config, strict=strict)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right", style="yellow")
    table.add_row("Nodes", str(len(graph)))
    table.add_row("Edges", str(graph.edge_count))
    err_console.print(Panel(table, title="[bold]Graph[/bold]", border_style="cyan"))

    try:
        graph.top_sort()
    except CycleDetectedError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print("[green]✓ Graph is valid[/green]")


def main() -> None:
    app()
