import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from karps._computation import Computation
from karps._config import get_config
from karps._errors import ConfigError, KarpsError
from karps._io import load_computation_file
from karps._path import parse_global_path

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
    """Karps CLI."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if verbose:
        log_level = logging.DEBUG
    elif config.log_level is not None:
        log_level = config.log_level
    else:
        log_level = logging.INFO

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


def _load_computation(path: Path) -> Computation:
    """Load and validate a computation file, exiting with an error message on failure."""
    err_console.print(f"[cyan]Loading computation from:[/cyan] {path}")
    try:
        computation_file = load_computation_file(path)
        computation = Computation.create(computation_file.computation_id, computation_file.to_items())
    except KarpsError as e:
        logger.debug("Rejected computation file", exc_info=True)
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    err_console.print(f"[cyan]Session:[/cyan] [bold]{computation_file.session}[/bold]")
    err_console.print(f"[cyan]Computation:[/cyan] [bold]{computation.id}[/bold]")
    err_console.print()
    return computation


@app.command()
def check(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a computation file (.toml or .json)"),
    ],
) -> None:
    """Check that a computation file describes a valid computation."""
    err_console.print()
    computation = _load_computation(path)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Path", style="bold")
    table.add_column("Locality")
    table.add_column("Dependencies", justify="right", style="yellow")
    table.add_column("Logical", justify="right", style="yellow")
    table.add_column("Tracked", justify="center")

    for item in computation.items:
        table.add_row(
            escape(str(item.path.local)),
            str(item.locality),
            str(len(item.dependencies)),
            str(len(item.logical_dependencies)),
            "[green]✓[/green]" if item.is_tracked else "",
        )

    out_console.print(
        Panel(
            table,
            title=f"[bold]Computation: {escape(str(computation.id))}[/bold]",
            subtitle=f"[dim]{len(computation)} items, {len(computation.tracked_items)} tracked[/dim]",
            border_style="cyan",
        ),
    )
    out_console.print(f"[cyan]Output:[/cyan] {escape(str(computation.output.path))}")

    err_console.print()
    err_console.print("[green]✓ Computation is valid[/green]")
    err_console.print()


@app.command()
def closure(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a computation file (.toml or .json)"),
    ],
) -> None:
    """Show the dependencies between the tracked items of a computation."""
    err_console.print()
    computation = _load_computation(path)

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Tracked item", style="bold")
    table.add_column("Depends on")

    for item_path, deps in computation.tracked_item_dependencies.items():
        rendered = escape(", ".join(str(dep.local) for dep in deps)) or "[dim]-[/dim]"
        table.add_row(escape(str(item_path.local)), rendered)

    out_console.print(Panel(table, title="[bold]Tracked dependencies[/bold]", border_style="cyan"))

    order = computation.checkpoint_graph().topological_order()
    out_console.print("[cyan]Request order:[/cyan]")
    for i, item_path in enumerate(order, start=1):
        out_console.print(f"  {i}. {escape(str(item_path))}")


@app.command("parse-path")
def parse_path(
    text: Annotated[
        str,
        typer.Argument(help="Global path, e.g. //session/computation/a/b"),
    ],
) -> None:
    """Parse a global path and show its components."""
    try:
        global_path = parse_global_path(text)
    except ValueError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Session", escape(str(global_path.session)))
    table.add_row("Computation", escape(str(global_path.computation)))
    table.add_row("Segments", escape(", ".join(global_path.local.segments)))
    out_console.print(table)


if __name__ == "__main__":
    app()
