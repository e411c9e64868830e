#!/usr/bin/env python3
"""
Main CLI entry point for splitview
"""

import itertools
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from splitview import __version__
from splitview.config.settings import EngineSettings, get_config_path, load_settings
from splitview.exceptions import SplitViewError
from splitview.layout import HitNode, HitRole, Leaf, ViewController, describe, find_leaf
from splitview.types import Slot
from splitview.utils.logging import setup_logging

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="splitview - recursive split-pane layouts in the terminal",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    splitview - recursive split-pane layouts in the terminal

    [bold]Examples:[/bold]

    Start the interactive demo:
        [cyan]splitview demo[/cyan]

    Limit nesting to three levels:
        [cyan]splitview demo --max-depth 3[/cyan]

    Print the layout five drops produce:
        [cyan]splitview preview --panes 5[/cyan]

    Show the effective settings:
        [cyan]splitview config[/cyan]
    """
    setup_logging(verbose)


def _resolve_settings(
    config: Optional[Path],
    max_depth: Optional[int] = None,
    orientation: Optional[str] = None,
) -> EngineSettings:
    """Load settings and apply command-line overrides."""
    try:
        settings = load_settings(config)
        data = settings.to_dict()
        if max_depth is not None:
            data["max_depth"] = max_depth
        if orientation is not None:
            data["root_orientation"] = orientation
        return EngineSettings.from_dict(data)
    except SplitViewError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """Show splitview version"""
    typer.echo(f"splitview version {__version__}")


@app.command()
def demo(
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", "-d", help="Deepest level new splits may be created at"
    ),
    orientation: Optional[str] = typer.Option(
        None, "--orientation", "-o", help="Root orientation: row or column"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: ~/.config/splitview/config.yaml)"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for pane colours"),
):
    """Launch the interactive split-pane demo"""
    settings = _resolve_settings(config, max_depth, orientation)

    from splitview.ui.app import SplitViewApp

    SplitViewApp(settings=settings, seed=seed).run()


def _drop_chain(controller: ViewController, leaf: Optional[Leaf]) -> List[HitNode]:
    """Hit chain for a drop onto the pane showing leaf, or onto the root."""
    location = find_leaf(controller.root, leaf.leaf_id) if leaf is not None else None
    if location is None:
        return [HitNode(HitRole.SPLIT, controller.root.node_id)]

    split, slot = location
    role = HitRole.SLOT1 if slot is Slot.FIRST else HitRole.SLOT2
    return [
        HitNode(HitRole.NONE, leaf.leaf_id),
        HitNode(role, split.node_id),
        HitNode(HitRole.SPLIT, split.node_id),
    ]


@app.command()
def preview(
    panes: int = typer.Option(3, "--panes", "-n", min=0, help="Number of panes to drop"),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", "-d", help="Deepest level new splits may be created at"
    ),
    orientation: Optional[str] = typer.Option(
        None, "--orientation", "-o", help="Root orientation: row or column"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: ~/.config/splitview/config.yaml)"
    ),
):
    """Print the layout produced by dropping panes one after another.

    Each pane is dropped onto the previous one, the same way the demo's
    "new pane" key drops next to the focused pane.
    """
    settings = _resolve_settings(config, max_depth, orientation)
    counter = itertools.count(1)
    controller = ViewController(settings, id_factory=lambda: str(next(counter)))

    refused = 0
    last: Optional[Leaf] = None
    for number in range(1, panes + 1):
        leaf = controller.on_drop(_drop_chain(controller, last), f"pane {number}")
        if leaf is None:
            refused += 1
        else:
            last = leaf

    console.print(describe(controller.to_render_tree()))
    if refused:
        console.print(f"[yellow]{refused} drop(s) refused by the depth limit[/yellow]")


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: ~/.config/splitview/config.yaml)"
    ),
):
    """Show the effective engine settings"""
    settings = _resolve_settings(config)
    path = config or get_config_path()

    table = Table(title="splitview settings", show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in settings.to_dict().items():
        table.add_row(key, "none" if value is None else str(value))

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    console.print(f"[dim]Source: {source}[/dim]", soft_wrap=True)


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
