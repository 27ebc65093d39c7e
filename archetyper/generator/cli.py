from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..utils.config import load_config
from .archetype import instantiate
from .errors import ArchetypeError
from .locator import list_archetypes

app = typer.Typer(add_completion=False, help="Scaffold projects from archetype templates.")
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    level = os.environ.get("ARCHETYPER_LOG_LEVEL") or ("DEBUG" if verbose else "INFO")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs")):
    setup_logging(verbose)


@app.command("create")
def create(
    archetype: str = typer.Argument(..., help="Archetype to use (e.g. 'app', 'lib' or a mapped name)"),
    project: str = typer.Argument(..., help="Name of the new project"),
    dest: Optional[Path] = typer.Option(None, "--dest", "-d", help="Destination directory (default: ./PROJECT)"),
    defaults: bool = typer.Option(False, "--defaults", "--yes", "-y", help="Use defaults for all prompts"),
):
    """Create a new project from an archetype."""
    destination = (dest or Path(project)).resolve()
    try:
        instantiate(archetype, project, destination, defaults, load_config())
    except ArchetypeError as exc:
        err_console.print(f"[red]✗[/] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1)
    print(f"✅ Project {escape(repr(project))} created at {escape(str(destination))}")


@app.command("list")
def list_cmd():
    """List archetypes available under the search roots."""
    try:
        config = load_config()
    except ArchetypeError as exc:
        err_console.print(f"[red]✗[/] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1)
    items = list_archetypes(config.templates.locations)
    if not items:
        print("[yellow]No archetypes found.[/]")
        return
    for item in items:
        mark = "[dim](shadowed)[/]" if item.shadowed else ""
        print(f"  {escape(item.name):30} {escape(str(item.path))} {mark}")


if __name__ == "__main__":
    app()
