"""
Main CLI application for pom-modules.

Provides a Typer-based command-line interface for declaring submodules in
Maven aggregator POMs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..config import get_config_manager, load_config
from ..core.descriptor import ModuleDescriptor
from ..core.exceptions import PomModuleError
from ..core.pom_editor import add_module_to_file, list_modules
from ..version.diff_engine import DiffEngine

# Initialize Typer app
app = typer.Typer(
    name="pom-modules",
    help="Add submodules to Maven aggregator POMs, safely and idempotently",
    add_completion=False,
    rich_markup_mode="rich"
)

# Global console for rich output
console = Console()


def _resolve_pom(path: Path) -> Path:
    """Accept either a pom.xml or the directory holding it."""
    if path.is_dir():
        path = path / "pom.xml"
    if not path.is_file():
        console.print(f"[red]Error: POM not found: {escape(str(path))}[/red]")
        raise typer.Exit(1)
    return path


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level"),
) -> None:
    """
    Manage the <modules> section of Maven aggregator POMs.
    """
    level = "INFO" if verbose else load_config().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def add(
    pom: Path = typer.Argument(..., help="Aggregator pom.xml, or the directory containing it"),
    artifact_id: Optional[str] = typer.Argument(None, help="Artifact id of the module to add"),
    descriptor: Optional[Path] = typer.Option(None, "--descriptor", "-d", help="YAML module descriptor (id, dir, name)"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show the change without writing it"),
    show_diff: Optional[bool] = typer.Option(None, "--diff/--no-diff", help="Print a unified diff of the change"),
    backup: Optional[bool] = typer.Option(None, "--backup/--no-backup", help="Keep pom.xml.bak next to the POM"),
    json_output: bool = typer.Option(False, "--json", help="Print the result and its diff as JSON"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Encoding used to read the POM"),
) -> None:
    """
    Declare a module in an aggregator POM unless it is already there.

    The POM must have [cyan]<packaging>pom</packaging>[/cyan]. The whole file
    is re-indented with two spaces when a module is added.
    """
    config = load_config()

    if (artifact_id is None) == (descriptor is None):
        console.print("[red]Error: give either an ARTIFACT_ID or --descriptor, not both[/red]")
        raise typer.Exit(1)

    if descriptor is not None:
        try:
            artifact_id = ModuleDescriptor.from_yaml(descriptor).id
        except (OSError, ValueError) as e:
            console.print(f"[red]Error reading descriptor: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    pom_path = _resolve_pom(pom)

    try:
        insertion = add_module_to_file(
            pom_path,
            artifact_id,
            encoding=encoding or config.encoding,
            backup=config.backup if backup is None else backup,
            dry_run=dry_run,
        )
    except PomModuleError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error updating {escape(str(pom_path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(json.dumps(DiffEngine().diff_insertion(insertion).to_dict()))
        return

    name = escape(artifact_id)
    if not insertion.inserted:
        console.print(f"[yellow]Module {name} is already declared in {escape(str(pom_path))}[/yellow]")
        return

    if dry_run:
        console.print(f"[yellow]Would add module {name} to {escape(str(pom_path))}[/yellow]")
    else:
        console.print(f"[green]Added module {name} to {escape(str(pom_path))}[/green]")
        if insertion.backup_path:
            console.print(f"[dim]Backup written to {escape(str(insertion.backup_path))}[/dim]")

    if dry_run or (config.show_diff if show_diff is None else show_diff):
        pom_diff = DiffEngine().diff_insertion(insertion)
        if not pom_diff.is_empty:
            console.print(Syntax(pom_diff.diff_text, "diff", theme="ansi_dark"))
        console.print(
            f"[dim]{pom_diff.added_lines} line(s) added, {pom_diff.removed_lines} line(s) removed[/dim]"
        )


@app.command("list")
def list_command(
    pom: Path = typer.Argument(..., help="pom.xml, or the directory containing it"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Encoding used to read the POM"),
) -> None:
    """
    List the modules declared in a POM.
    """
    pom_path = _resolve_pom(pom)

    try:
        with open(pom_path, "r", encoding=encoding or load_config().encoding) as f:
            modules = list_modules(f)
    except PomModuleError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error reading {escape(str(pom_path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not modules:
        console.print("[yellow]No modules declared[/yellow]")
        return

    table = Table(title=f"Modules in {escape(str(pom_path))}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Module", style="cyan")
    for index, module in enumerate(modules, 1):
        table.add_row(str(index), escape(module))
    console.print(table)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    create_default: bool = typer.Option(False, "--create-default", help="Create default config file"),
) -> None:
    """
    Manage pom-modules configuration.
    """
    config_manager = get_config_manager()

    if create_default:
        try:
            path = config_manager.create_default_config()
        except OSError as e:
            console.print(f"[red]Could not save config file: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]Created default configuration at {escape(str(path))}[/green]")
        return

    if show:
        config_info = config_manager.get_config_info()

        config_display = f"""[bold]pom-modules Configuration[/bold]

[bold cyan]Files:[/bold cyan]
• Config File: {escape(config_info['config_file'])}
• Exists: {'Yes' if config_info['config_exists'] else 'No'}

[bold green]Settings:[/bold green]
• Encoding: {config_info['encoding']}
• Show Diff: {'✓' if config_info['show_diff'] else '✗'}
• Backup: {'✓' if config_info['backup'] else '✗'}
• Log Level: {config_info['log_level']}"""

        console.print(Panel(config_display, border_style="green"))
        return

    console.print("Use [cyan]pom-modules config --show[/cyan] to see full configuration")
    console.print("Use [cyan]pom-modules config --create-default[/cyan] to create a default config file")


if __name__ == "__main__":
    app()
