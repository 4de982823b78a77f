"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import time
from pathlib import Path

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn
from typer.core import TyperGroup

from gitbak import __version__
from gitbak.core.installer import Installer
from gitbak.core.mutator import ManifestMutator
from gitbak.core.reconciler import missing
from gitbak.models.config import GitbakConfig
from gitbak.models.report import InstallReport
from gitbak.providers import ProviderRegistry
from gitbak.storage.config_manager import ConfigManager
from gitbak.storage.inventory import LocalInventory
from gitbak.storage.manifest_store import ManifestStore
from gitbak.transfer.downloader import Downloader
from gitbak.utils.path import create_dir

from .formatters import print_inventory, print_install_report

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("gitbak")


class CommandGroup(TyperGroup):
    """Matches command names case-insensitively and tolerates unknown commands."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, cmd_name.lower())

    def resolve_command(self, ctx: click.Context, args: list[str]):
        name = args[0] if args else ""
        if name and not name.startswith("-") and not self.get_command(ctx, name):
            console.print(f'command "{escape(name)}" is not handled')
            ctx.exit(0)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="gitbak",
    cls=CommandGroup,
    help=(
        "Mirror source archives listed in a JSON manifest. Use 'gitbak"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "gitbak"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Path of the manifest file (backups.json)."
    ),
    backups_dir: Path | None = typer.Option(
        None, "--backups-dir", "-d", help="Directory that holds installed archives."
    ),
    workers: int | None = typer.Option(
        None, "-w", "--workers", help="Number of simultaneous downloads."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Seconds before a single download is abandoned."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """gitbak: keep local copies of remote source archives"""
    if version:
        console.print(f"[bold]gitbak[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("gitbak").setLevel(log_level)

    cli_options = {
        key: value
        for key, value in {
            "manifest_path": manifest,
            "backups_dir": backups_dir,
            "max_workers": workers,
            "timeout": timeout,
        }.items()
        if value is not None
    }
    ctx.obj = ConfigManager(CONFIG_FILE).load_config(cli_options)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="help")
def help_command(ctx: typer.Context):
    """Show this message."""
    console.print(ctx.parent.get_help())


@app.command(name="list")
def list_command(ctx: typer.Context):
    """Show installed archives and tracked archives that are not installed."""
    config: GitbakConfig = ctx.obj
    installed = LocalInventory(config.backups_dir).scan_sorted()
    manifest = ManifestStore(config.manifest_path).load()
    print_inventory(console, installed, missing(manifest, installed))


@app.command()
def install(ctx: typer.Context):
    """Download every tracked archive that is not installed yet."""
    config: GitbakConfig = ctx.obj
    manifest = ManifestStore(config.manifest_path).load()
    not_installed = missing(manifest, LocalInventory(config.backups_dir).scan())

    if not not_installed:
        console.print(
            "[green]No tracked packages need to be installed.[/green] "
            "Run [cyan]gitbak list[/cyan] to see what is tracked."
        )
        return

    console.print(
        f"[bold cyan]Installing {len(not_installed)} tracked package(s)...[/bold cyan]"
    )

    async def _install_async() -> InstallReport:
        async with Downloader(
            max_attempts=config.max_attempts,
            timeout=config.timeout,
            max_workers=config.max_workers,
        ) as downloader:
            registry = ProviderRegistry.from_classes(config.backups_dir, downloader)
            with Progress(
                SpinnerColumn(),
                "[progress.description]{task.description}",
                BarColumn(bar_width=30),
                MofNCompleteColumn(),
                console=console,
                transient=True,
            ) as progress:
                task_id = progress.add_task("Installing", total=len(not_installed))
                installer = Installer(
                    registry,
                    max_workers=config.max_workers,
                    on_result=lambda _result: progress.advance(task_id),
                )
                return await installer.install(not_installed)

    start_time = time.monotonic()
    report = asyncio.run(_install_async())
    print_install_report(console, report, time.monotonic() - start_time)

    if not report.all_succeeded:
        raise typer.Exit(code=1)


@app.command()
def add(
    ctx: typer.Context,
    provider: str | None = typer.Argument(None, help="Provider id, e.g. 'github'."),
    user: str | None = typer.Argument(None, help="User or organization name."),
    repo: str | None = typer.Argument(None, help="Repository name."),
):
    """Start tracking a repository."""
    config: GitbakConfig = ctx.obj
    ManifestMutator(ManifestStore(config.manifest_path)).add(provider, user, repo)


@app.command()
def remove(
    ctx: typer.Context,
    provider: str | None = typer.Argument(None, help="Provider id, e.g. 'github'."),
    user: str | None = typer.Argument(None, help="User or organization name."),
    repo: str | None = typer.Argument(None, help="Repository name."),
):
    """Stop tracking a repository. Installed archives are kept."""
    config: GitbakConfig = ctx.obj
    ManifestMutator(ManifestStore(config.manifest_path)).remove(provider, user, repo)


@app.command()
def init(ctx: typer.Context):
    """Create an empty manifest and the backup directory."""
    config: GitbakConfig = ctx.obj
    store = ManifestStore(config.manifest_path)
    if store.init():
        console.print(f"[green]✓ Created manifest '{escape(str(store.path))}'[/green]")
    else:
        console.print(
            f"[yellow]Manifest '{escape(str(store.path))}' already exists.[/yellow]"
        )
    create_dir(config.backups_dir)
    console.print("Ready! Try: [cyan]gitbak add github <user> <repo>[/cyan]")
