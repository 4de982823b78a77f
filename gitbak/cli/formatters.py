"""
Functions for formatting and displaying data in the console using Rich.
"""

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gitbak.exceptions import (
    ConfigurationError,
    DuplicatePackageError,
    FetchError,
    FilesystemError,
    GitbakError,
    InvalidReferenceError,
    ManifestParseError,
    MissingArgumentError,
    UnknownReferenceError,
)
from gitbak.models.reference import PackageReference
from gitbak.models.report import InstallReport
from gitbak.utils.formatting import format_duration, format_size


SUGGESTIONS: dict[type[Exception], list[str]] = {
    ManifestParseError: [
        "Run `gitbak init` to create an empty manifest.",
        "The manifest must be a JSON object with a single 'archives' key.",
        "Use --manifest to point at a different file.",
    ],
    ConfigurationError: [
        "Check the values in your config.ini.",
        "Command line options override the config file.",
    ],
    MissingArgumentError: ["Usage: `gitbak add|remove <provider> <user> <repo>`."],
    InvalidReferenceError: [
        "Ids must be single names without '/', '\\' or surrounding whitespace.",
    ],
    DuplicatePackageError: ["Run `gitbak list` to see what is tracked."],
    UnknownReferenceError: ["Run `gitbak list` to see what is tracked."],
    FilesystemError: [
        "Check that the manifest and backup directories are writable.",
        "Check the free disk space.",
    ],
}


def _suggestions_for(error: Exception) -> list[str]:
    for cls in type(error).__mro__:
        if cls in SUGGESTIONS:
            return SUGGESTIONS[cls]
    return ["Run the command again with -vv for detailed logs."]


def render_error(error: Exception) -> Panel:
    """Renders an error with its kind and what the user can do about it."""
    kind = error.kind if isinstance(error, GitbakError) else type(error).__name__

    body = Text()
    body.append(f"{kind}: ", style="bold red")
    body.append(str(error))
    if isinstance(error, FetchError):
        status = f"HTTP {error.status}" if error.status else "no response"
        body.append(f"\n{error.url} ({status})", style="dim")

    body.append("\n\n")
    tips = "\n".join(f"• {tip}" for tip in _suggestions_for(error))
    body.append(tips, style="yellow")

    title = "gitbak failed" if isinstance(error, GitbakError) else "Unexpected error"
    return Panel(
        body, title=f"[bold red]{title}[/bold red]", border_style="red", expand=False
    )


def _print_references(console: Console, refs: Sequence[PackageReference]) -> None:
    for ref in refs:
        console.print(f"  • {escape(str(ref))}")


def print_inventory(
    console: Console,
    installed: Sequence[PackageReference],
    not_installed: Sequence[PackageReference],
) -> None:
    """Displays installed archives, then tracked archives still to install."""
    console.print(f"[bold]{len(installed)}[/bold] packages are installed")
    _print_references(console, installed)
    console.print()

    if not_installed:
        console.print(
            f"[bold yellow]{len(not_installed)}[/bold yellow] packages not installed,"
            " but are tracked:"
        )
        _print_references(console, not_installed)
        console.print("run [cyan]gitbak install[/cyan] to add them")
    else:
        console.print("[green]all tracked files are installed[/green]")


def print_install_report(
    console: Console, report: InstallReport, duration_s: float
) -> None:
    """Displays every attempted reference with its outcome, then a summary."""
    table = Table(box=box.SIMPLE_HEAD, expand=False)
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Result")
    table.add_column("Details", style="dim")

    for result in report.results:
        if result.ok:
            table.add_row(
                escape(str(result.reference)),
                "[green]✓ installed[/green]",
                f"{format_size(result.size_bytes)} → {escape(str(result.destination))}",
            )
        else:
            table.add_row(
                escape(str(result.reference)),
                f"[red]✗ {result.error_kind}[/red]",
                escape(str(result.error)),
            )

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column(style="bold cyan", justify="right")
    summary.add_column()
    summary.add_row("✓ Installed:", f"[bold green]{len(report.succeeded)}[/bold green]")
    if report.failed:
        summary.add_row("✗ Failed:", f"[bold red]{len(report.failed)}[/bold red]")
    summary.add_row("Total Size:", f"[cyan]{format_size(report.total_bytes)}[/cyan]")
    summary.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if report.all_succeeded:
        title = "[bold]Install Complete[/bold]"
        border_color = "green"
    else:
        title = "[bold]Install Finished With Errors[/bold]"
        border_color = "red"

    console.print()
    console.print(table)
    console.print(
        Panel(
            summary,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
