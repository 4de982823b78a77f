"""
Main entry point for the gitbak application.

Application errors are rendered as a panel on stderr and exit with status 1;
an interrupted run exits with 130.
"""

import logging
import sys

from rich.console import Console

from gitbak.cli.app import app
from gitbak.cli.formatters import render_error
from gitbak.exceptions import GitbakError

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def main() -> None:
    """Main entry point function."""
    stderr = Console(stderr=True)
    try:
        # standalone mode turns typer.Exit and usage errors into SystemExit
        app()
    except KeyboardInterrupt:
        stderr.print("\n[yellow]Interrupted, archives already installed are kept.[/]")
        sys.exit(EXIT_INTERRUPTED)
    except GitbakError as e:
        stderr.print(render_error(e))
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        stderr.print(render_error(e))
        logging.getLogger("gitbak").debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
