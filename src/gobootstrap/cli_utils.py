"""CLI utility functions for go-bootstrap.

Consistent user-facing messages and exit codes for the command line.
"""

from __future__ import annotations

from typing import NoReturn

import typer

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Bad input or configuration
EXIT_SYSTEM_ERROR = 2  # Filesystem failure or a failed setup step


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def success(msg: str) -> None:
    """Print a success message to stdout."""
    styled_prefix = typer.style("Success:", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"{styled_prefix} {msg}")
