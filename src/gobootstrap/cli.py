"""go-bootstrap CLI - Main entry point."""

from __future__ import annotations

from pathlib import Path

import typer

from gobootstrap import __version__
from gobootstrap.cli_utils import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR, error, success
from gobootstrap.config import load_config
from gobootstrap.gopath import GoPathError
from gobootstrap.log import setup_logging
from gobootstrap.orchestrator import StepFailedError
from gobootstrap.pipeline import bootstrap_project
from gobootstrap.scaffolder import ScaffoldError
from gobootstrap.template_manager import TEMPLATE_NAMES
from gobootstrap.workspace import DEFAULT_TEMPLATE, IdentityError, WorkspaceRequest

app = typer.Typer(
    name="go-bootstrap",
    help="Generate a Go web project inside your GOPATH.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"go-bootstrap version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    project_dir: str = typer.Option(
        ...,
        "--dir",
        "-dir",
        help="Project directory relative to $GOPATH/src/, e.g. github.com/alice/myapp.",
    ),
    gopath: str | None = typer.Option(
        None,
        "--gopath",
        "-gopath",
        help="Choose which $GOPATH to use.",
    ),
    template: str = typer.Option(
        DEFAULT_TEMPLATE,
        "--template",
        "-template",
        help=f"Choose project template. Available options: {' and '.join(TEMPLATE_NAMES)}.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Copy into an existing, non-empty project directory.",
    ),
    templates_dir: str | None = typer.Option(
        None,
        "--templates-dir",
        help="Directory with custom project templates.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log warnings and errors.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Generate a Go web project inside your GOPATH.

    Copies the chosen template to $GOPATH/src/<dir>, fills in the project
    placeholders, bootstraps databases (postgresql template), fetches
    dependencies, initializes version control for git and bitbucket hosts,
    and runs the tests of the new project.
    """
    setup_logging("WARNING" if quiet else "INFO")

    try:
        config = load_config(cli_overrides={"templates_dir": templates_dir}, start_dir=Path.cwd())
    except ValueError as e:
        error(f"Invalid configuration: {e}")

    try:
        request = WorkspaceRequest(
            destination=project_dir,
            gopath_override=gopath,
            template=template,
            force=force,
        )
        result = bootstrap_project(request, config)
    except (GoPathError, IdentityError, ValueError, FileNotFoundError) as e:
        error(str(e), exit_code=EXIT_USER_ERROR)
    except ScaffoldError as e:
        error(str(e), exit_code=EXIT_SYSTEM_ERROR)
    except StepFailedError as e:
        error(str(e), exit_code=EXIT_SYSTEM_ERROR)

    identity = result.identity
    success(f"Created {identity.repo_user}/{identity.project_name} at {result.workspace}")


if __name__ == "__main__":
    app()
