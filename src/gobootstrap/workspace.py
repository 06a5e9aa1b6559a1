"""Workspace request and identity extraction.

A destination such as ``github.com/alice/myapp`` names the forge host, the
repository owner and the project. Those three parts feed the placeholder
values and decide which version-control steps run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_TEMPLATE = "postgresql"
TEST_DB_SUFFIX = "-test"


class IdentityError(ValueError):
    """Raised when the destination path does not name host, owner and project."""


@dataclass(frozen=True)
class WorkspaceRequest:
    """What the user asked to create.

    Attributes:
        destination: Path relative to ``$GOPATH/src`` (e.g. "github.com/alice/myapp").
        gopath_override: Explicit GOPATH root to use instead of the default.
        template: Name of the project template to copy.
        force: Merge into a destination that already has content.
    """

    destination: str
    gopath_override: str | None = None
    template: str = DEFAULT_TEMPLATE
    force: bool = False

    def __post_init__(self) -> None:
        if not self.destination or not self.destination.strip("/"):
            raise IdentityError("dir option is missing.")


@dataclass(frozen=True)
class WorkspaceIdentity:
    """Host, owner and project parts of a destination path."""

    repo_name: str
    repo_user: str
    project_name: str

    @property
    def db_name(self) -> str:
        return self.project_name

    @property
    def test_db_name(self) -> str:
        return self.project_name + TEST_DB_SUFFIX

    def is_git_host(self, prefix: str = "git") -> bool:
        return self.repo_name.startswith(prefix)

    def is_hg_host(self, prefix: str = "bitbucket") -> bool:
        return self.repo_name.startswith(prefix)


def trim_destination(destination: str) -> str:
    """Strip leading and trailing slashes from a destination path."""
    return destination.strip("/")


def split_destination(destination: str) -> list[str]:
    """Split a destination path into its non-empty segments.

    Raises:
        IdentityError: If a segment is "." or "..", which would point outside
            $GOPATH/src.
    """
    chunks = [chunk for chunk in trim_destination(destination).split("/") if chunk]
    for chunk in chunks:
        if chunk in (".", ".."):
            raise IdentityError(f"-dir must not contain '{chunk}' segments: {destination}")
    return chunks


def extract_identity(destination: str) -> WorkspaceIdentity:
    """Split a destination path into host, owner and project.

    Only the last three segments are used; extra leading segments are ignored.

    Args:
        destination: Slash-delimited path relative to ``$GOPATH/src``.

    Returns:
        WorkspaceIdentity for the path.

    Raises:
        IdentityError: If fewer than three non-empty segments remain, or a
            segment is "." or "..".
    """
    chunks = split_destination(destination)
    if len(chunks) < 3:
        raise IdentityError(
            "Cannot extract repo name, repo user and project name, "
            "-dir should have three parts, separated by '/'."
        )
    return WorkspaceIdentity(
        repo_name=chunks[-3],
        repo_user=chunks[-2],
        project_name=chunks[-1],
    )


def workspace_path(gopath: Path, destination: str) -> Path:
    """Full path of the new workspace under the chosen GOPATH root."""
    return gopath.joinpath("src", *split_destination(destination))
