"""Tests for gobootstrap.workspace module."""

from __future__ import annotations

from pathlib import Path

import pytest

from gobootstrap.workspace import (
    DEFAULT_TEMPLATE,
    IdentityError,
    WorkspaceIdentity,
    WorkspaceRequest,
    extract_identity,
    trim_destination,
    workspace_path,
)


class TestExtractIdentity:
    """Tests for splitting a destination into host, owner and project."""

    def test_three_segments(self) -> None:
        """Test the common host/owner/project form."""
        identity = extract_identity("git.example.com/alice/myapp")

        assert identity.repo_name == "git.example.com"
        assert identity.repo_user == "alice"
        assert identity.project_name == "myapp"

    def test_surrounding_slashes_trimmed(self) -> None:
        """Test that leading and trailing slashes are ignored."""
        identity = extract_identity("/github.com/alice/myapp/")
        assert identity == WorkspaceIdentity("github.com", "alice", "myapp")

    def test_extra_leading_segments_ignored(self) -> None:
        """Test that only the last three segments are used."""
        identity = extract_identity("example.com/group/sub/alice/myapp")
        assert identity == WorkspaceIdentity("sub", "alice", "myapp")

    @pytest.mark.parametrize("destination", ["", "myapp", "alice/myapp", "/alice/myapp/", "a//b"])
    def test_too_few_segments_raises(self, destination: str) -> None:
        """Test that fewer than three parts is an error."""
        with pytest.raises(IdentityError, match="three parts"):
            extract_identity(destination)

    @pytest.mark.parametrize(
        "destination",
        ["github.com/../../../outside/alice/app", "github.com/alice/.", "./github.com/alice/app"],
    )
    def test_dot_segments_raise(self, destination: str) -> None:
        """Test that relative segments cannot escape $GOPATH/src."""
        with pytest.raises(IdentityError, match="must not contain"):
            extract_identity(destination)

    def test_database_names(self) -> None:
        """Test that database names derive from the project name."""
        identity = extract_identity("bitbucket.org/bob/site")

        assert identity.db_name == "site"
        assert identity.test_db_name == "site-test"
        assert identity.test_db_name == identity.db_name + "-test"


class TestHostClassification:
    """Tests for git/hg host detection."""

    def test_git_host(self) -> None:
        identity = WorkspaceIdentity("github.com", "alice", "myapp")
        assert identity.is_git_host()
        assert not identity.is_hg_host()

    def test_hg_host(self) -> None:
        identity = WorkspaceIdentity("bitbucket.org", "bob", "site")
        assert identity.is_hg_host()
        assert not identity.is_git_host()

    def test_unknown_host(self) -> None:
        identity = WorkspaceIdentity("example.com", "carol", "tool")
        assert not identity.is_git_host()
        assert not identity.is_hg_host()

    def test_custom_prefix(self) -> None:
        identity = WorkspaceIdentity("gitlab.internal", "alice", "myapp")
        assert identity.is_git_host("gitlab")
        assert not identity.is_hg_host("hg.")

    def test_host_matching_both_prefixes(self) -> None:
        """Test that git and hg classification are independent checks."""
        identity = WorkspaceIdentity("gitbucket.example.com", "alice", "myapp")
        assert identity.is_git_host("git")
        assert identity.is_hg_host("gitbucket")


class TestWorkspaceRequest:
    """Tests for the WorkspaceRequest dataclass."""

    def test_defaults(self) -> None:
        request = WorkspaceRequest(destination="github.com/alice/myapp")
        assert request.template == DEFAULT_TEMPLATE == "postgresql"
        assert request.gopath_override is None
        assert request.force is False

    @pytest.mark.parametrize("destination", ["", "/", "///"])
    def test_empty_destination_raises(self, destination: str) -> None:
        with pytest.raises(IdentityError, match="dir option is missing"):
            WorkspaceRequest(destination=destination)

    def test_is_immutable(self) -> None:
        request = WorkspaceRequest(destination="github.com/alice/myapp")
        with pytest.raises(AttributeError):
            request.template = "core"  # type: ignore[misc]


class TestWorkspacePath:
    """Tests for the destination path under GOPATH."""

    def test_under_src(self, tmp_path: Path) -> None:
        result = workspace_path(tmp_path, "/github.com/alice/myapp/")
        assert result == tmp_path / "src" / "github.com" / "alice" / "myapp"

    def test_parent_segment_raises(self, tmp_path: Path) -> None:
        with pytest.raises(IdentityError, match="must not contain '..'"):
            workspace_path(tmp_path, "github.com/../../outside/alice/app")

    def test_trim_destination(self) -> None:
        assert trim_destination("//a/b/c//") == "a/b/c"
