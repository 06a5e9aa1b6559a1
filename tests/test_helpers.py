"""Tests for gobootstrap.helpers module."""

from __future__ import annotations

import string
from unittest.mock import MagicMock, patch

import pytest

from gobootstrap.config import GoBootstrapConfig
from gobootstrap.helpers import (
    FALLBACK_USER,
    bash_escape,
    default_pg_dsn,
    get_current_user,
    rand_string,
)


class TestRandString:
    def test_length(self) -> None:
        assert len(rand_string(16)) == 16
        assert rand_string(0) == ""

    def test_alphanumeric(self) -> None:
        allowed = set(string.ascii_letters + string.digits)
        assert set(rand_string(200)) <= allowed

    def test_values_differ(self) -> None:
        assert rand_string(32) != rand_string(32)


class TestGetCurrentUser:
    @patch("gobootstrap.helpers.getpass.getuser", return_value="alice")
    def test_uses_getpass(self, mock_getuser: MagicMock) -> None:
        assert get_current_user() == "alice"

    @patch("gobootstrap.helpers.getpass.getuser", side_effect=OSError("no user"))
    def test_falls_back_to_env(
        self, mock_getuser: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("USER", "bob")
        assert get_current_user() == "bob"

    @patch("gobootstrap.helpers.getpass.getuser", side_effect=KeyError("uid"))
    def test_falls_back_to_default(
        self, mock_getuser: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("USER", raising=False)
        assert get_current_user() == FALLBACK_USER


class TestDefaultPgDsn:
    def test_default_settings(self) -> None:
        dsn = default_pg_dsn("myapp", "alice")
        assert dsn == "postgres://alice@localhost:5432/myapp?sslmode=disable"

    def test_configured_settings(self) -> None:
        config = GoBootstrapConfig(pg_host="db", pg_port=6543, pg_sslmode="require")
        dsn = default_pg_dsn("myapp-test", "alice", config)
        assert dsn == "postgres://alice@db:6543/myapp-test?sslmode=require"


class TestBashEscape:
    def test_dsn_is_quoted(self) -> None:
        dsn = "postgres://alice@localhost:5432/myapp?sslmode=disable"
        assert bash_escape(dsn) == f"'{dsn}'"

    def test_single_quote(self) -> None:
        assert bash_escape("it's") == "'it'\"'\"'s'"
