"""Tests for project template lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from gobootstrap.scaffolder import PLACEHOLDER_TOKENS
from gobootstrap.template_manager import (
    DB_BOOTSTRAP_SCRIPT,
    TEMPLATE_NAMES,
    bundled_templates_dir,
    get_template_dir,
    list_templates,
)


class TestListTemplates:
    def test_known_names(self) -> None:
        assert list_templates() == ["postgresql", "core"]

    def test_returns_copy(self) -> None:
        names = list_templates()
        names.append("other")
        assert "other" not in TEMPLATE_NAMES


class TestGetTemplateDir:
    """Tests for resolving a template name to a directory."""

    @pytest.mark.parametrize("name", TEMPLATE_NAMES)
    def test_bundled_templates_exist(self, name: str) -> None:
        template_dir = get_template_dir(name)
        assert template_dir == (bundled_templates_dir() / name).resolve()
        assert template_dir.is_dir()
        assert (template_dir / "main.go").is_file()

    def test_unknown_template_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown template: mysql"):
            get_template_dir("mysql")

    def test_custom_templates_dir(self, tmp_path: Path) -> None:
        (tmp_path / "core").mkdir()
        assert get_template_dir("core", tmp_path) == (tmp_path / "core").resolve()

    def test_missing_custom_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Cannot find template 'core'"):
            get_template_dir("core", tmp_path)

    def test_unknown_name_checked_before_directory(self, tmp_path: Path) -> None:
        (tmp_path / "custom").mkdir()
        with pytest.raises(ValueError, match="Unknown template"):
            get_template_dir("custom", tmp_path)


class TestBundledTemplateContent:
    """Sanity checks on the shipped template trees."""

    def test_postgresql_has_db_bootstrap_script(self) -> None:
        assert (get_template_dir("postgresql") / DB_BOOTSTRAP_SCRIPT).is_file()

    def test_core_has_no_db_bootstrap_script(self) -> None:
        assert not (get_template_dir("core") / DB_BOOTSTRAP_SCRIPT).exists()

    def test_hidden_files_shipped(self) -> None:
        assert (get_template_dir("postgresql") / ".env").is_file()

    def test_postgresql_uses_all_placeholders(self) -> None:
        text = "".join(
            path.read_text(encoding="utf-8")
            for path in get_template_dir("postgresql").rglob("*")
            if path.is_file()
        )
        for token in PLACEHOLDER_TOKENS:
            assert token in text, token
