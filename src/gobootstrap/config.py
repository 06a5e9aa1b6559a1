"""Configuration management for go-bootstrap.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .gobootstraprc > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

RC_FILENAME = ".gobootstraprc"


@dataclass
class GoBootstrapConfig:
    """Configuration for the go-bootstrap CLI tool.

    Attributes:
        secret_length: Length of the generated cookie secret (default: 16)
        pg_host: Host used in generated PostgreSQL DSNs (default: "localhost")
        pg_port: Port used in generated PostgreSQL DSNs (default: 5432)
        pg_sslmode: sslmode query value of generated DSNs (default: "disable")
        git_host_prefix: Host prefix that marks a git forge (default: "git")
        hg_host_prefix: Host prefix that marks a Mercurial forge (default: "bitbucket")
        templates_dir: Directory with custom project templates (default: bundled)
    """

    secret_length: int = 16
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_sslmode: str = "disable"
    git_host_prefix: str = "git"
    hg_host_prefix: str = "bitbucket"
    templates_dir: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not isinstance(self.secret_length, int) or self.secret_length <= 0:
            raise ValueError("secret_length must be a positive integer")

        if not self.pg_host or not isinstance(self.pg_host, str):
            raise ValueError("pg_host must be a non-empty string")

        if not isinstance(self.pg_port, int) or not 0 < self.pg_port < 65536:
            raise ValueError("pg_port must be an integer between 1 and 65535")

        if not self.pg_sslmode or not isinstance(self.pg_sslmode, str):
            raise ValueError("pg_sslmode must be a non-empty string")

        # An empty prefix would classify every host
        for name in ("git_host_prefix", "hg_host_prefix"):
            value = getattr(self, name)
            if not value or not isinstance(value, str):
                raise ValueError(f"{name} must be a non-empty string")

        if self.templates_dir is not None and not isinstance(self.templates_dir, str):
            raise ValueError("templates_dir must be a string")

    def get_templates_path(self) -> Path | None:
        """Get the custom templates directory, if one is configured.

        Returns:
            Absolute path to the templates directory, or None to use the
            bundled templates.
        """
        if not self.templates_dir:
            return None
        return Path(self.templates_dir).expanduser().resolve()


def _get_config_field_names() -> set[str]:
    return {f.name for f in fields(GoBootstrapConfig)}


def find_config_file(filename: str = RC_FILENAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the .gobootstraprc TOML file.

    A missing or unparsable file contributes nothing.
    """
    config_path = find_config_file(RC_FILENAME, start_dir)
    if config_path is None:
        return {}

    try:
        with open(config_path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from GO_BOOTSTRAP_* environment variables.

    For example: GO_BOOTSTRAP_PG_HOST, GO_BOOTSTRAP_SECRET_LENGTH.

    Raises:
        ValueError: If an integer setting is not a number.
    """
    int_fields = {"secret_length", "pg_port"}

    result: dict[str, Any] = {}
    for name in sorted(_get_config_field_names()):
        env_var = f"GO_BOOTSTRAP_{name.upper()}"
        value = os.environ.get(env_var)
        if value is None:
            continue
        if name in int_fields:
            try:
                result[name] = int(value)
            except ValueError:
                raise ValueError(f"{env_var} must be an integer, got {value!r}") from None
        else:
            result[name] = value

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries; later ones take precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> GoBootstrapConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (GO_BOOTSTRAP_*)
    3. .gobootstraprc file
    4. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for the rc file.

    Returns:
        Fully resolved GoBootstrapConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    valid_fields = _get_config_field_names()
    cli_config = {
        k: v for k, v in (cli_overrides or {}).items() if k in valid_fields and v is not None
    }

    merged = _merge_configs(
        _load_from_rc(start_dir),
        _load_from_env(),
        cli_config,
    )

    return GoBootstrapConfig(**merged)
