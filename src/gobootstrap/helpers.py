"""Values injected into new projects: secrets, user names and DSNs."""

from __future__ import annotations

import getpass
import os
import secrets
import shlex
import string

from gobootstrap.config import GoBootstrapConfig

_SECRET_ALPHABET = string.ascii_letters + string.digits

FALLBACK_USER = "postgres"


def rand_string(length: int) -> str:
    """Return a random alphanumeric string of the given length."""
    return "".join(secrets.choice(_SECRET_ALPHABET) for _ in range(length))


def get_current_user() -> str:
    """Return the login name of the current OS user.

    Falls back to $USER, then to "postgres", when the lookup fails.
    """
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get("USER") or FALLBACK_USER


def default_pg_dsn(db_name: str, user: str, config: GoBootstrapConfig | None = None) -> str:
    """Build the PostgreSQL DSN a freshly generated project connects with.

    Args:
        db_name: Database name.
        user: Database user, normally the current OS user.
        config: Supplies host, port and sslmode. Defaults to GoBootstrapConfig().

    Returns:
        DSN like ``postgres://alice@localhost:5432/myapp?sslmode=disable``.
    """
    cfg = config or GoBootstrapConfig()
    return f"postgres://{user}@{cfg.pg_host}:{cfg.pg_port}/{db_name}?sslmode={cfg.pg_sslmode}"


def bash_escape(value: str) -> str:
    """Quote a value so it can be pasted into a bash command line."""
    return shlex.quote(value)
