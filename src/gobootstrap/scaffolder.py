"""Project scaffolding for go-bootstrap.

Copies a template tree into the new workspace and rewrites the
``$GO_BOOTSTRAP_*`` placeholders found in the copied files.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from gobootstrap.config import GoBootstrapConfig
from gobootstrap.helpers import bash_escape, default_pg_dsn, get_current_user, rand_string
from gobootstrap.workspace import WorkspaceIdentity

logger = logging.getLogger(__name__)


class ScaffoldError(Exception):
    """Raised when scaffolding operations fail."""


REPO_NAME = "$GO_BOOTSTRAP_REPO_NAME"
REPO_USER = "$GO_BOOTSTRAP_REPO_USER"
PROJECT_NAME = "$GO_BOOTSTRAP_PROJECT_NAME"
COOKIE_SECRET = "$GO_BOOTSTRAP_COOKIE_SECRET"
CURRENT_USER = "$GO_BOOTSTRAP_CURRENT_USER"
PG_DSN = "$GO_BOOTSTRAP_PG_DSN"
ESCAPED_PG_DSN = "$GO_BOOTSTRAP_ESCAPED_PG_DSN"
PG_TEST_DSN = "$GO_BOOTSTRAP_PG_TEST_DSN"
ESCAPED_PG_TEST_DSN = "$GO_BOOTSTRAP_ESCAPED_PG_TEST_DSN"

PLACEHOLDER_TOKENS = [
    REPO_NAME,
    REPO_USER,
    PROJECT_NAME,
    COOKIE_SECRET,
    CURRENT_USER,
    PG_DSN,
    ESCAPED_PG_DSN,
    PG_TEST_DSN,
    ESCAPED_PG_TEST_DSN,
]

DIR_MODE = 0o755


def copy_template(template_dir: Path, destination: Path, force: bool = False) -> Path:
    """Copy everything under template_dir into destination.

    The destination and its parents are created first. Hidden files are
    copied, symlinks are copied as links, and existing files are overwritten.

    Args:
        template_dir: Absolute path of the template tree.
        destination: Absolute path of the new workspace.
        force: Allow copying into a destination that already has content.

    Returns:
        The destination path.

    Raises:
        ScaffoldError: If the destination is a file, is non-empty without
            force, or the copy fails. A failed copy is not rolled back.
    """
    if destination.exists():
        if not destination.is_dir():
            raise ScaffoldError(f"Destination exists and is not a directory: {destination}")
        if not force and any(destination.iterdir()):
            raise ScaffoldError(
                f"Destination already exists and is not empty: {destination}. "
                "Remove it first or use --force to merge the template into it."
            )

    logger.info("Creating %s...", destination)
    try:
        destination.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise ScaffoldError(f"Cannot create directory {destination}: {e}") from e

    logger.info("Copying project template directory to %s...", destination)
    try:
        shutil.copytree(template_dir, destination, symlinks=True, dirs_exist_ok=True)
    except OSError as e:
        raise ScaffoldError(f"Failed to copy template {template_dir}: {e}") from e

    return destination


def build_replacers(
    identity: WorkspaceIdentity,
    config: GoBootstrapConfig,
    secret: str | None = None,
    user: str | None = None,
) -> dict[str, str]:
    """Compute the value of every placeholder token for one workspace.

    Args:
        identity: Host, owner and project of the workspace.
        config: Supplies secret length and DSN settings.
        secret: Cookie secret to use. Generated when omitted.
        user: OS user for DSNs. Looked up when omitted.

    Returns:
        Mapping from token to replacement value.
    """
    if secret is None:
        secret = rand_string(config.secret_length)
    if user is None:
        user = get_current_user()

    pg_dsn = default_pg_dsn(identity.db_name, user, config)
    pg_test_dsn = default_pg_dsn(identity.test_db_name, user, config)

    return {
        REPO_NAME: identity.repo_name,
        REPO_USER: identity.repo_user,
        PROJECT_NAME: identity.project_name,
        COOKIE_SECRET: secret,
        CURRENT_USER: user,
        PG_DSN: pg_dsn,
        ESCAPED_PG_DSN: bash_escape(pg_dsn),
        PG_TEST_DSN: pg_test_dsn,
        ESCAPED_PG_TEST_DSN: bash_escape(pg_test_dsn),
    }


def _compile_tokens(replacers: dict[str, str]) -> tuple[re.Pattern[bytes], dict[bytes, bytes]]:
    encoded = {token.encode("utf-8"): value.encode("utf-8") for token, value in replacers.items()}
    # Longest first so a token that prefixes another never wins the match
    ordered = sorted(encoded, key=len, reverse=True)
    pattern = re.compile(b"|".join(re.escape(token) for token in ordered))
    return pattern, encoded


def replace_placeholders(root: Path, replacers: dict[str, str]) -> list[Path]:
    """Replace every token in every regular file under root.

    Each file is rewritten in a single pass, so text inserted by a
    replacement is never matched again. Files are handled as bytes;
    symlinks are skipped.

    Args:
        root: Directory to walk.
        replacers: Mapping from literal token to replacement value.

    Returns:
        Paths of the files whose content changed, in walk order.

    Raises:
        ScaffoldError: If any file cannot be read or written.
    """
    if not replacers:
        return []

    pattern, encoded = _compile_tokens(replacers)
    changed: list[Path] = []

    for path in sorted(root.rglob("*")):
        if path.is_symlink() or not path.is_file():
            continue
        try:
            content = path.read_bytes()
            updated = pattern.sub(lambda m: encoded[m.group(0)], content)
            if updated != content:
                path.write_bytes(updated)
                changed.append(path)
        except OSError as e:
            raise ScaffoldError(f"Cannot replace placeholders in {path}: {e}") from e

    return changed
