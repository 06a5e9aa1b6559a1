"""GOPATH discovery and selection.

GOPATH may hold several roots separated by the platform path-list separator.
The last one is used unless the user explicitly picks another listed root.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


class GoPathError(Exception):
    """Raised when no usable GOPATH root can be chosen."""


def _normalize(path: str | Path) -> Path:
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def gopaths(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the GOPATH roots in declaration order.

    Args:
        environ: Environment mapping to read GOPATH from. Defaults to os.environ.

    Returns:
        Absolute root paths. Empty entries are skipped.
    """
    env = os.environ if environ is None else environ
    raw = env.get("GOPATH", "")
    return [_normalize(entry) for entry in raw.split(os.pathsep) if entry.strip()]


def is_valid_gopath(path: str | Path, roots: list[Path]) -> bool:
    """Check whether path is one of the GOPATH roots."""
    return _normalize(path) in roots


def resolve_gopath(roots: list[Path], override: str | Path | None = None) -> Path:
    """Choose the GOPATH root to scaffold into.

    Args:
        roots: Candidate roots, as returned by gopaths().
        override: Root requested by the user. May be relative.

    Returns:
        The override (absolute) when it is listed in roots, otherwise the
        last root.

    Raises:
        GoPathError: If roots is empty or the override is not one of them.
    """
    if not roots:
        raise GoPathError("GOPATH is not set.")

    if override is None or str(override) == "":
        return roots[-1]

    if is_valid_gopath(override, roots):
        return _normalize(override)

    raise GoPathError(f"Cannot find {override} in $GOPATH")
