"""Project template lookup.

Templates are directory trees shipped in the ``gobootstrap/templates``
package directory. A custom templates directory may replace the bundled
ones, but the set of template names stays fixed.
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path

TEMPLATE_NAMES = [
    "postgresql",
    "core",
]

# Template without a database; skips the database setup steps
CORE_TEMPLATE = "core"

DB_BOOTSTRAP_SCRIPT = "scripts/db-bootstrap"


def bundled_templates_dir() -> Path:
    """Get the directory holding the bundled templates."""
    return Path(str(importlib.resources.files("gobootstrap").joinpath("templates")))


def list_templates() -> list[str]:
    """List all available templates.

    Returns:
        List of template names
    """
    return TEMPLATE_NAMES.copy()


def get_template_dir(name: str, templates_dir: Path | None = None) -> Path:
    """Resolve a template name to its source directory.

    Args:
        name: Template name (e.g., 'postgresql', 'core')
        templates_dir: Directory containing template trees. Defaults to the
            bundled templates.

    Returns:
        Absolute path to the template directory

    Raises:
        ValueError: If template name is invalid
        FileNotFoundError: If the template directory does not exist
    """
    if name not in TEMPLATE_NAMES:
        raise ValueError(
            f"Unknown template: {name}. Available options: {', '.join(TEMPLATE_NAMES)}"
        )

    base = templates_dir if templates_dir is not None else bundled_templates_dir()
    template_dir = (base / name).resolve()
    if not template_dir.is_dir():
        raise FileNotFoundError(f"Cannot find template '{name}' in {base}")
    return template_dir
