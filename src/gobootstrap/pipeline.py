"""End-to-end project generation.

Resolve GOPATH, split the destination, copy the template, replace
placeholders, then run the setup steps. Each stage finishes before the
next one starts.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from gobootstrap.config import GoBootstrapConfig
from gobootstrap.gopath import gopaths, resolve_gopath
from gobootstrap.orchestrator import SetupContext, StepResult, run_setup
from gobootstrap.scaffolder import build_replacers, copy_template, replace_placeholders
from gobootstrap.template_manager import get_template_dir
from gobootstrap.workspace import (
    WorkspaceIdentity,
    WorkspaceRequest,
    extract_identity,
    workspace_path,
)

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """What a successful run produced."""

    workspace: Path
    identity: WorkspaceIdentity
    files_replaced: list[Path] = field(default_factory=list)
    steps: list[StepResult] = field(default_factory=list)


def bootstrap_project(
    request: WorkspaceRequest,
    config: GoBootstrapConfig,
    environ: Mapping[str, str] | None = None,
) -> BootstrapResult:
    """Generate a new Go project as described by request.

    Raises:
        GoPathError: If GOPATH is empty or the override is not listed in it.
        IdentityError: If the destination has fewer than three parts.
        ValueError: If the template name is unknown.
        FileNotFoundError: If the template directory is missing.
        ScaffoldError: If copying or placeholder replacement fails.
        StepFailedError: If a fail-fast setup step fails.
    """
    gopath = resolve_gopath(gopaths(environ), request.gopath_override)
    identity = extract_identity(request.destination)
    template_dir = get_template_dir(request.template, config.get_templates_path())
    destination = workspace_path(gopath, request.destination)

    copy_template(template_dir, destination, force=request.force)

    logger.info(
        "Replacing placeholder variables on %s/%s...",
        identity.repo_user,
        identity.project_name,
    )
    replaced = replace_placeholders(destination, build_replacers(identity, config))

    context = SetupContext(
        template=request.template,
        is_git_host=identity.is_git_host(config.git_host_prefix),
        is_hg_host=identity.is_hg_host(config.hg_host_prefix),
    )
    steps = run_setup(destination, context)

    return BootstrapResult(
        workspace=destination,
        identity=identity,
        files_replaced=replaced,
        steps=steps,
    )
