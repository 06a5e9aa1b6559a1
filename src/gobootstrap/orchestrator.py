"""Post-scaffold setup steps for a new Go project.

The steps form one fixed, ordered list. Each step declares when it applies
and whether its failure stops the run (``fail-fast``) or is only logged
(``best-effort``). ``run_setup`` walks the list with a single loop.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from gobootstrap.template_manager import CORE_TEMPLATE, DB_BOOTSTRAP_SCRIPT

logger = logging.getLogger(__name__)

FailurePolicy = Literal["fail-fast", "best-effort"]

FAIL_FAST: FailurePolicy = "fail-fast"
BEST_EFFORT: FailurePolicy = "best-effort"


@dataclass(frozen=True)
class SetupContext:
    """Run parameters the inclusion predicates look at."""

    template: str
    is_git_host: bool
    is_hg_host: bool


@dataclass(frozen=True)
class SetupStep:
    """One external command run inside the new workspace.

    Attributes:
        label: Human-readable name used in logs and errors.
        command: Program and arguments.
        policy: What a failure of this step means for the run.
        when: Inclusion predicate evaluated against the SetupContext.
    """

    label: str
    command: tuple[str, ...]
    policy: FailurePolicy
    when: Callable[[SetupContext], bool]

    def applies_to(self, context: SetupContext) -> bool:
        return self.when(context)


@dataclass
class StepResult:
    """Outcome of an executed step.

    Attributes:
        step: The step that ran.
        returncode: Exit status, or None if the command could not be started.
        output: Combined stdout and stderr.
        error: Start error message, if any.
    """

    step: SetupStep
    returncode: int | None
    output: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepFailedError(Exception):
    """Raised when a fail-fast step exits non-zero or cannot be started."""

    def __init__(self, result: StepResult) -> None:
        self.result = result
        detail = result.output.strip() or result.error or f"exit status {result.returncode}"
        super().__init__(f"{result.step.label} failed:\n{detail}")


def always(context: SetupContext) -> bool:
    return True


def needs_database(context: SetupContext) -> bool:
    return context.template != CORE_TEMPLATE


def on_git_host(context: SetupContext) -> bool:
    return context.is_git_host


def on_hg_host(context: SetupContext) -> bool:
    return context.is_hg_host


def on_vcs_host(context: SetupContext) -> bool:
    return context.is_git_host or context.is_hg_host


def on_unknown_host(context: SetupContext) -> bool:
    return not on_vcs_host(context)


SETUP_STEPS: tuple[SetupStep, ...] = (
    SetupStep(
        "Installing github.com/rnubel/pgmgr",
        ("go", "get", "github.com/rnubel/pgmgr"),
        FAIL_FAST,
        needs_database,
    ),
    SetupStep(
        "Bootstrapping databases",
        ("bash", DB_BOOTSTRAP_SCRIPT),
        BEST_EFFORT,
        needs_database,
    ),
    SetupStep("Fetching dependencies", ("go", "get", "./..."), FAIL_FAST, always),
    SetupStep(
        "Installing github.com/tools/godep",
        ("go", "get", "github.com/tools/godep"),
        FAIL_FAST,
        on_vcs_host,
    ),
    SetupStep("Initializing git repository", ("git", "init"), FAIL_FAST, on_git_host),
    SetupStep("Initializing hg repository", ("hg", "init"), BEST_EFFORT, on_hg_host),
    SetupStep("Saving dependencies", ("godep", "save", "./..."), FAIL_FAST, on_vcs_host),
    SetupStep("Running tests", ("godep", "go", "test", "./..."), BEST_EFFORT, on_vcs_host),
    SetupStep("Running tests", ("go", "test", "./..."), BEST_EFFORT, on_unknown_host),
)


def select_steps(
    context: SetupContext,
    steps: tuple[SetupStep, ...] = SETUP_STEPS,
) -> list[SetupStep]:
    """Filter steps by their predicates, keeping their order."""
    return [step for step in steps if step.applies_to(context)]


def run_step(step: SetupStep, workspace: Path) -> StepResult:
    """Run one step in the workspace and capture its combined output.

    Never raises for command failures; the caller applies the policy.
    """
    logger.info("Running %s...", " ".join(step.command))
    try:
        completed = subprocess.run(
            list(step.command),
            cwd=str(workspace),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        return StepResult(step=step, returncode=None, output="", error=str(e))

    return StepResult(step=step, returncode=completed.returncode, output=completed.stdout or "")


def run_setup(
    workspace: Path,
    context: SetupContext,
    steps: tuple[SetupStep, ...] = SETUP_STEPS,
) -> list[StepResult]:
    """Run every applicable step in order.

    Args:
        workspace: Directory each command runs in.
        context: Template and host classification of the run.
        steps: Ordered step list. Defaults to SETUP_STEPS.

    Returns:
        Results of the executed steps.

    Raises:
        StepFailedError: On the first failing fail-fast step. Later steps
            are not run.
    """
    results: list[StepResult] = []

    for step in select_steps(context, steps):
        result = run_step(step, workspace)
        results.append(result)

        if step.policy == FAIL_FAST:
            if not result.ok:
                raise StepFailedError(result)
        elif result.output:
            logger.info("%s", result.output.rstrip())

    return results
