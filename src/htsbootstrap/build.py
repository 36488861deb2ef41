"""Final htslib build target selection and invocation."""

from __future__ import annotations

from pathlib import Path

from htsbootstrap.models import (
    BUILD_TARGET_GOALS,
    MAKE_JOBS,
    BuildResult,
    BuildTarget,
    LibraryMode,
    is_musl_target,
)
from htsbootstrap.runner import CommandRunner

PHASE = "build"


def select_target(target_triple: str, library_mode: LibraryMode) -> BuildTarget:
    """Pick the build target; a musl triple wins over the requested mode."""
    if is_musl_target(target_triple):
        return "lib-static-musl"
    if library_mode == "static":
        return "lib-static"
    return "lib-shared"


def make_command(target: BuildTarget, *, jobs: int = MAKE_JOBS) -> list[str]:
    return ["make", f"-j{jobs}", BUILD_TARGET_GOALS[target]]


def invoke_build(
    staged_path: Path,
    target_triple: str,
    library_mode: LibraryMode,
    *,
    runner: CommandRunner,
    jobs: int = MAKE_JOBS,
) -> BuildResult:
    target = select_target(target_triple, library_mode)
    result = runner.run(make_command(target, jobs=jobs), cwd=staged_path, phase=PHASE)
    return BuildResult(exit_code=result.returncode, target_invoked=target)
