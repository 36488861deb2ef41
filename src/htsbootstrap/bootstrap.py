"""Sequencing of the fetch, cross-build, patch, and build phases."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from htsbootstrap.build import invoke_build, select_target
from htsbootstrap.cross import build_cross_deps
from htsbootstrap.fetch.git import fetch_library
from htsbootstrap.models import (
    DEPENDENCIES,
    HTSLIB_REPO,
    MAKE_JOBS,
    MUSL_COMPILER,
    BuildEnvironment,
    BuildResult,
    BuiltArtifact,
    DependencySpec,
)
from htsbootstrap.observability import StructuredLogger
from htsbootstrap.patch import patch_include_paths
from htsbootstrap.runner import CommandRunner

REQUIRED_TOOLS = ("git", "make")


def required_tools(env: BuildEnvironment) -> tuple[str, ...]:
    if env.is_musl:
        return (*REQUIRED_TOOLS, MUSL_COMPILER)
    return REQUIRED_TOOLS


def bootstrap(
    env: BuildEnvironment,
    *,
    runner: CommandRunner,
    logger: StructuredLogger | None = None,
    repo: str = HTSLIB_REPO,
    dependencies: Sequence[DependencySpec] = DEPENDENCIES,
    jobs: int = MAKE_JOBS,
) -> BuildResult:
    """Fetch, optionally cross-build dependencies, and build htslib.

    Errors from any phase propagate unchanged and abort the remaining phases.
    On the musl branch the static musl build is the last step, whatever
    ``env.library_mode`` asks for.
    """
    log = logger if logger is not None else StructuredLogger()
    runner.require(*required_tools(env))

    log.log(
        operation="bootstrap",
        phase="fetch",
        message=f"staging htslib {env.library_version} in {env.staged_path}",
    )
    staged = fetch_library(env, runner=runner, repo=repo)

    artifacts: tuple[BuiltArtifact, ...] = ()
    if env.is_musl:
        log.log(
            operation="bootstrap",
            phase="cross-deps",
            message=f"musl target {env.target_triple!r}: building static dependencies",
        )
        artifacts = build_cross_deps(
            env.target_triple,
            staged,
            runner=runner,
            dependencies=dependencies,
            logger=log,
        )
        patch_include_paths(staged, artifacts)
        log.log(
            operation="bootstrap",
            phase="patch",
            message=f"added {len(artifacts)} include paths to CPPFLAGS",
        )

    target = select_target(env.target_triple, env.library_mode)
    log.log(operation="bootstrap", phase="build", target=target, message=f"invoking {target}")
    result = invoke_build(
        staged,
        env.target_triple,
        env.library_mode,
        runner=runner,
        jobs=jobs,
    )
    log.log(
        operation="bootstrap",
        phase="build",
        target=result.target_invoked,
        level="info" if result.ok else "error",
        message=f"{result.target_invoked} finished with status {result.exit_code}",
    )
    return replace(result, artifacts=artifacts)
