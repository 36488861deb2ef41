"""Static zlib/bzip2 builds for musl cross-compilation targets."""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

from htsbootstrap.errors import BuildError, ErrorReason, truncate_stderr
from htsbootstrap.fetch.http import fetch_archive
from htsbootstrap.models import (
    DEPENDENCIES,
    MUSL_COMPILER,
    BuiltArtifact,
    DependencySpec,
    is_musl_target,
)
from htsbootstrap.observability import StructuredLogger
from htsbootstrap.patch import substitute_compiler
from htsbootstrap.runner import CommandResult, CommandRunner

PHASE = "cross-deps"


def build_cross_deps(
    target_triple: str,
    staged_path: Path,
    *,
    runner: CommandRunner,
    dependencies: Sequence[DependencySpec] = DEPENDENCIES,
    logger: StructuredLogger | None = None,
) -> tuple[BuiltArtifact, ...]:
    """Build each dependency with ``musl-gcc`` in order.

    htslib's own Makefile is switched to the musl compiler first. Each static
    library is copied into *staged_path* next to htslib's sources.
    """
    if not is_musl_target(target_triple):
        raise BuildError(
            "Dependency cross-builds only apply to musl targets.",
            reason=ErrorReason.NOT_MUSL_TARGET,
            context={"target": target_triple},
        )

    substitute_compiler(staged_path / "Makefile")

    artifacts: list[BuiltArtifact] = []
    for spec in dependencies:
        if logger is not None:
            logger.log(
                operation="build_cross_deps",
                phase=PHASE,
                target=spec.source_dirname,
                message=f"building {spec.source_dirname} with {MUSL_COMPILER}",
            )
        artifacts.append(_build_dependency(spec, staged_path, runner=runner))
    return tuple(artifacts)


def _build_dependency(
    spec: DependencySpec,
    staged_path: Path,
    *,
    runner: CommandRunner,
) -> BuiltArtifact:
    source_dir = fetch_archive(spec, staged_path)

    if spec.configure:
        configured = runner.run(
            ["./configure"],
            cwd=source_dir,
            env={"CC": MUSL_COMPILER},
            phase=PHASE,
        )
        _check(configured, spec)
    else:
        # No configure step; compiler flags live in the Makefile itself.
        substitute_compiler(source_dir / "Makefile")

    _check(runner.run(["make"], cwd=source_dir, phase=PHASE), spec)

    library = source_dir / spec.static_library
    if not library.is_file():
        raise BuildError(
            "Dependency build did not produce its static library.",
            reason=ErrorReason.DEPENDENCY_COMPILE_FAILED,
            context={"dependency": spec.source_dirname, "expected": str(library)},
        )
    installed = staged_path / spec.static_library
    shutil.copy2(library, installed)
    return BuiltArtifact(static_library_path=installed, include_directory=source_dir)


def _check(result: CommandResult, spec: DependencySpec) -> None:
    if result.ok:
        return
    raise BuildError(
        f"Building {spec.source_dirname} failed.",
        reason=ErrorReason.DEPENDENCY_COMPILE_FAILED,
        hint=f"Ensure `{MUSL_COMPILER}` is installed and can build static archives.",
        context={
            "dependency": spec.source_dirname,
            "argv": " ".join(result.argv),
            "returncode": str(result.returncode),
            "stderr": truncate_stderr(result.stderr),
        },
        exit_code=result.returncode,
    )
