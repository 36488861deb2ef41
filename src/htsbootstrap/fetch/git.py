"""Clean-clone staging of the htslib source tree at a version tag."""

from __future__ import annotations

import shutil
from pathlib import Path

from htsbootstrap.errors import ErrorReason, FetchError, truncate_stderr
from htsbootstrap.models import CONFIG_H, HTSLIB_REPO, BuildEnvironment
from htsbootstrap.runner import CommandResult, CommandRunner

PHASE = "fetch"

# `git ls-remote --exit-code` reports "no matching refs" with status 2.
LS_REMOTE_NO_MATCH = 2


def fetch_library(
    env: BuildEnvironment,
    *,
    runner: CommandRunner,
    repo: str = HTSLIB_REPO,
) -> Path:
    """Stage htslib at ``env.library_version`` under ``env.output_dir/htslib``.

    Any previous staging directory is removed first, so repeated calls leave
    the same tree behind. ``config.h`` is written after the clone.
    """
    staged = env.staged_path.absolute()
    if staged.exists():
        shutil.rmtree(staged)

    _ensure_tag_exists(repo=repo, version=env.library_version, cwd=env.output_dir, runner=runner)

    cloned = runner.run(
        ["git", "clone", "-b", env.library_version, repo, str(staged)],
        cwd=env.output_dir,
        phase=PHASE,
    )
    if not cloned.ok:
        raise _fetch_failure(
            "Cloning htslib failed.",
            reason=ErrorReason.NETWORK_UNAVAILABLE,
            repo=repo,
            version=env.library_version,
            result=cloned,
        )

    write_config_header(staged)
    return staged


def write_config_header(staged: Path) -> Path:
    header = staged / "config.h"
    header.write_text(CONFIG_H, encoding="utf-8")
    return header


def _ensure_tag_exists(*, repo: str, version: str, cwd: Path, runner: CommandRunner) -> None:
    lookup = runner.run(
        ["git", "ls-remote", "--exit-code", "--tags", repo, f"refs/tags/{version}"],
        cwd=cwd,
        phase=PHASE,
    )
    if lookup.ok:
        return
    if lookup.returncode == LS_REMOTE_NO_MATCH:
        raise _fetch_failure(
            "Requested htslib version tag does not exist.",
            reason=ErrorReason.VERSION_NOT_FOUND,
            repo=repo,
            version=version,
            result=lookup,
        )
    raise _fetch_failure(
        "Unable to reach the htslib repository.",
        reason=ErrorReason.NETWORK_UNAVAILABLE,
        repo=repo,
        version=version,
        result=lookup,
    )


def _fetch_failure(
    message: str,
    *,
    reason: ErrorReason,
    repo: str,
    version: str,
    result: CommandResult,
) -> FetchError:
    hint = (
        "Check HTSLIB_VERSION against the repository's tags."
        if reason is ErrorReason.VERSION_NOT_FOUND
        else "Check network access and the repository URL."
    )
    return FetchError(
        message,
        reason=reason,
        hint=hint,
        context={
            "operation": "fetch_library",
            "repo": repo,
            "version": version,
            "argv": " ".join(result.argv),
            "returncode": str(result.returncode),
            "stderr": truncate_stderr(result.stderr),
        },
        exit_code=result.returncode,
    )
