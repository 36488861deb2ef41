"""In-place substitutions on build-configuration files."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from htsbootstrap.errors import BuildError, ErrorReason
from htsbootstrap.models import MUSL_COMPILER, NATIVE_COMPILER, BuiltArtifact

CPPFLAGS_ANCHOR = "CPPFLAGS ="


def substitute_in_file(path: Path, old: str, new: str) -> int:
    """Replace every occurrence of *old* with *new* in *path*.

    Returns the number of replacements made.
    """
    if not path.is_file():
        raise BuildError(
            "Build configuration file is missing.",
            reason=ErrorReason.PATCH_FAILED,
            context={"operation": "substitute", "path": str(path)},
        )
    text = path.read_text(encoding="utf-8")
    count = text.count(old)
    if count:
        path.write_text(text.replace(old, new), encoding="utf-8")
    return count


def substitute_compiler(
    makefile: Path,
    *,
    native: str = NATIVE_COMPILER,
    replacement: str = MUSL_COMPILER,
) -> int:
    return substitute_in_file(makefile, native, replacement)


def include_flags(staged_path: Path, artifacts: Sequence[BuiltArtifact]) -> str:
    """Render ``-I`` flags, relative to *staged_path* where possible."""
    flags: list[str] = []
    for artifact in artifacts:
        directory = artifact.include_directory
        if directory.is_relative_to(staged_path):
            directory = Path(os.path.relpath(directory, staged_path))
        flags.append(f"-I{directory}")
    return " ".join(flags)


def patch_include_paths(staged_path: Path, artifacts: Sequence[BuiltArtifact]) -> None:
    """Append the artifacts' include directories to htslib's ``CPPFLAGS``."""
    makefile = staged_path / "Makefile"
    flags = include_flags(staged_path, artifacts)
    replaced = substitute_in_file(makefile, CPPFLAGS_ANCHOR, f"{CPPFLAGS_ANCHOR} {flags}")
    if replaced == 0:
        raise BuildError(
            "Makefile has no CPPFLAGS assignment to extend.",
            reason=ErrorReason.PATCH_FAILED,
            hint="The staged htslib version may use a different Makefile layout.",
            context={"operation": "patch_include_paths", "path": str(makefile)},
        )
