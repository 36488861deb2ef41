"""Core typed dataclasses and pinned constants for the htslib bootstrap."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

LibraryMode = Literal["static", "shared"]
BuildTarget = Literal["lib-static", "lib-shared", "lib-static-musl"]

DEFAULT_LIBRARY_VERSION = "1.9"
HTSLIB_REPO = "https://github.com/samtools/htslib.git"
STAGED_DIRNAME = "htslib"

# htslib's make targets read this header as-is; it is never regenerated.
CONFIG_H = "#define HAVE_LIBBZ2 1\n#define HAVE_DRAND48 1\n"

NATIVE_COMPILER = "gcc"
MUSL_COMPILER = "musl-gcc"
MUSL_TOKEN = "musl"
MAKE_JOBS = 8

# The musl target has no goal of its own in htslib's Makefile: it is the
# static library goal run against the musl-patched Makefile.
BUILD_TARGET_GOALS: dict[BuildTarget, str] = {
    "lib-static": "lib-static",
    "lib-shared": "lib-shared",
    "lib-static-musl": "lib-static",
}


def is_musl_target(target_triple: str) -> bool:
    return MUSL_TOKEN in target_triple


@dataclass(frozen=True, slots=True)
class BuildEnvironment:
    output_dir: Path
    library_version: str = DEFAULT_LIBRARY_VERSION
    target_triple: str = ""
    library_mode: LibraryMode = "shared"

    @property
    def staged_path(self) -> Path:
        return self.output_dir / STAGED_DIRNAME

    @property
    def is_musl(self) -> bool:
        return is_musl_target(self.target_triple)


@dataclass(frozen=True, slots=True)
class DependencySpec:
    """A pinned third-party archive built for the musl branch."""

    name: str
    archive_url: str
    version: str
    static_library: str
    configure: bool = False

    @property
    def source_dirname(self) -> str:
        return f"{self.name}-{self.version}"


@dataclass(frozen=True, slots=True)
class BuiltArtifact:
    static_library_path: Path
    include_directory: Path


@dataclass(frozen=True, slots=True)
class BuildResult:
    exit_code: int
    target_invoked: BuildTarget
    artifacts: tuple[BuiltArtifact, ...] = ()

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


ZLIB = DependencySpec(
    name="zlib",
    archive_url="https://zlib.net/fossils/zlib-1.2.11.tar.gz",
    version="1.2.11",
    static_library="libz.a",
    configure=True,
)
BZIP2 = DependencySpec(
    name="bzip2",
    archive_url="https://sourceware.org/pub/bzip2/bzip2-1.0.6.tar.gz",
    version="1.0.6",
    static_library="libbz2.a",
)

# Build order matters: the include patch references both, zlib first.
DEPENDENCIES: tuple[DependencySpec, ...] = (ZLIB, BZIP2)


__all__ = [
    "BUILD_TARGET_GOALS",
    "BZIP2",
    "CONFIG_H",
    "DEFAULT_LIBRARY_VERSION",
    "DEPENDENCIES",
    "HTSLIB_REPO",
    "MAKE_JOBS",
    "MUSL_COMPILER",
    "MUSL_TOKEN",
    "NATIVE_COMPILER",
    "STAGED_DIRNAME",
    "ZLIB",
    "BuildEnvironment",
    "BuildResult",
    "BuildTarget",
    "BuiltArtifact",
    "DependencySpec",
    "LibraryMode",
    "is_musl_target",
]
