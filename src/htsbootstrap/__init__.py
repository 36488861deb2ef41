"""Environment-aware bootstrap for building htslib, natively or for musl."""

from .bootstrap import bootstrap
from .build import invoke_build, select_target
from .cross import build_cross_deps
from .environment import RawInputs, raw_inputs_from_environ, resolve
from .errors import (
    BootstrapError,
    BuildError,
    ConfigError,
    ErrorCode,
    ErrorReason,
    FetchError,
)
from .fetch import fetch_archive, fetch_library
from .models import (
    DEPENDENCIES,
    BuildEnvironment,
    BuildResult,
    BuiltArtifact,
    DependencySpec,
)
from .patch import patch_include_paths
from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = [
    "DEPENDENCIES",
    "BootstrapError",
    "BuildEnvironment",
    "BuildError",
    "BuildResult",
    "BuiltArtifact",
    "CommandResult",
    "CommandRunner",
    "ConfigError",
    "DependencySpec",
    "ErrorCode",
    "ErrorReason",
    "FetchError",
    "RawInputs",
    "SubprocessRunner",
    "bootstrap",
    "build_cross_deps",
    "fetch_archive",
    "fetch_library",
    "invoke_build",
    "patch_include_paths",
    "raw_inputs_from_environ",
    "resolve",
    "select_target",
]
