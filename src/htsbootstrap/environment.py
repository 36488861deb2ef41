"""Resolution of raw environment-style inputs into a ``BuildEnvironment``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from htsbootstrap.errors import ConfigError, ErrorReason
from htsbootstrap.models import DEFAULT_LIBRARY_VERSION, BuildEnvironment, LibraryMode

OUT_DIR_VAR = "OUT_DIR"
VERSION_VAR = "HTSLIB_VERSION"
TARGET_VAR = "TARGET"
MODE_VAR = "HTSLIB"

_MODES: dict[str, LibraryMode] = {
    "static": "static",
    "shared": "shared",
    "": "shared",
}


@dataclass(frozen=True, slots=True)
class RawInputs:
    output_dir: str = ""
    library_version: str = ""
    target_triple: str = ""
    library_mode: str = ""


def raw_inputs_from_environ(environ: Mapping[str, str] | None = None) -> RawInputs:
    """Read the bootstrap variables from *environ* (default ``os.environ``)."""
    source = os.environ if environ is None else environ
    return RawInputs(
        output_dir=source.get(OUT_DIR_VAR, ""),
        library_version=source.get(VERSION_VAR, ""),
        target_triple=source.get(TARGET_VAR, ""),
        library_mode=source.get(MODE_VAR, ""),
    )


def resolve(raw: RawInputs) -> BuildEnvironment:
    """Validate *raw* and apply defaults. Performs no side effects."""
    if not raw.output_dir:
        raise ConfigError(
            "Output directory is not set.",
            reason=ErrorReason.MISSING_OUTPUT_DIR,
            hint=f"Set {OUT_DIR_VAR} or pass --out-dir.",
        )
    output_dir = Path(raw.output_dir).absolute()
    if not output_dir.is_dir():
        raise ConfigError(
            "Output directory does not exist.",
            reason=ErrorReason.MISSING_OUTPUT_DIR,
            hint="Create the directory before bootstrapping.",
            context={"output_dir": str(output_dir)},
        )
    if not os.access(output_dir, os.W_OK | os.X_OK):
        raise ConfigError(
            "Output directory is not writable.",
            reason=ErrorReason.OUTPUT_DIR_NOT_WRITABLE,
            context={"output_dir": str(output_dir)},
        )

    mode = _MODES.get(raw.library_mode)
    if mode is None:
        raise ConfigError(
            f"Unsupported library mode: {raw.library_mode!r}",
            reason=ErrorReason.INVALID_MODE,
            hint="Use 'static' or 'shared', or leave it unset for 'shared'.",
            context={"library_mode": raw.library_mode},
        )

    return BuildEnvironment(
        output_dir=output_dir,
        library_version=raw.library_version or DEFAULT_LIBRARY_VERSION,
        target_triple=raw.target_triple,
        library_mode=mode,
    )
