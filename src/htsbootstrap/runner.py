"""Command execution seam between the bootstrap phases and external tools."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from htsbootstrap.errors import ConfigError, ErrorReason, truncate_stderr
from htsbootstrap.observability import StructuredLogger


@dataclass(frozen=True, slots=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        phase: str | None = None,
    ) -> CommandResult:
        """Run *argv* in *cwd* to completion and return its status and output."""

    def require(self, *tools: str) -> None:
        """Raise ``ConfigError`` when any of *tools* is unavailable."""


@dataclass(slots=True)
class SubprocessRunner:
    """Runs commands on the host with ``subprocess.run``.

    ``env`` entries are layered over the current process environment, so a
    phase only names the variables it changes (``CC=musl-gcc``).
    """

    logger: StructuredLogger | None = None
    base_env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        phase: str | None = None,
    ) -> CommandResult:
        command = tuple(argv)
        merged_env = {**self.base_env, **(env or {})}
        self._log(phase, f"$ {' '.join(command)}", extra={"cwd": str(cwd)})
        completed = subprocess.run(
            command,
            cwd=str(cwd),
            env=merged_env,
            capture_output=True,
            text=True,
            check=False,
        )
        result = CommandResult(
            argv=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        message = f"{command[0]} exited with status {result.returncode}"
        extra: dict[str, object] = {"argv": list(command), "returncode": result.returncode}
        if result.ok:
            self._log(phase, message, extra=extra)
            return result

        # make and compilers report on either stream; prefer stderr.
        diagnostics = truncate_stderr(result.stderr) or truncate_stderr(result.stdout)
        if diagnostics:
            message = f"{message}\n{diagnostics}"
            extra["diagnostics"] = diagnostics
        self._log(phase, message, level="error", extra=extra)
        return result

    def require(self, *tools: str) -> None:
        missing = [tool for tool in tools if shutil.which(tool) is None]
        if missing:
            raise ConfigError(
                "Required build tools are not available in PATH.",
                reason=ErrorReason.MISSING_TOOL,
                hint="Install the missing tools before bootstrapping htslib.",
                context={"missing": ", ".join(missing)},
            )

    def _log(
        self,
        phase: str | None,
        message: str,
        *,
        level: str = "info",
        extra: dict[str, object] | None = None,
    ) -> None:
        if self.logger is None:
            return
        self.logger.log(
            operation="run",
            phase=phase,
            message=message,
            level=level,
            extra=extra,
        )
