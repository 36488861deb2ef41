"""Test doubles and fixture builders shared across the suite."""

from __future__ import annotations

import io
import tarfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from htsbootstrap.errors import ConfigError, ErrorReason
from htsbootstrap.runner import CommandResult

HTSLIB_MAKEFILE = """\
CC     = gcc
AR     = ar
CPPFLAGS =
CFLAGS = -g -Wall -O2
"""

BZIP2_MAKEFILE = """\
SHELL=/bin/sh
CC=gcc
AR=ar
"""

@dataclass(frozen=True, slots=True)
class Call:
    argv: tuple[str, ...]
    cwd: Path
    env: Mapping[str, str]
    phase: str | None

@dataclass(slots=True)
class FakeRunner:
    """Records commands instead of running them.

    ``git clone`` materializes a minimal htslib tree at its destination.
    ``returncodes`` maps a command prefix (space-joined argv) to a status.
    """

    returncodes: dict[str, int] = field(default_factory=dict)
    missing_tools: set[str] = field(default_factory=set)
    calls: list[Call] = field(default_factory=list)
    required: list[str] = field(default_factory=list)

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        phase: str | None = None,
    ) -> CommandResult:
        command = tuple(argv)
        self.calls.append(Call(argv=command, cwd=cwd, env=dict(env or {}), phase=phase))
        returncode = self._returncode_for(command)
        if returncode == 0 and command[:2] == ("git", "clone"):
            staged = Path(command[-1])
            staged.mkdir(parents=True)
            (staged / "Makefile").write_text(HTSLIB_MAKEFILE, encoding="utf-8")
        stderr = "" if returncode == 0 else f"{command[0]}: failed"
        return CommandResult(argv=command, returncode=returncode, stderr=stderr)

    def require(self, *tools: str) -> None:
        self.required.extend(tools)
        missing = [tool for tool in tools if tool in self.missing_tools]
        if missing:
            raise ConfigError(
                "Required build tools are not available in PATH.",
                reason=ErrorReason.MISSING_TOOL,
                context={"missing": ", ".join(missing)},
            )

    def commands(self) -> list[str]:
        return [" ".join(call.argv) for call in self.calls]

    def _returncode_for(self, command: tuple[str, ...]) -> int:
        joined = " ".join(command)
        for prefix, code in self.returncodes.items():
            if joined.startswith(prefix):
                return code
        return 0

def write_tarball(path: Path, files: Mapping[str, bytes]) -> Path:
    """Write a gzip tarball containing *files* (relative name -> content)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as archive:
        for name, payload in sorted(files.items()):
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            info.mode = 0o755 if name.endswith("configure") else 0o644
            archive.addfile(info, io.BytesIO(payload))
    return path

