"""Run report export helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import cbor2

from htsbootstrap.models import BuildEnvironment, BuildResult, BuildTarget, LibraryMode


@dataclass(frozen=True, slots=True)
class BuildReport:
    library_version: str
    target_triple: str
    library_mode: LibraryMode
    target_invoked: BuildTarget
    exit_code: int
    artifacts: tuple[str, ...] = field(default_factory=tuple)
    schema_version: int = 1

    @classmethod
    def from_run(cls, env: BuildEnvironment, result: BuildResult) -> BuildReport:
        return cls(
            library_version=env.library_version,
            target_triple=env.target_triple,
            library_mode=env.library_mode,
            target_invoked=result.target_invoked,
            exit_code=result.exit_code,
            artifacts=tuple(str(item.static_library_path) for item in result.artifacts),
        )

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def write(self, path: str | Path) -> Path:
        """Write as CBOR for a ``.cbor`` suffix, JSON otherwise."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.suffix == ".cbor":
            self.to_cbor(output_path)
        else:
            self.to_json(output_path)
        return output_path

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "library_version": self.library_version,
            "target_triple": self.target_triple,
            "library_mode": self.library_mode,
            "target_invoked": self.target_invoked,
            "exit_code": self.exit_code,
            "artifacts": list(self.artifacts),
        }
