"""Typed bootstrap error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

STDERR_LIMIT = 2000


class ErrorCode(StrEnum):
    """Stable error identifiers, one per failing phase family."""

    CONFIG = "E_CONFIG"
    FETCH = "E_FETCH"
    BUILD = "E_BUILD"


class ErrorReason(StrEnum):
    """Finer-grained cause attached to every bootstrap error."""

    MISSING_OUTPUT_DIR = "MissingOutputDir"
    OUTPUT_DIR_NOT_WRITABLE = "OutputDirNotWritable"
    INVALID_MODE = "InvalidMode"
    MISSING_TOOL = "MissingTool"
    NETWORK_UNAVAILABLE = "NetworkUnavailable"
    VERSION_NOT_FOUND = "VersionNotFound"
    ARCHIVE_INVALID = "ArchiveInvalid"
    DEPENDENCY_COMPILE_FAILED = "DependencyCompileFailed"
    PATCH_FAILED = "PatchFailed"
    NOT_MUSL_TARGET = "NotMuslTarget"


class BootstrapError(Exception):
    """Base error class that carries code, reason, optional hint, and context.

    ``exit_code`` is the process status the CLI reports for this error. Errors
    raised on behalf of a failing external tool carry that tool's status.
    """

    code: str
    reason: ErrorReason
    hint: str | None
    context: Mapping[str, str]
    exit_code: int

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        reason: ErrorReason,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.reason = reason
        self.hint = hint
        self.context = dict(context or {})
        self.exit_code = exit_code

    def __str__(self) -> str:
        parts = [f"{super().__str__()} ({self.reason.value})"]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "reason": self.reason.value,
            "message": str(self),
            "context": dict(self.context),
            "exit_code": self.exit_code,
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ConfigError(BootstrapError):
    """Bad or missing inputs, reported before any side effect."""

    def __init__(
        self,
        message: str,
        *,
        reason: ErrorReason,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        exit_code: int = 2,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.CONFIG,
            reason=reason,
            hint=hint,
            context=context,
            exit_code=exit_code,
        )


class FetchError(BootstrapError):
    def __init__(
        self,
        message: str,
        *,
        reason: ErrorReason,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.FETCH,
            reason=reason,
            hint=hint,
            context=context,
            exit_code=exit_code,
        )


class BuildError(BootstrapError):
    def __init__(
        self,
        message: str,
        *,
        reason: ErrorReason,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.BUILD,
            reason=reason,
            hint=hint,
            context=context,
            exit_code=exit_code,
        )


def truncate_stderr(stderr: str | None) -> str:
    return stderr[-STDERR_LIMIT:].strip() if stderr else ""


__all__ = [
    "BootstrapError",
    "BuildError",
    "ConfigError",
    "ErrorCode",
    "ErrorReason",
    "FetchError",
    "truncate_stderr",
]
