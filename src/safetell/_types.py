"""
Core type definitions for safetell.

Uses dataclasses for lightweight, immutable request and result values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    """Which validation layer rejected a script."""

    EMPTY_SCRIPT = "EMPTY_SCRIPT"
    SCRIPT_TOO_LONG = "SCRIPT_TOO_LONG"
    APP_NOT_ALLOWED = "APP_NOT_ALLOWED"
    APP_MISMATCH = "APP_MISMATCH"
    FORBIDDEN_PATTERN = "FORBIDDEN_PATTERN"
    MISSING_TELL = "MISSING_TELL"


@dataclass(frozen=True, slots=True)
class ScriptRequest:
    """One script execution request."""

    script: str
    app: str
    operation: str
    timeout_ms: int | None = None  # executor default when None
    bypass_validation: bool = False

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")


@dataclass(frozen=True, slots=True)
class Accepted:
    """The script passed every validation layer."""

    accepted: bool = True


@dataclass(frozen=True, slots=True)
class Rejected:
    """The script failed a validation layer."""

    reason: RejectionReason
    message: str
    fragment: str | None = None
    accepted: bool = False


ValidationOutcome = Accepted | Rejected


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Immutable result from one script execution."""

    output: str
    duration_ms: int
    success: bool = True
