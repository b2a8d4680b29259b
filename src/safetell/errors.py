"""
Error taxonomy for safetell.

Every failure surfaced to a caller is a SafeTellError subclass carrying a
machine-readable ``code`` and structured ``details``.
"""

from __future__ import annotations

from typing import Any


class SafeTellError(Exception):
    """
    Base class for all safetell errors.

    Attributes:
        message: Human-readable description.
        code: Machine-readable error code.
        details: Structured context (app, operation, timings, ...).
    """

    code = "SAFETELL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details: dict[str, Any] = dict(details or {})
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for a tool-call response."""
        return {
            "name": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SafeTellError):
    """Raised when settings cannot be read from the environment."""

    code = "CONFIGURATION_ERROR"


class ParameterError(SafeTellError):
    """Raised when tool arguments fail their operation schema."""

    code = "INVALID_PARAMETERS"


class ConstructionError(SafeTellError):
    """
    Raised when a script template cannot be built.

    Upstream parameter validation should make this unreachable; seeing it
    means a contract violation, not a security event.
    """

    code = "CONSTRUCTION_ERROR"


class SecurityRejection(SafeTellError):
    """
    Raised when a script fails validation.

    Attributes:
        reason: The RejectionReason value naming the failed check.
        fragment: The offending text, when one exists (e.g. the matched pattern).
    """

    code = "SECURITY_VIOLATION"

    def __init__(
        self,
        reason: str,
        message: str,
        fragment: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.reason = reason
        self.fragment = fragment
        context = {"reason": reason}
        if fragment is not None:
            context["fragment"] = fragment
        context.update(details or {})
        super().__init__(f"Security violation: {message}", context)


class PermissionDenied(SafeTellError):
    """Raised when macOS refuses Automation access to the target app."""

    code = "PERMISSION_DENIED"

    def __init__(self, app: str, details: dict[str, Any] | None = None) -> None:
        self.app = app
        super().__init__(
            f'Permission denied for "{app}". Please grant access in '
            "System Settings > Privacy & Security > Automation",
            {"app": app, **(details or {})},
        )


class TargetNotFound(SafeTellError):
    """Raised when the target application is missing or not running."""

    code = "APP_NOT_FOUND"

    def __init__(self, app: str, details: dict[str, Any] | None = None) -> None:
        self.app = app
        super().__init__(
            f'Application not found: "{app}". Please ensure it is installed.',
            {"app": app, **(details or {})},
        )


class ExecutionTimeout(SafeTellError):
    """Raised when a script does not finish before its deadline."""

    code = "EXECUTION_TIMEOUT"

    def __init__(self, timeout_ms: int, details: dict[str, Any] | None = None) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Script execution timed out after {timeout_ms}ms",
            {"timeout_ms": timeout_ms, **(details or {})},
        )


class ExecutionFailure(SafeTellError):
    """Raised for any other engine failure."""

    code = "SCRIPT_EXECUTION_ERROR"

    def __init__(
        self,
        message: str,
        duration_ms: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.duration_ms = duration_ms
        super().__init__(message, {"duration_ms": duration_ms, **(details or {})})


PERMISSION_KEYWORDS: tuple[str, ...] = (
    "not allowed",
    "authorization",
    "not authorized",
    "permission denied",
    "access denied",
    "not permitted",
)

NOT_FOUND_KEYWORDS: tuple[str, ...] = (
    "application isn't running",
    "application is not running",
    "can't get application",
    "no application",
)


def is_permission_error(message: str) -> bool:
    """Return True if an engine error message reports missing consent."""
    lowered = message.lower()
    return any(keyword in lowered for keyword in PERMISSION_KEYWORDS)


def is_app_not_found_error(message: str) -> bool:
    """Return True if an engine error message reports an unreachable app."""
    lowered = message.lower()
    return any(keyword in lowered for keyword in NOT_FOUND_KEYWORDS)
