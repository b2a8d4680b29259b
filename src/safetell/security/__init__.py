"""Security module for safetell."""

from safetell.security.policy import (
    ALLOWED_APPS,
    FORBIDDEN_PATTERNS,
    MAX_SCRIPT_LENGTH,
    ScriptPolicy,
    ScriptValidator,
)

__all__ = [
    "ALLOWED_APPS",
    "FORBIDDEN_PATTERNS",
    "MAX_SCRIPT_LENGTH",
    "ScriptPolicy",
    "ScriptValidator",
]
