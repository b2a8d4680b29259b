"""
safetell: guarded AppleScript automation of Reminders, Calendar and Notes
for AI agents.
"""

from safetell._types import (
    Accepted,
    ExecutionResult,
    Rejected,
    RejectionReason,
    ScriptRequest,
    ValidationOutcome,
)
from safetell.api import create_toolkit
from safetell.config import Settings, configure_logging
from safetell.engine import EngineError, OsascriptEngine, ScriptEngine
from safetell.errors import (
    ConfigurationError,
    ConstructionError,
    ExecutionFailure,
    ExecutionTimeout,
    ParameterError,
    PermissionDenied,
    SafeTellError,
    SecurityRejection,
    TargetNotFound,
)
from safetell.executor import ScriptExecutor
from safetell.scripts import generate_script
from safetell.security import ALLOWED_APPS, FORBIDDEN_PATTERNS, ScriptPolicy, ScriptValidator
from safetell.toolkit import OPERATIONS, AutomationToolkit

__version__ = "0.1.0"

__all__ = [
    # Main API
    "create_toolkit",
    "AutomationToolkit",
    "OPERATIONS",
    "generate_script",
    # Execution
    "ScriptExecutor",
    "ScriptEngine",
    "OsascriptEngine",
    "EngineError",
    "ScriptRequest",
    "ExecutionResult",
    # Security
    "ScriptPolicy",
    "ScriptValidator",
    "ALLOWED_APPS",
    "FORBIDDEN_PATTERNS",
    "RejectionReason",
    "ValidationOutcome",
    "Accepted",
    "Rejected",
    # Config
    "Settings",
    "configure_logging",
    # Errors
    "SafeTellError",
    "SecurityRejection",
    "PermissionDenied",
    "TargetNotFound",
    "ExecutionTimeout",
    "ExecutionFailure",
    "ConstructionError",
    "ParameterError",
    "ConfigurationError",
]
