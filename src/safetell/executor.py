"""
Execution wrapper: validate, run under a deadline, classify failures.
"""

from __future__ import annotations

import asyncio
import logging
import time

from safetell._types import ExecutionResult, ScriptRequest
from safetell.config import DEFAULT_TIMEOUT_MS
from safetell.engine import EngineError, OsascriptEngine, ScriptEngine
from safetell.errors import (
    ExecutionFailure,
    ExecutionTimeout,
    PermissionDenied,
    SafeTellError,
    TargetNotFound,
    is_app_not_found_error,
    is_permission_error,
)
from safetell.security.policy import ScriptValidator

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_MS = 5_000


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class ScriptExecutor:
    """
    Runs validated AppleScript through a script engine.

    Security features:
    - Every script is checked by ScriptValidator before a process is spawned
    - Deadline enforcement (the engine run is cancelled and its process killed)
    - Engine errors are mapped to a closed set of error kinds

    Example:
        >>> executor = ScriptExecutor()
        >>> result = await executor.execute(
        ...     ScriptRequest(script=script, app="Reminders", operation="list")
        ... )
        >>> print(result.output)
    """

    def __init__(
        self,
        *,
        engine: ScriptEngine | None = None,
        validator: ScriptValidator | None = None,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        enable_validation: bool = True,
    ) -> None:
        """
        Initialize an executor.

        Args:
            engine: Script engine. Defaults to OsascriptEngine.
            validator: Script validator. Defaults to the standard policy.
            default_timeout_ms: Deadline for requests that don't set one.
            enable_validation: If False, every request skips validation.
        """
        if default_timeout_ms <= 0:
            raise ValueError(f"default_timeout_ms must be positive, got {default_timeout_ms}")
        self._engine = engine or OsascriptEngine()
        self._validator = validator or ScriptValidator()
        self._default_timeout_ms = default_timeout_ms
        self._enable_validation = enable_validation

    @property
    def validator(self) -> ScriptValidator:
        return self._validator

    @property
    def default_timeout_ms(self) -> int:
        return self._default_timeout_ms

    async def execute(self, request: ScriptRequest) -> ExecutionResult:
        """
        Validate and run one script.

        Args:
            request: The script, its declared target app, and limits.

        Returns:
            ExecutionResult with the engine's output and elapsed time.

        Raises:
            SecurityRejection: If validation fails. Nothing is spawned.
            ExecutionTimeout: If the deadline passes.
            PermissionDenied: If macOS refuses Automation access.
            TargetNotFound: If the app is missing or not running.
            ExecutionFailure: For any other engine failure.
        """
        start = time.monotonic()
        timeout_ms = request.timeout_ms or self._default_timeout_ms
        context = {"app": request.app, "operation": request.operation}

        logger.info(
            f"Executing AppleScript: app={request.app} operation={request.operation} "
            f"timeout={timeout_ms}ms length={len(request.script)}"
        )

        try:
            if request.bypass_validation or not self._enable_validation:
                logger.warning(f"Security validation skipped for {request.app}")
            else:
                self._validator.validate(request.script, request.app)

            try:
                output = await asyncio.wait_for(
                    self._engine.run(request.script), timeout=timeout_ms / 1000
                )
            except TimeoutError:
                raise ExecutionTimeout(timeout_ms, context) from None
            except EngineError as exc:
                raise self._classify(exc.message, request, _elapsed_ms(start)) from exc
            except Exception as exc:
                logger.exception(
                    f"Unexpected engine error: app={request.app} operation={request.operation}"
                )
                raise ExecutionFailure(
                    f"Unexpected engine error: {type(exc).__name__}: {exc}",
                    _elapsed_ms(start),
                    context,
                ) from exc
        except SafeTellError as exc:
            logger.error(
                f"Script execution failed: app={request.app} operation={request.operation} "
                f"duration={_elapsed_ms(start)}ms error={exc.code}: {exc.message}"
            )
            raise

        duration_ms = _elapsed_ms(start)
        logger.info(
            f"Script executed successfully: app={request.app} operation={request.operation} "
            f"duration={duration_ms}ms output={len(output)} chars"
        )
        return ExecutionResult(output=output, duration_ms=duration_ms)

    def _classify(self, message: str, request: ScriptRequest, duration_ms: int) -> SafeTellError:
        context = {"operation": request.operation, "original_error": message}
        if is_permission_error(message):
            return PermissionDenied(request.app, context)
        if is_app_not_found_error(message):
            return TargetNotFound(request.app, context)
        return ExecutionFailure(
            message,
            duration_ms,
            {"app": request.app, "operation": request.operation},
        )

    async def execute_with_result(self, request: ScriptRequest) -> ExecutionResult:
        """
        Like execute(), but folds any classified failure into the result.

        Returns:
            ExecutionResult with success=False and the error message as output
            when the run fails.
        """
        start = time.monotonic()
        try:
            return await self.execute(request)
        except SafeTellError as exc:
            return ExecutionResult(
                output=exc.message, duration_ms=_elapsed_ms(start), success=False
            )

    async def test_app_access(self, app_name: str) -> bool:
        """
        Check whether an application can be scripted (installed and consented).

        Returns:
            True if a trivial script against the app succeeds, False otherwise.
        """
        script = f'tell application "{app_name}"\n    return "success"\nend tell'
        try:
            await self.execute(
                ScriptRequest(
                    script=script,
                    app=app_name,
                    operation="test_access",
                    timeout_ms=PROBE_TIMEOUT_MS,
                )
            )
        except SafeTellError as exc:
            logger.warning(f"App access test failed for {app_name}: {exc.message}")
            return False
        logger.info(f"App access test successful for {app_name}")
        return True

    async def is_app_running(self, app_name: str) -> bool:
        """
        Check whether an application process is running.

        Queries System Events with validation bypassed, since that target is
        otherwise forbidden.
        """
        escaped = app_name.replace("\\", "\\\\").replace('"', '\\"')
        script = (
            'tell application "System Events"\n'
            f'    return (name of processes) contains "{escaped}"\n'
            "end tell"
        )
        try:
            result = await self.execute(
                ScriptRequest(
                    script=script,
                    app="System Events",
                    operation="check_running",
                    timeout_ms=PROBE_TIMEOUT_MS,
                    bypass_validation=True,
                )
            )
        except SafeTellError:
            return False
        return result.output.strip() == "true"
