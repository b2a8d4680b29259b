"""Tests for ScriptExecutor."""

from __future__ import annotations

import logging

import pytest

from conftest import FakeEngine
from safetell import ScriptExecutor, ScriptRequest
from safetell.errors import (
    ExecutionFailure,
    ExecutionTimeout,
    PermissionDenied,
    SecurityRejection,
    TargetNotFound,
)

GOOD_SCRIPT = 'tell application "Reminders"\n    return "ok"\nend tell'
SHELL_SCRIPT = 'tell application "Notes"\n    do shell script "ls"\nend tell'


def request(script: str = GOOD_SCRIPT, app: str = "Reminders", **kwargs) -> ScriptRequest:
    return ScriptRequest(script=script, app=app, operation="test", **kwargs)


class TestExecute:
    """Tests for the happy path."""

    async def test_returns_engine_output(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.output = "ok"
        result = await executor.execute(request())
        assert result.output == "ok"
        assert result.success
        assert result.duration_ms >= 0
        assert engine.scripts == [GOOD_SCRIPT]

    async def test_logs_success(
        self, engine: FakeEngine, executor: ScriptExecutor, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="safetell"):
            await executor.execute(request())
        assert "Script executed successfully" in caplog.text
        assert "app=Reminders" in caplog.text

    def test_rejects_non_positive_default_timeout(self, engine: FakeEngine) -> None:
        with pytest.raises(ValueError):
            ScriptExecutor(engine=engine, default_timeout_ms=0)

    def test_request_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError):
            request(timeout_ms=0)


class TestValidationGate:
    """Validation happens before the engine is touched."""

    async def test_rejection_never_reaches_engine(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        """Scenario: do shell script is rejected and nothing is spawned."""
        with pytest.raises(SecurityRejection) as exc_info:
            await executor.execute(request(SHELL_SCRIPT, "Notes"))
        assert exc_info.value.reason == "FORBIDDEN_PATTERN"
        assert engine.scripts == []

    async def test_disallowed_app_never_reaches_engine(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        script = 'tell application "Finder"\n    return 1\nend tell'
        with pytest.raises(SecurityRejection) as exc_info:
            await executor.execute(request(script, "Finder"))
        assert exc_info.value.reason == "APP_NOT_ALLOWED"
        assert engine.scripts == []

    async def test_bypass_skips_validation(
        self,
        engine: FakeEngine,
        executor: ScriptExecutor,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="safetell"):
            await executor.execute(request(SHELL_SCRIPT, "Notes", bypass_validation=True))
        assert engine.scripts == [SHELL_SCRIPT]
        assert "validation skipped" in caplog.text

    async def test_disabled_validation(self, engine: FakeEngine) -> None:
        executor = ScriptExecutor(engine=engine, enable_validation=False)
        await executor.execute(request(SHELL_SCRIPT, "Notes"))
        assert engine.scripts == [SHELL_SCRIPT]


class TestTimeout:
    """Deadline enforcement."""

    async def test_times_out(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        """Scenario: a slow engine run fails with EXECUTION_TIMEOUT."""
        engine.delay = 1.0
        with pytest.raises(ExecutionTimeout) as exc_info:
            await executor.execute(request(timeout_ms=5))
        exc = exc_info.value
        assert exc.code == "EXECUTION_TIMEOUT"
        assert exc.timeout_ms == 5
        assert exc.message == "Script execution timed out after 5ms"
        assert engine.cancelled

    async def test_default_timeout_applies(self, engine: FakeEngine) -> None:
        engine.delay = 1.0
        executor = ScriptExecutor(engine=engine, default_timeout_ms=10)
        with pytest.raises(ExecutionTimeout) as exc_info:
            await executor.execute(request())
        assert exc_info.value.timeout_ms == 10


class TestClassification:
    """Engine errors map to the error taxonomy."""

    @pytest.mark.parametrize(
        "message",
        [
            "Not authorized to send Apple events to Reminders. (-1743)",
            "execution error: Reminders got an error: Access denied",
            "Operation not permitted",
        ],
    )
    async def test_permission_denied(
        self, engine: FakeEngine, executor: ScriptExecutor, message: str
    ) -> None:
        engine.error = message
        with pytest.raises(PermissionDenied) as exc_info:
            await executor.execute(request())
        exc = exc_info.value
        assert exc.code == "PERMISSION_DENIED"
        assert "System Settings > Privacy & Security > Automation" in exc.message
        assert exc.details["original_error"] == message

    @pytest.mark.parametrize(
        "message",
        [
            "Application isn't running. (-600)",
            "Can't get application \"Reminders\".",
        ],
    )
    async def test_app_not_found(
        self, engine: FakeEngine, executor: ScriptExecutor, message: str
    ) -> None:
        engine.error = message
        with pytest.raises(TargetNotFound) as exc_info:
            await executor.execute(request())
        assert exc_info.value.code == "APP_NOT_FOUND"

    async def test_permission_wins_over_not_found(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.error = "Not authorized: application isn't running"
        with pytest.raises(PermissionDenied):
            await executor.execute(request())

    async def test_other_errors_are_failures(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.error = "execution error: Can't get list \"Nope\". (-1728)"
        with pytest.raises(ExecutionFailure) as exc_info:
            await executor.execute(request())
        exc = exc_info.value
        assert exc.code == "SCRIPT_EXECUTION_ERROR"
        assert exc.message == engine.error
        assert exc.duration_ms >= 0

    async def test_execute_with_result_folds_failure(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.error = "boom"
        result = await executor.execute_with_result(request())
        assert not result.success
        assert result.output == "boom"


class TestAccessChecks:
    """Tests for test_app_access and is_app_running."""

    async def test_app_access_success(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.output = "success"
        assert await executor.test_app_access("Notes")
        assert engine.last_script.startswith('tell application "Notes"')
        assert 'return "success"' in engine.last_script

    async def test_app_access_failure(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.error = "Not authorized to send Apple events"
        assert not await executor.test_app_access("Notes")

    async def test_app_access_disallowed_app(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        assert not await executor.test_app_access("Finder")
        assert engine.scripts == []

    async def test_is_app_running(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.output = "true"
        assert await executor.is_app_running("Calendar")
        assert 'tell application "System Events"' in engine.last_script
        assert 'contains "Calendar"' in engine.last_script

    async def test_is_app_not_running(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.output = "false"
        assert not await executor.is_app_running("Calendar")

    async def test_is_app_running_on_error(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.error = "boom"
        assert not await executor.is_app_running("Calendar")

    async def test_checks_survive_unexpected_engine_errors(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.exception = OSError("Exec format error")
        assert not await executor.test_app_access("Notes")
        assert not await executor.is_app_running("Notes")


class TestUnexpectedEngineErrors:
    """Non-EngineError exceptions from the engine become ExecutionFailure."""

    async def test_folded_into_execution_failure(
        self, engine: FakeEngine, executor: ScriptExecutor, caplog: pytest.LogCaptureFixture
    ) -> None:
        engine.exception = RuntimeError("pipe closed")
        with pytest.raises(ExecutionFailure) as exc_info:
            await executor.execute(request())
        assert exc_info.value.code == "SCRIPT_EXECUTION_ERROR"
        assert "RuntimeError: pipe closed" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "Unexpected engine error: app=Reminders operation=test" in caplog.text

    async def test_execute_with_result_reports_failure(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.exception = UnicodeEncodeError("utf-8", "\ud800", 0, 1, "surrogates not allowed")
        result = await executor.execute_with_result(request())
        assert not result.success
        assert result.output.startswith("Unexpected engine error: UnicodeEncodeError")
