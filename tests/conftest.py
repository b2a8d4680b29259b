"""Pytest configuration and fixtures for safetell tests."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Union

import pytest

from safetell import ScriptExecutor, ScriptPolicy, ScriptValidator
from safetell.engine import EngineError, ScriptEngine
from safetell.toolkit import AutomationToolkit

Responder = Union[str, Callable[[str], str]]


class FakeEngine(ScriptEngine):
    """
    In-memory stand-in for osascript.

    Records every script it is given. Returns ``output`` (or calls it with
    the script) and sleeps for ``delay`` seconds first. Raises EngineError
    when ``error`` is set, or ``exception`` unchanged when that is set.
    """

    def __init__(
        self,
        output: Responder = "",
        *,
        error: str | None = None,
        delay: float = 0.0,
        exception: Exception | None = None,
    ) -> None:
        self.output = output
        self.error = error
        self.exception = exception
        self.delay = delay
        self.scripts: list[str] = []
        self.cancelled = False

    @property
    def last_script(self) -> str:
        return self.scripts[-1]

    async def run(self, script: str) -> str:
        self.scripts.append(script)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise EngineError(self.error, 1)
        if callable(self.output):
            return self.output(script)
        return self.output


@pytest.fixture
def engine() -> FakeEngine:
    """Create a fake engine that returns an empty result."""
    return FakeEngine()


@pytest.fixture
def executor(engine: FakeEngine) -> ScriptExecutor:
    """Create an executor backed by the fake engine."""
    return ScriptExecutor(engine=engine)


@pytest.fixture
def toolkit(executor: ScriptExecutor) -> AutomationToolkit:
    """Create a toolkit backed by the fake engine."""
    return AutomationToolkit(executor=executor)


@pytest.fixture
def standard_policy() -> ScriptPolicy:
    """Create the standard security policy."""
    return ScriptPolicy.standard()


@pytest.fixture
def validator(standard_policy: ScriptPolicy) -> ScriptValidator:
    """Create a validator over the standard policy."""
    return ScriptValidator(standard_policy)


@pytest.fixture(autouse=True)
def reset_safetell_logger():
    """Undo configure_logging() calls made during a test."""
    yield
    logger = logging.getLogger("safetell")
    for handler in list(logger.handlers):
        if getattr(handler, "_safetell", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
