"""
Abstract base class for script engines.

The executor talks to the host automation engine only through this interface,
so tests can substitute a fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class EngineError(Exception):
    """
    Raised when the engine reports a failed script run.

    Attributes:
        message: The engine's error text (stderr for osascript).
        returncode: Process exit status, when there was a process.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.message = message
        self.returncode = returncode
        super().__init__(message)


class ScriptEngine(ABC):
    """Runs AppleScript source and returns its textual result."""

    @abstractmethod
    async def run(self, script: str) -> str:
        """
        Run a script to completion.

        Implementations must release any child process if the coroutine is
        cancelled; the executor cancels runs that pass their deadline.

        Args:
            script: AppleScript source.

        Returns:
            The script's result text.

        Raises:
            EngineError: If the engine reports a failure.
        """
        ...
