"""
osascript-backed script engine.

Uses asyncio.subprocess so many scripts can run concurrently without blocking
the event loop.
"""

from __future__ import annotations

import asyncio
import logging

from safetell.engine._base import EngineError, ScriptEngine

logger = logging.getLogger(__name__)


class OsascriptEngine(ScriptEngine):
    """
    Runs AppleScript through ``osascript``, feeding the source on stdin.

    Example:
        >>> engine = OsascriptEngine()
        >>> await engine.run('tell application "Notes" to return name')
        'Notes'
    """

    def __init__(self, executable: str = "osascript") -> None:
        self._executable = executable

    async def run(self, script: str) -> str:
        try:
            payload = script.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EngineError(
                f"Script cannot be encoded as UTF-8 (position {exc.start})"
            ) from None

        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable,
                "-",
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise EngineError(f"{self._executable} executable not found") from None
        except OSError as exc:
            raise EngineError(f"Could not start {self._executable}: {exc}") from None

        try:
            stdout_bytes, stderr_bytes = await proc.communicate(payload)
        except asyncio.CancelledError:
            # Deadline passed: don't leave the interpreter running.
            if proc.returncode is None:
                logger.debug(f"Killing {self._executable} (pid {proc.pid})")
                proc.kill()
                await proc.wait()
            raise

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        if proc.returncode != 0:
            raise EngineError(stderr.strip() or stdout.strip(), proc.returncode)

        # osascript terminates its result with exactly one newline
        if stdout.endswith("\n"):
            stdout = stdout[:-1]
        return stdout
