"""
Main entry point: create_toolkit factory function.

This is the primary API for giving an AI agent safe access to Reminders,
Calendar and Notes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from safetell.config import Settings, configure_logging
from safetell.discovery import generate_tool_prompt
from safetell.executor import ScriptExecutor
from safetell.security.policy import ScriptPolicy, ScriptValidator
from safetell.toolkit import AutomationToolkit

if TYPE_CHECKING:
    from safetell.engine import ScriptEngine


async def create_toolkit(
    settings: Settings | None = None,
    engine: ScriptEngine | None = None,
    policy: ScriptPolicy | None = None,
    *,
    discover: bool = True,
    extra_instructions: str | None = None,
) -> AutomationToolkit:
    """
    Create an automation toolkit for AI agents.

    Args:
        settings: Runtime settings. Defaults to Settings.from_env(). Its log
            level is applied to the ``safetell`` logger.
        engine: Script engine. Defaults to osascript.
        policy: Security policy. Defaults to ScriptPolicy.standard().
        discover: If True, probe the apps and build a tool prompt.
        extra_instructions: Additional context for the LLM prompt.

    Returns:
        AutomationToolkit dispatching the twelve named operations.

    Example:
        >>> toolkit = await create_toolkit()
        >>> created = await toolkit.call("reminders_add", {"title": "Buy milk"})
        >>> print(created.id)

    Example restricted to Reminders:
        >>> toolkit = await create_toolkit(
        ...     policy=ScriptPolicy(allowed_apps=frozenset({"Reminders"}))
        ... )
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    executor = ScriptExecutor(
        engine=engine,
        validator=ScriptValidator(policy or ScriptPolicy.standard()),
        default_timeout_ms=settings.default_timeout_ms,
        enable_validation=settings.enable_validation,
    )

    tool_prompt = extra_instructions or ""
    if discover:
        tool_prompt = await generate_tool_prompt(
            executor, extra_instructions=extra_instructions
        )

    return AutomationToolkit(executor=executor, tool_prompt=tool_prompt)
