"""
PydanticAI integration for safetell.

Provides a helper to create a PydanticAI-compatible tool function.
"""

from __future__ import annotations

from typing import Any, Callable

try:
    from pydantic_ai import RunContext
except ImportError:
    raise ImportError(
        "PydanticAI integration requires 'pydantic-ai'. "
        "Install with `pip install safetell[pydantic-ai]`"
    )

from safetell.toolkit import AutomationToolkit


def create_automation_tool(toolkit: AutomationToolkit) -> Callable:
    """
    Create a PydanticAI tool function dispatching toolkit operations.

    Example:
        >>> from pydantic_ai import Agent
        >>> toolkit = await create_toolkit()
        >>> agent = Agent("openai:gpt-4o", tools=[create_automation_tool(toolkit)])
    """
    names = ", ".join(toolkit.operations)

    async def automation_tool(
        ctx: RunContext,
        operation: str,
        arguments: dict[str, Any],
    ) -> str:
        """
        Run a Reminders, Calendar or Notes operation.
        Returns JSON: the result, or {"error": {...}} on failure.
        """
        return await toolkit.call_json(operation, arguments)

    automation_tool.__doc__ = (
        f"{automation_tool.__doc__}\nOperations: {names}\n{toolkit.tool_prompt}"
    ).rstrip()
    return automation_tool
