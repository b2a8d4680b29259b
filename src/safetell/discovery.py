"""
App discovery and LLM prompt generation.

Probes the productivity apps to find which ones can be scripted on this
machine, and builds a prompt that only advertises the reachable ones.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Iterable

from safetell.security.policy import PRODUCTIVITY_APPS
from safetell.toolkit import OPERATIONS

if TYPE_CHECKING:
    from safetell.executor import ScriptExecutor

# Usage hints for the LLM, per app
APP_HINTS: dict[str, str] = {
    "Reminders": "Dates are ISO 8601. Prefer reminder IDs over titles when completing.",
    "Calendar": "Event IDs come from calendar_list or calendar_create. "
    "Use calendar_find_free_time before proposing meeting times.",
    "Notes": "Note bodies may contain HTML. Search returns plain-text excerpts.",
}


def operations_by_app() -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for op in OPERATIONS.values():
        grouped.setdefault(op.app, []).append(op.name)
    return grouped


async def discover_apps(
    executor: ScriptExecutor, apps: Iterable[str] = PRODUCTIVITY_APPS
) -> set[str]:
    """
    Discover which apps accept scripting.

    Each app is probed with a trivial script; apps that are missing or
    lack Automation consent are left out.

    Args:
        executor: The executor to probe with.
        apps: App names to probe. Defaults to the productivity apps.

    Returns:
        Set of reachable app names.
    """
    names = sorted(apps)
    results = await asyncio.gather(*(executor.test_app_access(name) for name in names))
    return {name for name, ok in zip(names, results) if ok}


async def generate_tool_prompt(
    executor: ScriptExecutor,
    *,
    extra_instructions: str | None = None,
) -> str:
    """
    Generate an LLM-oriented prompt describing the reachable apps.

    The prompt includes:
    - Reachable apps and their operations
    - Usage hints per app
    - Apps that could not be reached, so the LLM can tell the user
    - Any extra instructions provided
    """
    available = await discover_apps(executor)
    grouped = operations_by_app()

    lines: list[str] = []
    for app in sorted(available):
        lines.append(f"{app}: {', '.join(grouped.get(app, []))}")
        if app in APP_HINTS:
            lines.append(f"  {APP_HINTS[app]}")

    missing = sorted(PRODUCTIVITY_APPS - available)
    if missing:
        lines.append(
            f"Unavailable: {', '.join(missing)} "
            "(grant access in System Settings > Privacy & Security > Automation)"
        )

    if extra_instructions:
        lines.append("")
        lines.append(extra_instructions)

    return "\n".join(lines)
