"""
Reminders operations: add, list, complete, search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from safetell.apps._common import (
    READ_TIMEOUT_MS,
    WRITE_TIMEOUT_MS,
    CreatedItem,
    parse_created,
    run_operation,
)
from safetell.records import parse_records
from safetell.schemas.reminders import (
    AddReminderParams,
    CompleteReminderParams,
    ListRemindersParams,
    SearchRemindersParams,
)
from safetell.scripts import code_to_priority
from safetell.scripts.reminders import REMINDER_FIELDS

if TYPE_CHECKING:
    from safetell.executor import ScriptExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Reminder:
    id: str
    title: str
    list: str
    completed: bool
    priority: str
    flagged: bool
    notes: str | None = None
    due_date: str | None = None


def parse_reminders(output: str) -> list[Reminder]:
    """Parse reminder rows produced by the list and search scripts."""
    reminders: list[Reminder] = []
    for id_, title, completed, priority, flagged, notes, due, list_name in parse_records(
        output, REMINDER_FIELDS
    ):
        try:
            code = int(priority or 0)
        except ValueError:
            code = 0
        reminders.append(
            Reminder(
                id=id_,
                title=title,
                list=list_name,
                completed=completed == "true",
                priority=code_to_priority(code),
                flagged=flagged == "true",
                notes=notes or None,
                due_date=due or None,
            )
        )
    return reminders


async def add_reminder(executor: ScriptExecutor, params: AddReminderParams) -> CreatedItem:
    logger.info(f"Adding reminder to list {params.list!r}")
    output = await run_operation(executor, "reminders_add", params, timeout_ms=WRITE_TIMEOUT_MS)
    return parse_created(output)


async def list_reminders(executor: ScriptExecutor, params: ListRemindersParams) -> list[Reminder]:
    logger.info(f"Listing reminders (list={params.list!r}, limit={params.limit})")
    output = await run_operation(executor, "reminders_list", params, timeout_ms=READ_TIMEOUT_MS)
    return parse_reminders(output)[: params.limit]


async def complete_reminder(executor: ScriptExecutor, params: CompleteReminderParams) -> str:
    """Mark a reminder completed; returns the confirmation line from Reminders."""
    logger.info("Completing reminder")
    output = await run_operation(executor, "reminders_complete", params, timeout_ms=WRITE_TIMEOUT_MS)
    return output.strip()


async def search_reminders(
    executor: ScriptExecutor, params: SearchRemindersParams
) -> list[Reminder]:
    logger.info(f"Searching reminders (limit={params.limit})")
    output = await run_operation(executor, "reminders_search", params, timeout_ms=READ_TIMEOUT_MS)
    return parse_reminders(output)[: params.limit]
