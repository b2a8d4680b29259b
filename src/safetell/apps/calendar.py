"""
Calendar operations: create, list, find free time, update, delete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from safetell.apps._common import (
    READ_TIMEOUT_MS,
    WRITE_TIMEOUT_MS,
    CreatedItem,
    parse_created,
    run_operation,
)
from safetell.records import parse_records
from safetell.schemas.calendar import (
    CreateEventParams,
    DeleteEventParams,
    FindFreeTimeParams,
    ListEventsParams,
    UpdateEventParams,
)
from safetell.scripts.calendar import BUSY_FIELDS, EVENT_FIELDS, working_day

if TYPE_CHECKING:
    from safetell.executor import ScriptExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    id: str
    title: str
    calendar: str
    start_date: str
    end_date: str
    all_day: bool
    location: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class FreeTimeSlot:
    start: str  # ISO 8601, local time
    end: str
    duration: int  # minutes


def parse_events(output: str) -> list[CalendarEvent]:
    """Parse event rows produced by the list script."""
    return [
        CalendarEvent(
            id=id_,
            title=title,
            calendar=calendar,
            start_date=start,
            end_date=end,
            all_day=all_day == "true",
            location=location or None,
            notes=notes or None,
        )
        for id_, title, start, end, all_day, location, notes, calendar in parse_records(
            output, EVENT_FIELDS
        )
    ]


def parse_busy(output: str) -> list[tuple[int, int]]:
    """Parse busy rows into (start, end) second offsets, sorted by start."""
    busy: list[tuple[int, int]] = []
    for start, end in parse_records(output, BUSY_FIELDS):
        try:
            busy.append((int(float(start)), int(float(end))))
        except ValueError:
            logger.warning(f"Skipping malformed busy interval: {start!r}, {end!r}")
    return sorted(busy)


def free_slots(params: FindFreeTimeParams, busy: list[tuple[int, int]]) -> list[FreeTimeSlot]:
    """
    Compute the gaps of at least ``params.duration`` minutes in the working day.

    Args:
        params: The search parameters.
        busy: (start, end) offsets in seconds from the working-day start.
    """
    work_start, work_end = working_day(params)
    day_length = int((work_end - work_start).total_seconds())
    required = params.duration * 60

    slots: list[FreeTimeSlot] = []
    cursor = 0
    for start, end in [*busy, (day_length, day_length)]:
        start = min(max(start, 0), day_length)
        if start - cursor >= required:
            slots.append(
                FreeTimeSlot(
                    start=(work_start + timedelta(seconds=cursor)).isoformat(),
                    end=(work_start + timedelta(seconds=start)).isoformat(),
                    duration=(start - cursor) // 60,
                )
            )
        cursor = max(cursor, min(end, day_length))
    return slots


async def create_event(executor: ScriptExecutor, params: CreateEventParams) -> CreatedItem:
    logger.info(f"Creating event in calendar {params.calendar!r}")
    output = await run_operation(executor, "calendar_create", params, timeout_ms=WRITE_TIMEOUT_MS)
    return parse_created(output)


async def list_events(executor: ScriptExecutor, params: ListEventsParams) -> list[CalendarEvent]:
    logger.info(f"Listing events {params.start_date} to {params.end_date}")
    output = await run_operation(executor, "calendar_list", params, timeout_ms=READ_TIMEOUT_MS)
    return parse_events(output)[: params.limit]


async def find_free_time(
    executor: ScriptExecutor, params: FindFreeTimeParams
) -> list[FreeTimeSlot]:
    logger.info(f"Finding {params.duration}-minute slots on {params.date}")
    output = await run_operation(
        executor, "calendar_find_free_time", params, timeout_ms=READ_TIMEOUT_MS
    )
    return free_slots(params, parse_busy(output))


async def update_event(executor: ScriptExecutor, params: UpdateEventParams) -> str:
    logger.info("Updating event")
    output = await run_operation(executor, "calendar_update", params, timeout_ms=WRITE_TIMEOUT_MS)
    return output.strip()


async def delete_event(executor: ScriptExecutor, params: DeleteEventParams) -> str:
    logger.info("Deleting event")
    output = await run_operation(executor, "calendar_delete", params, timeout_ms=WRITE_TIMEOUT_MS)
    return output.strip()
