"""Tests for the per-app handlers and result parsers."""

from __future__ import annotations

import pytest

from conftest import FakeEngine
from safetell import ScriptExecutor
from safetell.apps import CreatedItem, FreeTimeSlot
from safetell.apps.calendar import free_slots, list_events, parse_busy, parse_events
from safetell.apps.notes import parse_notes, strip_html, truncate
from safetell.apps.reminders import add_reminder, list_reminders, parse_reminders
from safetell.errors import ConstructionError
from safetell.records import FIELD_DELIMITER, RECORD_DELIMITER
from safetell.schemas import (
    AddReminderParams,
    FindFreeTimeParams,
    ListEventsParams,
    ListRemindersParams,
)


def encode(*rows: tuple[str, ...]) -> str:
    return RECORD_DELIMITER.join(FIELD_DELIMITER.join(row) for row in rows)


class TestReminders:
    """Tests for Reminders parsing and handlers."""

    def test_parse_reminders(self) -> None:
        output = encode(
            ("id-1", "Buy milk", "false", "9", "true", "2%", "18/02/2026 14:30:00", "Groceries"),
            ("id-2", "Call", "true", "0", "false", "", "", "Reminders"),
        )
        first, second = parse_reminders(output)
        assert first.id == "id-1"
        assert first.priority == "high"
        assert first.flagged
        assert not first.completed
        assert first.notes == "2%"
        assert first.list == "Groceries"
        assert second.completed
        assert second.priority == "none"
        assert second.notes is None
        assert second.due_date is None

    def test_parse_reminders_bad_priority(self) -> None:
        output = encode(("id", "t", "false", "missing value", "false", "", "", "L"))
        assert parse_reminders(output)[0].priority == "none"

    async def test_add_reminder(self, engine: FakeEngine, executor: ScriptExecutor) -> None:
        engine.output = encode(("x-apple-reminder://1", "Buy milk", "Reminders"))
        created = await add_reminder(executor, AddReminderParams(title="Buy milk"))
        assert created == CreatedItem("x-apple-reminder://1", "Buy milk", "Reminders")

    async def test_add_reminder_unexpected_output(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.output = "x-apple-reminder://1\n"
        created = await add_reminder(executor, AddReminderParams(title="Buy milk"))
        assert created.id == "x-apple-reminder://1"

    async def test_add_reminder_construction_error_is_logged(
        self, engine: FakeEngine, executor: ScriptExecutor, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A date that slipped past validation fails before anything runs."""
        params = AddReminderParams.model_construct(title="Buy milk", due_date="next tuesday")
        with pytest.raises(ConstructionError):
            await add_reminder(executor, params)
        assert engine.scripts == []
        assert (
            "Script construction failed: app=Reminders operation=reminders_add "
            "error=CONSTRUCTION_ERROR"
        ) in caplog.text

    async def test_list_truncates_to_limit(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.output = encode(
            *[(f"id-{i}", f"r{i}", "false", "0", "false", "", "", "L") for i in range(5)]
        )
        reminders = await list_reminders(executor, ListRemindersParams(limit=2))
        assert [r.id for r in reminders] == ["id-0", "id-1"]


class TestCalendar:
    """Tests for Calendar parsing, free-time computation and handlers."""

    def test_parse_events(self) -> None:
        output = encode(
            ("uid-1", "Standup", "18/02/2026 09:00:00", "18/02/2026 09:15:00", "false",
             "Room 4", "", "Work"),
        )
        (event,) = parse_events(output)
        assert event.id == "uid-1"
        assert event.calendar == "Work"
        assert event.location == "Room 4"
        assert event.notes is None
        assert not event.all_day

    def test_parse_busy_sorts_and_skips_garbage(self) -> None:
        output = encode(("3600", "5400"), ("0", "1800.0"), ("x", "y"))
        assert parse_busy(output) == [(0, 1800), (3600, 5400)]

    def test_free_slots_empty_day(self) -> None:
        params = FindFreeTimeParams(date="2026-02-18T00:00:00", duration=60)
        assert free_slots(params, []) == [
            FreeTimeSlot("2026-02-18T09:00:00", "2026-02-18T17:00:00", 480)
        ]

    def test_free_slots_between_events(self) -> None:
        params = FindFreeTimeParams(date="2026-02-18T00:00:00", duration=30)
        # 9:00-10:00 busy, 10:15-12:00 busy, 12:00-13:00 free, 13:00-17:00 busy
        busy = [(0, 3600), (4500, 10800), (14400, 28800)]
        assert free_slots(params, busy) == [
            FreeTimeSlot("2026-02-18T12:00:00", "2026-02-18T13:00:00", 60)
        ]

    def test_free_slots_overlaps_and_edges(self) -> None:
        params = FindFreeTimeParams(
            date="2026-02-18T00:00:00", duration=15, working_hours_start=9, working_hours_end=12
        )
        # starts before the day, overlapping pair, runs past the end
        busy = [(-1800, 1800), (3600, 7200), (5400, 6000), (9000, 20000)]
        assert free_slots(params, busy) == [
            FreeTimeSlot("2026-02-18T09:30:00", "2026-02-18T10:00:00", 30),
            FreeTimeSlot("2026-02-18T11:00:00", "2026-02-18T11:30:00", 30),
        ]

    def test_free_slots_respects_duration(self) -> None:
        params = FindFreeTimeParams(date="2026-02-18T00:00:00", duration=120)
        busy = [(3600, 7200), (10800, 25200)]
        assert free_slots(params, busy) == []

    async def test_list_events_truncates(
        self, engine: FakeEngine, executor: ScriptExecutor
    ) -> None:
        engine.output = encode(
            *[(f"u{i}", "t", "s", "e", "false", "", "", "C") for i in range(3)]
        )
        params = ListEventsParams(
            start_date="2026-02-18T00:00:00", end_date="2026-02-19T00:00:00", limit=1
        )
        events = await list_events(executor, params)
        assert [e.id for e in events] == ["u0"]


class TestNotes:
    """Tests for Notes parsing helpers."""

    def test_strip_html(self) -> None:
        assert strip_html("<div><b>Hello</b>&nbsp;&amp; bye</div>") == "Hello & bye"

    def test_truncate(self) -> None:
        assert truncate("short", 10) == "short"
        assert truncate("a" * 20, 10) == "a" * 7 + "..."

    def test_parse_notes(self) -> None:
        output = encode(
            ("note-1", "Ideas", "Notes", "<h1>Ideas</h1><div>first</div>", "date A", ""),
        )
        (note,) = parse_notes(output)
        assert note.id == "note-1"
        assert note.excerpt == "Ideasfirst"
        assert note.created_date == "date A"
        assert note.modified_date is None

    def test_parse_notes_excerpt_length(self) -> None:
        output = encode(("n", "t", "f", "x" * 300, "", ""))
        assert len(parse_notes(output, excerpt_length=50)[0].excerpt) == 50
