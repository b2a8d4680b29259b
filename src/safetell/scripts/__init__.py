"""
AppleScript template generator.

Maps an operation identifier and its parameter record to one complete script.
Generators never execute anything and know nothing about security policy.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from safetell.errors import ConstructionError
from safetell.schemas import OperationParams
from safetell.scripts import calendar, notes, reminders
from safetell.scripts._common import (
    code_to_priority,
    escape_applescript_string,
    format_applescript_date,
    parse_iso_date,
    priority_to_code,
)


class Template(NamedTuple):
    app: str
    params: type[OperationParams]
    build: Callable[..., str]


TEMPLATES: dict[str, Template] = {
    "reminders_add": Template(
        reminders.APP, reminders.AddReminderParams, reminders.generate_add_reminder_script
    ),
    "reminders_list": Template(
        reminders.APP, reminders.ListRemindersParams, reminders.generate_list_reminders_script
    ),
    "reminders_complete": Template(
        reminders.APP, reminders.CompleteReminderParams, reminders.generate_complete_reminder_script
    ),
    "reminders_search": Template(
        reminders.APP, reminders.SearchRemindersParams, reminders.generate_search_reminders_script
    ),
    "calendar_create": Template(
        calendar.APP, calendar.CreateEventParams, calendar.generate_create_event_script
    ),
    "calendar_list": Template(
        calendar.APP, calendar.ListEventsParams, calendar.generate_list_events_script
    ),
    "calendar_find_free_time": Template(
        calendar.APP, calendar.FindFreeTimeParams, calendar.generate_find_free_time_script
    ),
    "calendar_update": Template(
        calendar.APP, calendar.UpdateEventParams, calendar.generate_update_event_script
    ),
    "calendar_delete": Template(
        calendar.APP, calendar.DeleteEventParams, calendar.generate_delete_event_script
    ),
    "notes_create": Template(notes.APP, notes.CreateNoteParams, notes.generate_create_note_script),
    "notes_append": Template(notes.APP, notes.AppendNoteParams, notes.generate_append_note_script),
    "notes_search": Template(notes.APP, notes.SearchNotesParams, notes.generate_search_notes_script),
}

# The app each operation's script opens; callers declare the same value to the validator.
OPERATION_APPS: dict[str, str] = {name: template.app for name, template in TEMPLATES.items()}


def generate_script(operation: str, params: OperationParams) -> str:
    """
    Build the script for ``operation``.

    Args:
        operation: Operation identifier, e.g. ``"reminders_add"``.
        params: The operation's parameter record.

    Returns:
        The complete AppleScript source.

    Raises:
        ConstructionError: If the operation is unknown, the record has the
            wrong type, or a date argument cannot be parsed.
    """
    template = TEMPLATES.get(operation)
    if template is None:
        raise ConstructionError(f"Unknown operation: {operation}", {"operation": operation})
    if not isinstance(params, template.params):
        raise ConstructionError(
            f"{operation} expects {template.params.__name__}, got {type(params).__name__}",
            {"operation": operation},
        )
    return template.build(params)


__all__ = [
    "OPERATION_APPS",
    "TEMPLATES",
    "Template",
    "code_to_priority",
    "escape_applescript_string",
    "format_applescript_date",
    "generate_script",
    "parse_iso_date",
    "priority_to_code",
]
