"""Parameter schemas for every operation."""

from safetell.schemas._base import OperationParams
from safetell.schemas.calendar import (
    CreateEventParams,
    DeleteEventParams,
    FindFreeTimeParams,
    ListEventsParams,
    UpdateEventParams,
)
from safetell.schemas.notes import AppendNoteParams, CreateNoteParams, SearchNotesParams
from safetell.schemas.reminders import (
    AddReminderParams,
    CompleteReminderParams,
    ListRemindersParams,
    SearchRemindersParams,
)

__all__ = [
    "AddReminderParams",
    "AppendNoteParams",
    "CompleteReminderParams",
    "CreateEventParams",
    "CreateNoteParams",
    "DeleteEventParams",
    "FindFreeTimeParams",
    "ListEventsParams",
    "ListRemindersParams",
    "OperationParams",
    "SearchNotesParams",
    "SearchRemindersParams",
    "UpdateEventParams",
]
