"""
Per-app operation handlers.

Each handler takes a ScriptExecutor and a parameter record, runs the
generated script, and parses the result.
"""

from safetell.apps._common import CreatedItem
from safetell.apps.calendar import CalendarEvent, FreeTimeSlot
from safetell.apps.notes import Note
from safetell.apps.reminders import Reminder

__all__ = ["CalendarEvent", "CreatedItem", "FreeTimeSlot", "Note", "Reminder"]
