"""
Parameter schemas for Reminders operations.
"""

from typing import Literal, Optional

from pydantic import Field, model_validator

from safetell.schemas._base import IsoDateTime, OperationParams

ReminderPriority = Literal["none", "low", "medium", "high"]


class AddReminderParams(OperationParams):
    title: str = Field(min_length=1, max_length=500, description="The reminder title")
    list: str = Field(default="Reminders", description="List to add the reminder to")
    notes: Optional[str] = Field(default=None, max_length=5000, description="Reminder notes")
    due_date: Optional[IsoDateTime] = Field(default=None, description="Due date, ISO 8601")
    priority: ReminderPriority = Field(default="none", description="Priority level")
    flagged: bool = Field(default=False, description="Whether to flag the reminder")


class ListRemindersParams(OperationParams):
    list: Optional[str] = Field(default=None, description="Only show this list")
    include_completed: bool = Field(default=False, description="Include completed reminders")
    limit: int = Field(default=50, ge=1, le=100, description="Maximum reminders to return")


class CompleteReminderParams(OperationParams):
    """Identify the reminder by ID (most reliable) or by title."""

    reminder_id: Optional[str] = Field(default=None, description="The reminder ID")
    title: Optional[str] = Field(default=None, description="Title to search for")
    list: Optional[str] = Field(default=None, description="Narrow a title search to this list")

    @model_validator(mode="after")
    def _require_identifier(self) -> "CompleteReminderParams":
        if not self.reminder_id and not self.title:
            raise ValueError("Either reminder_id or title must be provided")
        return self


class SearchRemindersParams(OperationParams):
    query: str = Field(min_length=1, description="Text to match in title or notes")
    list: Optional[str] = Field(default=None, description="Only search this list")
    include_completed: bool = Field(default=False, description="Include completed reminders")
    limit: int = Field(default=20, ge=1, le=100, description="Maximum results to return")
