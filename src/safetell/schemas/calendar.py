"""
Parameter schemas for Calendar operations.
"""

from typing import List, Optional

from pydantic import Field, model_validator

from safetell.schemas._base import IsoDateTime, OperationParams, as_datetime


class CreateEventParams(OperationParams):
    title: str = Field(min_length=1, max_length=500, description="Event title")
    start_date: IsoDateTime = Field(description="Start, ISO 8601")
    end_date: IsoDateTime = Field(description="End, ISO 8601; must follow start")
    calendar: str = Field(default="Calendar", description="Calendar to create the event in")
    location: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=5000)
    all_day: bool = Field(default=False, description="All-day event")
    alerts: Optional[List[int]] = Field(
        default=None, description="Alert offsets in minutes before the event (0-10080)"
    )

    @model_validator(mode="after")
    def _check_dates(self) -> "CreateEventParams":
        if as_datetime(self.end_date) <= as_datetime(self.start_date):
            raise ValueError("end_date must be after start_date")
        for minutes in self.alerts or ():
            if not 0 <= minutes <= 10080:
                raise ValueError("alerts must be between 0 and 10080 minutes")
        return self


class ListEventsParams(OperationParams):
    start_date: IsoDateTime = Field(description="Range start, ISO 8601")
    end_date: IsoDateTime = Field(description="Range end, ISO 8601")
    calendar: Optional[str] = Field(default=None, description="Only list this calendar")
    limit: int = Field(default=50, ge=1, le=100)

    @model_validator(mode="after")
    def _check_range(self) -> "ListEventsParams":
        if as_datetime(self.end_date) < as_datetime(self.start_date):
            raise ValueError("end_date must be at or after start_date")
        return self


class FindFreeTimeParams(OperationParams):
    date: IsoDateTime = Field(description="Day to search, ISO 8601")
    duration: int = Field(ge=15, le=480, description="Required slot length in minutes")
    working_hours_start: int = Field(default=9, ge=0, le=23)
    working_hours_end: int = Field(default=17, ge=0, le=23)
    calendar: Optional[str] = Field(default=None, description="Only consider this calendar")

    @model_validator(mode="after")
    def _check_hours(self) -> "FindFreeTimeParams":
        if self.working_hours_end <= self.working_hours_start:
            raise ValueError("working_hours_end must be after working_hours_start")
        return self


class UpdateEventParams(OperationParams):
    event_id: str = Field(min_length=1, description="Event UID")
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    start_date: Optional[IsoDateTime] = None
    end_date: Optional[IsoDateTime] = None
    location: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=5000)

    @model_validator(mode="after")
    def _check_dates(self) -> "UpdateEventParams":
        if self.start_date and self.end_date:
            if as_datetime(self.end_date) <= as_datetime(self.start_date):
                raise ValueError("end_date must be after start_date")
        return self


class DeleteEventParams(OperationParams):
    """Identify the event by UID (most reliable) or by title."""

    event_id: Optional[str] = None
    title: Optional[str] = None
    date: Optional[IsoDateTime] = Field(default=None, description="Narrow a title match to this day")

    @model_validator(mode="after")
    def _require_identifier(self) -> "DeleteEventParams":
        if not self.event_id and not self.title:
            raise ValueError("Either event_id or title must be provided")
        return self
