"""
Base model and shared field helpers for operation parameters.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


def _check_iso_datetime(value: str) -> str:
    try:
        datetime.fromisoformat(value)
    except ValueError:
        raise ValueError("must be an ISO 8601 date-time (e.g. 2026-02-18T14:00:00Z)") from None
    return value


IsoDateTime = Annotated[str, AfterValidator(_check_iso_datetime)]


def as_datetime(value: str) -> datetime:
    """Parse an already-validated ISO string; naive values are taken as local time."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.astimezone()
    return parsed


class OperationParams(BaseModel):
    """Immutable parameter record for one operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")
