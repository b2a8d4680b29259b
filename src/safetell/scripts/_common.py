"""
Shared helpers for AppleScript template generation.
"""

from __future__ import annotations

from datetime import datetime

from safetell.errors import ConstructionError
from safetell.records import AS_FIELD_DELIMITER, AS_RECORD_DELIMITER

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

PRIORITY_CODES: dict[str, int] = {"none": 0, "low": 1, "medium": 5, "high": 9}


def escape_applescript_string(text: str) -> str:
    """
    Escape text for use inside an AppleScript double-quoted string literal.

    Backslashes go first so the escapes added for quotes and newlines are not
    themselves doubled.
    """
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def quote(text: str) -> str:
    """Escape ``text`` and wrap it in double quotes."""
    return f'"{escape_applescript_string(text)}"'


def parse_iso_date(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp.

    Raises:
        ConstructionError: If ``value`` is not a valid timestamp.
    """
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ConstructionError(f"Invalid date string: {value!r}", {"value": value}) from None


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values are kept."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def format_applescript_date(value: datetime) -> str:
    """
    Format a datetime the way AppleScript's ``date "..."`` coercion reads it.

    Example: ``Wednesday, February 18, 2026 at 2:30:00 PM``. Aware values are
    converted to local time first.
    """
    value = to_local(value)
    hour = value.hour % 12 or 12
    meridian = "AM" if value.hour < 12 else "PM"
    return (
        f"{_DAY_NAMES[value.weekday()]}, {_MONTH_NAMES[value.month - 1]} {value.day}, "
        f"{value.year} at {hour}:{value.minute:02d}:{value.second:02d} {meridian}"
    )


def applescript_date(value: str) -> str:
    """Render an ISO 8601 string as an AppleScript date literal."""
    return f'date "{format_applescript_date(parse_iso_date(value))}"'


def priority_to_code(priority: str) -> int:
    """Map a priority name to the Reminders priority number."""
    return PRIORITY_CODES.get(priority, 0)


def code_to_priority(code: int) -> str:
    """Map a Reminders priority number back to a name."""
    if code >= 9:
        return "high"
    if code >= 5:
        return "medium"
    if code >= 1:
        return "low"
    return "none"


def indent(block: str, prefix: str) -> str:
    """Prefix every non-empty line of ``block``."""
    return "\n".join(prefix + line if line else line for line in block.split("\n"))


def join_fields(*expressions: str) -> str:
    """Concatenate AppleScript expressions with the field delimiter between them."""
    return f" & {AS_FIELD_DELIMITER} & ".join(expressions)


def tell(app: str, body: str) -> str:
    """Wrap ``body`` (already indented) in a tell block for ``app``."""
    return f'tell application "{app}"\n{body}\nend tell'


RETURN_RECORDS = f"""set AppleScript's text item delimiters to {AS_RECORD_DELIMITER}
set outputText to outputList as text
set AppleScript's text item delimiters to ""
return outputText"""
