"""
AppleScript templates for the Calendar app.

Event rows have eight fields:
uid, title, start, end, all-day flag, location, notes, calendar name.

Busy rows (free-time search) have two fields: start and end offsets in
seconds from the start of the working day.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from safetell.schemas.calendar import (
    CreateEventParams,
    DeleteEventParams,
    FindFreeTimeParams,
    ListEventsParams,
    UpdateEventParams,
)
from safetell.scripts._common import (
    RETURN_RECORDS,
    applescript_date,
    format_applescript_date,
    indent,
    join_fields,
    parse_iso_date,
    quote,
    tell,
    to_local,
)

APP = "Calendar"
EVENT_FIELDS = 8
BUSY_FIELDS = 2

_EVENT_ROW = join_fields(
    "(item j of theIds)",
    "(item j of theTitles)",
    "eventStart",
    "eventEnd",
    "((item j of theAllDay) as text)",
    "eventLocation",
    "eventNotes",
    "calName",
)


def _date_var(name: str, value: datetime) -> str:
    return f'set {name} to date "{format_applescript_date(value)}"'


def _find_event_by_uid(uid: str) -> str:
    """Lines binding ``targetEvent`` to the event with ``uid`` in any calendar."""
    return "\n".join(
        [
            "set targetEvent to missing value",
            "set allCalendars to calendars",
            "repeat with i from 1 to count of allCalendars",
            f"    set matchingEvents to (events of (item i of allCalendars) whose uid is {quote(uid)})",
            "    if (count of matchingEvents) > 0 then",
            "        set targetEvent to item 1 of matchingEvents",
            "        exit repeat",
            "    end if",
            "end repeat",
            f"if targetEvent is missing value then error {quote(f'No event found with ID: {uid}')}",
        ]
    )


def generate_create_event_script(params: CreateEventParams) -> str:
    """Script that creates an event and returns uid, title and calendar name."""
    lines = [
        f"set targetCalendar to calendar {quote(params.calendar)}",
        "set newEvent to make new event at end of events of targetCalendar with properties "
        f"{{summary:{quote(params.title)}, start date:{applescript_date(params.start_date)}, "
        f"end date:{applescript_date(params.end_date)}, allday event:{'true' if params.all_day else 'false'}}}",
    ]
    if params.location:
        lines.append(f"set location of newEvent to {quote(params.location)}")
    if params.notes:
        lines.append(f"set description of newEvent to {quote(params.notes)}")
    for minutes in params.alerts or ():
        lines.append(
            "make new sound alarm at end of sound alarms of newEvent "
            f"with properties {{trigger interval:-{int(minutes)}}}"
        )
    lines.append(
        "return " + join_fields("(uid of newEvent)", "(summary of newEvent)", "(name of targetCalendar)")
    )
    return tell(APP, indent("\n".join(lines), "    "))


def _event_block() -> str:
    """Batch-fetch the columns of ``evtFilter`` and append one row per event."""
    return "\n".join(
        [
            "set c to count of evtFilter",
            "if c > 0 then",
            "    set theIds to uid of evtFilter",
            "    set theTitles to summary of evtFilter",
            "    set theStarts to start date of evtFilter",
            "    set theEnds to end date of evtFilter",
            "    set theAllDay to allday event of evtFilter",
            "    set theLocations to location of evtFilter",
            "    set theNotes to description of evtFilter",
            "    repeat with j from 1 to c",
            "        set s to item j of theStarts",
            "        set e to item j of theEnds",
            '        set eventStart to (short date string of s) & " " & (time string of s)',
            '        set eventEnd to (short date string of e) & " " & (time string of e)',
            "        set eventLocation to item j of theLocations",
            '        if eventLocation is missing value then set eventLocation to ""',
            "        set eventNotes to item j of theNotes",
            '        if eventNotes is missing value then set eventNotes to ""',
            f"        set end of outputList to {_EVENT_ROW}",
            "    end repeat",
            "end if",
        ]
    )


def generate_list_events_script(params: ListEventsParams) -> str:
    """Script that returns event rows starting within the requested range."""
    header = [
        _date_var("startDate", parse_iso_date(params.start_date)),
        _date_var("endDate", parse_iso_date(params.end_date)),
        "set outputList to {}",
    ]
    where = "whose start date >= startDate and start date <= endDate"
    if params.calendar:
        scan = [
            f"set cal to calendar {quote(params.calendar)}",
            "set calName to name of cal",
            f"set evtFilter to (events of cal {where})",
            _event_block(),
        ]
    else:
        scan = [
            "set allCalendars to calendars",
            "set calCount to count of allCalendars",
            "repeat with i from 1 to calCount",
            "    set cal to item i of allCalendars",
            "    set calName to name of cal",
            f"    set evtFilter to (events of cal {where})",
            indent(_event_block(), "    "),
            "end repeat",
        ]
    body = "\n".join(header + scan + [RETURN_RECORDS])
    return tell(APP, indent(body, "    "))


def working_day(params: FindFreeTimeParams) -> tuple[datetime, datetime]:
    """Return the local start and end of the working day being searched."""
    day = to_local(parse_iso_date(params.date))
    start = datetime(day.year, day.month, day.day, params.working_hours_start)
    end = datetime(day.year, day.month, day.day, params.working_hours_end)
    return start, end


def generate_find_free_time_script(params: FindFreeTimeParams) -> str:
    """
    Script that returns the busy intervals overlapping the working day.

    Offsets are seconds relative to the working-day start so the result does
    not depend on the Mac's date format; gaps are computed by the caller.
    All-day events are ignored.
    """
    work_start, work_end = working_day(params)
    where = "whose start date < workEnd and end date > workStart and allday event is false"
    block = "\n".join(
        [
            f"set busy to (events of cal {where})",
            "set c to count of busy",
            "if c > 0 then",
            "    set theStarts to start date of busy",
            "    set theEnds to end date of busy",
            "    repeat with j from 1 to c",
            "        set end of outputList to "
            + join_fields(
                "(((item j of theStarts) - workStart) as text)",
                "(((item j of theEnds) - workStart) as text)",
            ),
            "    end repeat",
            "end if",
        ]
    )
    header = [
        _date_var("workStart", work_start),
        _date_var("workEnd", work_end),
        "set outputList to {}",
    ]
    if params.calendar:
        scan = [f"set cal to calendar {quote(params.calendar)}", block]
    else:
        scan = [
            "set allCalendars to calendars",
            "repeat with i from 1 to count of allCalendars",
            "    set cal to item i of allCalendars",
            indent(block, "    "),
            "end repeat",
        ]
    body = "\n".join(header + scan + [RETURN_RECORDS])
    return tell(APP, indent(body, "    "))


def generate_update_event_script(params: UpdateEventParams) -> str:
    """Script that updates the given fields of an event found by uid."""
    lines = [_find_event_by_uid(params.event_id)]
    if params.title:
        lines.append(f"set summary of targetEvent to {quote(params.title)}")
    if params.start_date:
        lines.append(f"set start date of targetEvent to {applescript_date(params.start_date)}")
    if params.end_date:
        lines.append(f"set end date of targetEvent to {applescript_date(params.end_date)}")
    # An empty string clears the field
    if params.location is not None:
        lines.append(f"set location of targetEvent to {quote(params.location)}")
    if params.notes is not None:
        lines.append(f"set description of targetEvent to {quote(params.notes)}")
    lines.append('return "Updated: " & summary of targetEvent')
    return tell(APP, indent("\n".join(lines), "    "))


def generate_delete_event_script(params: DeleteEventParams) -> str:
    """Script that deletes one event, found by uid or by title (and day)."""
    if params.event_id:
        lines = [_find_event_by_uid(params.event_id)]
    else:
        where = f"whose summary is {quote(params.title or '')}"
        lines = []
        if params.date:
            day = to_local(parse_iso_date(params.date))
            day_start = datetime(day.year, day.month, day.day)
            lines += [
                _date_var("dayStart", day_start),
                _date_var("dayEnd", day_start + timedelta(days=1)),
            ]
            where += " and start date >= dayStart and start date < dayEnd"
            missing = f"No event found with title: {params.title} on specified date"
        else:
            missing = f"No event found with title: {params.title}"
        lines += [
            "set targetEvent to missing value",
            "set allCalendars to calendars",
            "repeat with i from 1 to count of allCalendars",
            f"    set matchingEvents to (events of (item i of allCalendars) {where})",
            "    if (count of matchingEvents) > 0 then",
            "        set targetEvent to item 1 of matchingEvents",
            "        exit repeat",
            "    end if",
            "end repeat",
            f"if targetEvent is missing value then error {quote(missing)}",
        ]
    lines += [
        "set eventTitle to summary of targetEvent",
        "delete targetEvent",
        'return "Deleted: " & eventTitle',
    ]
    return tell(APP, indent("\n".join(lines), "    "))
