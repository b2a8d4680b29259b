"""
AppleScript templates for the Reminders app.

Reminder rows have eight fields:
id, title, completed, priority, flagged, notes, due date, list name.
"""

from __future__ import annotations

from safetell.schemas.reminders import (
    AddReminderParams,
    CompleteReminderParams,
    ListRemindersParams,
    SearchRemindersParams,
)
from safetell.scripts._common import (
    RETURN_RECORDS,
    applescript_date,
    indent,
    join_fields,
    priority_to_code,
    quote,
    tell,
)

APP = "Reminders"
REMINDER_FIELDS = 8

_ROW = join_fields(
    "(item j of theIds)",
    "reminderName",
    "((item j of theCompleted) as text)",
    "((item j of thePriorities) as text)",
    "((item j of theFlagged) as text)",
    "reminderNotes",
    "reminderDueDate",
    "listName",
)


def generate_add_reminder_script(params: AddReminderParams) -> str:
    """Script that creates a reminder and returns id, title and list name."""
    lines = [
        f"set targetList to list {quote(params.list)}",
        "set newReminder to make new reminder at end of targetList",
        f"set name of newReminder to {quote(params.title)}",
        f"set priority of newReminder to {priority_to_code(params.priority)}",
        f"set flagged of newReminder to {'true' if params.flagged else 'false'}",
    ]
    if params.notes:
        lines.append(f"set body of newReminder to {quote(params.notes)}")
    if params.due_date:
        lines.append(f"set due date of newReminder to {applescript_date(params.due_date)}")
    lines.append(
        "return " + join_fields("(id of newReminder)", "(name of newReminder)", "(name of targetList)")
    )
    return tell(APP, indent("\n".join(lines), "    "))


def _fetch_block(include_completed: bool, query: str | None = None) -> str:
    """
    Batch-fetch every column for the reminders of ``lst`` and append rows.

    Columns come back as parallel lists in one Apple event each; the loop
    indexes into them instead of walking live reminder objects, which hangs
    when osascript runs as a child process.
    """
    filtered = "reminders of lst" if include_completed else "(reminders of lst whose completed is false)"
    row = [
        "set reminderName to item j of theNames",
        "set reminderNotes to item j of theBodies",
        'if reminderNotes is missing value then set reminderNotes to ""',
        'set reminderDueDate to ""',
        "set d to item j of theDueDates",
        "if d is not missing value then",
        '    set reminderDueDate to (short date string of d) & " " & (time string of d)',
        "end if",
        f"set end of outputList to {_ROW}",
    ]
    if query is not None:
        needle = quote(query)
        row = [
            "set reminderName to item j of theNames",
            "set reminderNotes to item j of theBodies",
            'if reminderNotes is missing value then set reminderNotes to ""',
            f"if (reminderName contains {needle} or reminderNotes contains {needle}) then",
            indent("\n".join(row[3:]), "    "),
            "end if",
        ]
    lines = [
        f"set c to count of {filtered}",
        "if c > 0 then",
        f"    set theIds to id of {filtered}",
        f"    set theNames to name of {filtered}",
        f"    set theCompleted to completed of {filtered}",
        f"    set thePriorities to priority of {filtered}",
        f"    set theFlagged to flagged of {filtered}",
        f"    set theBodies to body of {filtered}",
        f"    set theDueDates to due date of {filtered}",
        "    set listName to name of lst",
        "    repeat with j from 1 to c",
        indent("\n".join(row), "        "),
        "    end repeat",
        "end if",
    ]
    return "\n".join(lines)


def _collect(list_name: str | None, block: str) -> str:
    if list_name:
        body = "\n".join(
            [
                f"set lst to list {quote(list_name)}",
                "set outputList to {}",
                block,
                RETURN_RECORDS,
            ]
        )
    else:
        body = "\n".join(
            [
                "set outputList to {}",
                "set allLists to lists",
                "set listCount to count of allLists",
                "repeat with i from 1 to listCount",
                "    set lst to item i of allLists",
                indent(block, "    "),
                "end repeat",
                RETURN_RECORDS,
            ]
        )
    return tell(APP, indent(body, "    "))


def generate_list_reminders_script(params: ListRemindersParams) -> str:
    """Script that returns reminder rows for one list or for every list."""
    return _collect(params.list, _fetch_block(params.include_completed))


def generate_search_reminders_script(params: SearchRemindersParams) -> str:
    """Script that returns reminder rows whose title or notes contain the query."""
    return _collect(params.list, _fetch_block(params.include_completed, params.query))


def generate_complete_reminder_script(params: CompleteReminderParams) -> str:
    """Script that marks one reminder completed, found by ID or by title."""
    if params.reminder_id:
        body = "\n".join(
            [
                f"set targetReminder to reminder id {quote(params.reminder_id)}",
                "set completed of targetReminder to true",
                'return "Completed: " & name of targetReminder',
            ]
        )
        return tell(APP, indent(body, "    "))

    title = quote(params.title or "")
    missing = quote(f"No incomplete reminder found with title: {params.title}")
    if params.list:
        body = "\n".join(
            [
                f"set targetList to list {quote(params.list)}",
                f"set matchingReminders to (reminders of targetList whose name is {title} and completed is false)",
                "if (count of matchingReminders) > 0 then",
                "    set targetReminder to item 1 of matchingReminders",
                "    set completed of targetReminder to true",
                '    return "Completed: " & name of targetReminder & " in " & name of targetList',
                "end if",
                f"error {missing}",
            ]
        )
    else:
        body = "\n".join(
            [
                "set allLists to lists",
                "set listCount to count of allLists",
                "repeat with i from 1 to listCount",
                "    set lst to item i of allLists",
                f"    set matchingReminders to (reminders of lst whose name is {title} and completed is false)",
                "    if (count of matchingReminders) > 0 then",
                "        set targetReminder to item 1 of matchingReminders",
                "        set completed of targetReminder to true",
                '        return "Completed: " & name of targetReminder & " in " & name of lst',
                "    end if",
                "end repeat",
                f"error {missing}",
            ]
        )
    return tell(APP, indent(body, "    "))
