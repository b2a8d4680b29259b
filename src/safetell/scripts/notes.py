"""
AppleScript templates for the Notes app.

Note rows have six fields: id, title, folder, excerpt, created, modified.
"""

from __future__ import annotations

from safetell.schemas.notes import AppendNoteParams, CreateNoteParams, SearchNotesParams
from safetell.scripts._common import (
    RETURN_RECORDS,
    escape_applescript_string,
    indent,
    join_fields,
    quote,
    tell,
)

APP = "Notes"
NOTE_FIELDS = 6
EXCERPT_LENGTH = 200

_APPEND = "\n".join(
    [
        "set currentBody to body of targetNote",
        "set body of targetNote to currentBody & newContent",
        "return " + join_fields("(id of targetNote)", "(name of targetNote)"),
    ]
)


def generate_create_note_script(params: CreateNoteParams) -> str:
    """Script that creates a note and returns id, title and folder name."""
    # Notes takes the first line of the body as the title
    html = (
        f"<h1>{escape_applescript_string(params.title)}</h1>"
        f"<div>{escape_applescript_string(params.body)}</div>"
    )
    body = "\n".join(
        [
            f"set targetFolder to folder {quote(params.folder)}",
            f'set newNote to make new note at targetFolder with properties {{body:"{html}"}}',
            "return " + join_fields("(id of newNote)", "(name of newNote)", "(name of targetFolder)"),
        ]
    )
    return tell(APP, indent(body, "    "))


def generate_append_note_script(params: AppendNoteParams) -> str:
    """Script that appends HTML content to a note found by ID or by title."""
    content = f'set newContent to "<div>{escape_applescript_string(params.content)}</div>"'

    if params.note_id:
        body = "\n".join([content, f"set targetNote to note id {quote(params.note_id)}", _APPEND])
        return tell(APP, indent(body, "    "))

    title = quote(params.title or "")
    if params.folder:
        missing = quote(f"No note found with title: {params.title} in folder {params.folder}")
        body = "\n".join(
            [
                content,
                f"set targetFolder to folder {quote(params.folder)}",
                f"set matchingNotes to (notes of targetFolder whose name is {title})",
                "if (count of matchingNotes) = 0 then",
                f"    error {missing}",
                "end if",
                "set targetNote to item 1 of matchingNotes",
                _APPEND,
            ]
        )
    else:
        missing = quote(f"No note found with title: {params.title}")
        body = "\n".join(
            [
                content,
                "set targetNote to missing value",
                "set allFolders to folders",
                "repeat with i from 1 to count of allFolders",
                f"    set matchingNotes to (notes of (item i of allFolders) whose name is {title})",
                "    if (count of matchingNotes) > 0 then",
                "        set targetNote to item 1 of matchingNotes",
                "        exit repeat",
                "    end if",
                "end repeat",
                f"if targetNote is missing value then error {missing}",
                _APPEND,
            ]
        )
    return tell(APP, indent(body, "    "))


def _search_block(needle: str) -> str:
    """Batch-fetch the notes of ``fld`` and append rows matching ``needle``."""
    row = join_fields(
        "(item j of theIds)",
        "noteName",
        "folderName",
        "excerpt",
        "((item j of theCreated) as text)",
        "((item j of theModified) as text)",
    )
    return "\n".join(
        [
            "set c to count of notes of fld",
            "if c > 0 then",
            "    set theIds to id of notes of fld",
            "    set theNames to name of notes of fld",
            "    set theBodies to body of notes of fld",
            "    set theCreated to creation date of notes of fld",
            "    set theModified to modification date of notes of fld",
            "    set folderName to name of fld",
            "    repeat with j from 1 to c",
            "        set noteName to item j of theNames",
            "        set noteBody to item j of theBodies",
            f"        if (noteName contains {needle} or noteBody contains {needle}) then",
            "            set excerpt to noteBody",
            f"            if (count of excerpt) > {EXCERPT_LENGTH} then set excerpt to text 1 thru {EXCERPT_LENGTH} of excerpt",
            f"            set end of outputList to {row}",
            "        end if",
            "    end repeat",
            "end if",
        ]
    )


def generate_search_notes_script(params: SearchNotesParams) -> str:
    """Script that returns note rows whose title or body contain the query."""
    block = _search_block(quote(params.query))
    if params.folder:
        scan = [f"set fld to folder {quote(params.folder)}", block]
    else:
        scan = [
            "set allFolders to folders",
            "repeat with i from 1 to count of allFolders",
            "    set fld to item i of allFolders",
            indent(block, "    "),
            "end repeat",
        ]
    body = "\n".join(["set outputList to {}"] + scan + [RETURN_RECORDS])
    return tell(APP, indent(body, "    "))
