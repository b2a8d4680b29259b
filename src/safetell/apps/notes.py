"""
Notes operations: create, append, search.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from safetell.apps._common import (
    READ_TIMEOUT_MS,
    WRITE_TIMEOUT_MS,
    CreatedItem,
    parse_created,
    run_operation,
)
from safetell.records import parse_record, parse_records
from safetell.schemas.notes import AppendNoteParams, CreateNoteParams, SearchNotesParams
from safetell.scripts.notes import NOTE_FIELDS

if TYPE_CHECKING:
    from safetell.executor import ScriptExecutor

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]*>")


@dataclass(frozen=True, slots=True)
class Note:
    id: str
    title: str
    folder: str
    excerpt: str  # plain text
    created_date: str | None = None
    modified_date: str | None = None


def strip_html(text: str) -> str:
    """Drop tags and decode entities from Notes' HTML bodies."""
    return html.unescape(_TAG.sub("", text)).replace("\xa0", " ").strip()


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def parse_notes(output: str, excerpt_length: int = 150) -> list[Note]:
    """Parse note rows produced by the search script."""
    return [
        Note(
            id=id_,
            title=title,
            folder=folder,
            excerpt=truncate(strip_html(body), excerpt_length),
            created_date=created or None,
            modified_date=modified or None,
        )
        for id_, title, folder, body, created, modified in parse_records(output, NOTE_FIELDS)
    ]


async def create_note(executor: ScriptExecutor, params: CreateNoteParams) -> CreatedItem:
    logger.info(f"Creating note in folder {params.folder!r}")
    output = await run_operation(executor, "notes_create", params, timeout_ms=WRITE_TIMEOUT_MS)
    return parse_created(output)


async def append_note(executor: ScriptExecutor, params: AppendNoteParams) -> str:
    """Append to a note; returns the title of the note that was changed."""
    logger.info("Appending to note")
    output = await run_operation(executor, "notes_append", params, timeout_ms=WRITE_TIMEOUT_MS)
    fields = parse_record(output, 2)
    return fields[1] if fields else output.strip()


async def search_notes(executor: ScriptExecutor, params: SearchNotesParams) -> list[Note]:
    logger.info(f"Searching notes (limit={params.limit})")
    output = await run_operation(executor, "notes_search", params, timeout_ms=READ_TIMEOUT_MS)
    return parse_notes(output)[: params.limit]
