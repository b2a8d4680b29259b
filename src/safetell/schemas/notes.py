"""
Parameter schemas for Notes operations.
"""

from typing import Optional

from pydantic import Field, model_validator

from safetell.schemas._base import OperationParams


class CreateNoteParams(OperationParams):
    title: str = Field(min_length=1, max_length=500, description="Note title")
    body: str = Field(max_length=100_000, description="Note body; may contain HTML")
    folder: str = Field(default="Notes", description="Folder to create the note in")


class AppendNoteParams(OperationParams):
    """Identify the note by ID (most reliable) or by title."""

    note_id: Optional[str] = None
    title: Optional[str] = None
    folder: Optional[str] = Field(default=None, description="Narrow a title search to this folder")
    content: str = Field(min_length=1, max_length=100_000, description="Content to append")

    @model_validator(mode="after")
    def _require_identifier(self) -> "AppendNoteParams":
        if not self.note_id and not self.title:
            raise ValueError("Either note_id or title must be provided")
        return self


class SearchNotesParams(OperationParams):
    query: str = Field(min_length=1, description="Text to match in title or body")
    folder: Optional[str] = Field(default=None, description="Only search this folder")
    limit: int = Field(default=20, ge=1, le=100)
