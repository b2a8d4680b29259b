"""
Named operations exposed to tool-calling agents.

An inbound call is ``(operation, arguments)``. Arguments are validated
against the operation's schema before anything is generated or executed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Awaitable, Callable, Mapping

from pydantic import ValidationError

from safetell.apps import calendar, notes, reminders
from safetell.errors import ParameterError, SafeTellError
from safetell.executor import ScriptExecutor
from safetell.schemas import OperationParams
from safetell.scripts import OPERATION_APPS, TEMPLATES

logger = logging.getLogger(__name__)

Handler = Callable[[ScriptExecutor, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
    """One tool-callable operation."""

    name: str
    description: str
    handler: Handler

    @property
    def app(self) -> str:
        return OPERATION_APPS[self.name]

    @property
    def params(self) -> type[OperationParams]:
        return TEMPLATES[self.name].params


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            "reminders_add",
            "Create a reminder in Apple Reminders with title, list, notes, due date, "
            "priority (none/low/medium/high) and flagged status.",
            reminders.add_reminder,
        ),
        Operation(
            "reminders_list",
            "List reminders, optionally filtered by list and completion status.",
            reminders.list_reminders,
        ),
        Operation(
            "reminders_complete",
            "Mark a reminder completed, found by ID (most reliable) or by title.",
            reminders.complete_reminder,
        ),
        Operation(
            "reminders_search",
            "Search reminders by keyword in title or notes.",
            reminders.search_reminders,
        ),
        Operation(
            "calendar_create",
            "Create a Calendar event with title, start/end, location, notes and alerts.",
            calendar.create_event,
        ),
        Operation(
            "calendar_list",
            "List Calendar events starting within a date range.",
            calendar.list_events,
        ),
        Operation(
            "calendar_find_free_time",
            "Find free slots of a given length within the working hours of a day.",
            calendar.find_free_time,
        ),
        Operation(
            "calendar_update",
            "Update the title, times, location or notes of an event by ID.",
            calendar.update_event,
        ),
        Operation(
            "calendar_delete",
            "Delete an event by ID, or by title with an optional day.",
            calendar.delete_event,
        ),
        Operation(
            "notes_create",
            "Create a note in Apple Notes. The body may contain HTML.",
            notes.create_note,
        ),
        Operation(
            "notes_append",
            "Append content to a note found by ID (most reliable) or by title.",
            notes.append_note,
        ),
        Operation(
            "notes_search",
            "Search notes by keyword in title or body; returns excerpts.",
            notes.search_notes,
        ),
    )
}


def to_jsonable(value: Any) -> Any:
    """Convert handler results (dataclasses, lists, strings) to JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    if isinstance(value, str):
        return {"result": value}
    return value


@dataclass
class AutomationToolkit:
    """
    Toolkit returned by create_toolkit(), dispatching named operations.

    Attributes:
        executor: The executor every operation runs through.
        tool_prompt: Generated prompt describing the reachable apps.
    """

    executor: ScriptExecutor
    tool_prompt: str = ""

    @property
    def operations(self) -> dict[str, Operation]:
        return OPERATIONS

    def parse_arguments(
        self, operation: str, arguments: Mapping[str, Any] | None = None
    ) -> OperationParams:
        """
        Validate raw arguments against the operation schema.

        Raises:
            ParameterError: If the operation is unknown or arguments are invalid.
        """
        op = OPERATIONS.get(operation)
        if op is None:
            logger.error(f"Rejected tool call: unknown operation={operation}")
            raise ParameterError(f"Unknown operation: {operation}", {"operation": operation})
        try:
            return op.params.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            logger.error(
                f"Rejected tool call: app={op.app} operation={operation} "
                f"error=INVALID_PARAMETERS: {exc.error_count()} error(s)"
            )
            raise ParameterError(
                f"Invalid arguments for {operation}: {exc.error_count()} error(s)",
                {
                    "operation": operation,
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
                    ],
                },
            ) from None

    async def call(self, operation: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """
        Run one operation.

        Returns:
            The handler's result (dataclass, list of dataclasses, or string).

        Raises:
            SafeTellError: Any classified failure.
        """
        params = self.parse_arguments(operation, arguments)
        logger.debug(f"Tool call received: {operation}")
        return await OPERATIONS[operation].handler(self.executor, params)

    async def call_json(self, operation: str, arguments: Mapping[str, Any] | None = None) -> str:
        """Run one operation and render the result, or the error, as JSON text."""
        try:
            result = await self.call(operation, arguments)
        except SafeTellError as exc:
            return json.dumps({"error": exc.to_dict()})
        return json.dumps(to_jsonable(result))
