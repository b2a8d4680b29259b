"""
Shared plumbing for the per-app handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from safetell._types import ScriptRequest
from safetell.errors import ConstructionError
from safetell.records import parse_record
from safetell.schemas import OperationParams
from safetell.scripts import OPERATION_APPS, generate_script

if TYPE_CHECKING:
    from safetell.executor import ScriptExecutor

logger = logging.getLogger(__name__)

WRITE_TIMEOUT_MS = 10_000
READ_TIMEOUT_MS = 15_000


@dataclass(frozen=True, slots=True)
class CreatedItem:
    """Identity of a newly created reminder, event or note."""

    id: str
    title: str
    container: str  # list, calendar or folder name


async def run_operation(
    executor: ScriptExecutor,
    operation: str,
    params: OperationParams,
    *,
    timeout_ms: int,
) -> str:
    """Generate the script for ``operation``, execute it and return its output."""
    app = OPERATION_APPS[operation]
    try:
        script = generate_script(operation, params)
    except ConstructionError as exc:
        logger.error(
            f"Script construction failed: app={app} operation={operation} "
            f"error={exc.code}: {exc.message}"
        )
        raise
    result = await executor.execute(
        ScriptRequest(
            script=script,
            app=app,
            operation=operation,
            timeout_ms=timeout_ms,
        )
    )
    return result.output


def parse_created(output: str) -> CreatedItem:
    """Parse the ``id, title, container`` row returned by create scripts."""
    fields = parse_record(output, 3)
    if fields is None:
        logger.warning(f"Unexpected create result: {output!r}")
        return CreatedItem(id=output.strip(), title="", container="")
    return CreatedItem(*fields)
