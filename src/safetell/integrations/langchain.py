"""LangChain integration for safetell."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from safetell.toolkit import AutomationToolkit, Operation

HAS_LANGCHAIN = False
_StructuredTool: Any = None

try:
    import langchain_core.tools

    _StructuredTool = langchain_core.tools.StructuredTool
    HAS_LANGCHAIN = True
except ImportError:
    pass


def _make_tool(toolkit: AutomationToolkit, op: Operation) -> Any:
    async def run(**kwargs: Any) -> str:
        return await toolkit.call_json(op.name, kwargs)

    description = op.description
    if toolkit.tool_prompt:
        description = f"{description}\n{toolkit.tool_prompt}"

    return _StructuredTool.from_function(
        coroutine=run,
        name=op.name,
        description=description,
        args_schema=op.params,
    )


def create_langchain_tools(
    toolkit: AutomationToolkit, operations: list[str] | None = None
) -> dict[str, Any]:
    """
    Create LangChain tools from an AutomationToolkit.

    Args:
        toolkit: The toolkit to wrap.
        operations: Operation names to expose. Defaults to all of them.

    Returns:
        Dictionary of LangChain StructuredTool instances, keyed by operation.

    Raises:
        ImportError: If langchain-core is not installed.
        KeyError: If an operation name is unknown.

    Example:
        >>> toolkit = await create_toolkit()
        >>> tools = create_langchain_tools(toolkit)
        >>> agent = create_react_agent(llm, list(tools.values()))
    """
    if not HAS_LANGCHAIN:
        raise ImportError(
            "LangChain integration requires langchain-core. "
            "Install with: pip install safetell[langchain]"
        )

    names = operations if operations is not None else list(toolkit.operations)
    return {name: _make_tool(toolkit, toolkit.operations[name]) for name in names}
