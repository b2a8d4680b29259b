"""Framework integrations for safetell."""

from safetell.integrations.langchain import create_langchain_tools

__all__ = ["create_langchain_tools"]
