"""
Script engine backends.
"""

from safetell.engine._base import EngineError, ScriptEngine
from safetell.engine.osascript import OsascriptEngine

__all__ = ["EngineError", "OsascriptEngine", "ScriptEngine"]
