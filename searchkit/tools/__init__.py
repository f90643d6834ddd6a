"""Tool layer: base class, registry and the web tools."""

from searchkit.tools.base import Tool, ToolResponse
from searchkit.tools.factory import build_tool_registry
from searchkit.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolRegistry", "ToolResponse", "build_tool_registry"]
