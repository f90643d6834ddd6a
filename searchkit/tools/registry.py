"""Tool registry for dynamic tool management."""

import json
from typing import Any

from loguru import logger

from searchkit.errors import bilingual
from searchkit.tools.base import Tool, ToolResponse


class ToolRegistry:
    """
    Registry for tools.

    Allows dynamic registration and execution of tools. ``execute`` never
    raises: unknown tools, invalid arguments and unexpected failures all
    come back as error responses.
    """

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool

    def unregister(self, name: str) -> None:
        """Unregister a tool by name."""
        self._tools.pop(name, None)

    def get(self, name: str) -> Tool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def get_definitions(self) -> list[dict[str, Any]]:
        """Get all tool definitions."""
        return [tool.to_schema() for tool in self._tools.values()]

    async def execute(self, name: str, params: Any) -> ToolResponse:
        """
        Execute a tool by name with given parameters.

        Args:
            name: Tool name.
            params: Tool parameters.

        Returns:
            Tool response; errors are reported with ``is_error`` set.
        """
        tool = self._tools.get(name)
        if not tool:
            return ToolResponse.error(
                bilingual(f"不明なツールです: {name}", f"Unknown tool: {name}")
            )

        if params is None:
            params = {}
        if not isinstance(params, dict):
            return ToolResponse.error(
                bilingual(
                    f"{name} ツールの引数が不正です: オブジェクトを指定してください",
                    f"Invalid arguments for {name} tool: expected an object",
                )
            )

        try:
            errors = tool.validate_params(params)
            if errors:
                detail = "; ".join(errors)
                return ToolResponse.error(
                    bilingual(
                        f"{name} ツールの引数が不正です: {detail}",
                        f"Invalid parameters for tool '{name}': {detail}",
                    )
                )
            safe_args = json.dumps(params, ensure_ascii=False)
            logger.info("Tool call: {}({})", name, safe_args[:200])
            return await tool.execute(**params)
        except Exception as e:
            logger.error("Error executing {}: {}", name, e)
            return ToolResponse.error(
                bilingual(
                    f"{name} の実行に失敗しました: {e}",
                    f"Error executing {name}: {e}",
                )
            )

    @property
    def tool_names(self) -> list[str]:
        """Get list of registered tool names."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
