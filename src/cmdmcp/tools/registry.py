"""
Tool registry for cmdmcp.

The registry maps tool names to tool instances. It is built once from the
loaded configuration by the composition root (the CLI) and handed to the
server; there is no global registry.

Usage:
    from cmdmcp.tools.registry import ToolRegistry

    registry = ToolRegistry.from_config(config, CommandExecutor())
    tool = registry.get("echo-test")
"""

from typing import Iterator

from cmdmcp.errors import ToolNotFoundError
from cmdmcp.schema import Config
from cmdmcp.tools.base import Tool
from cmdmcp.tools.command import CommandTool
from cmdmcp.tools.executor import CommandExecutor


class ToolRegistry:
    """
    Registry for looking up tools by name.

    Attributes:
        _tools: Internal mapping of tool names to tool instances, in registration order
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, Tool] = {}

    @classmethod
    def from_config(cls, config: Config, executor: CommandExecutor) -> "ToolRegistry":
        """
        Build a registry with one CommandTool per configured command.

        Args:
            config: The loaded configuration
            executor: Executor shared by every command tool

        Returns:
            A populated registry
        """
        registry = cls()
        for entry in config.commands:
            registry.register(CommandTool(entry, executor))
        return registry

    def register(self, tool: Tool) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: The tool instance to register

        Raises:
            ValueError: If tool is None, has an empty name, or the name is taken
        """
        if tool is None:
            msg = "Cannot register None as a tool"
            raise ValueError(msg)

        name = tool.name
        if not name:
            msg = "Tool must have a non-empty name"
            raise ValueError(msg)

        if name in self._tools:
            msg = f"Tool already registered: {name}"
            raise ValueError(msg)

        self._tools[name] = tool

    def get(self, name: str) -> Tool:
        """
        Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(tool=name)
        return tool

    def list_tools(self) -> list[str]:
        """
        List all registered tool names.

        Returns:
            Tool names in registration (configuration) order
        """
        return list(self._tools.keys())

    def __len__(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        """Iterate over all registered tools."""
        return iter(self._tools.values())

    def __contains__(self, name: str) -> bool:
        """Check if a tool is registered using 'in' operator."""
        return name in self._tools

    def __repr__(self) -> str:
        """String representation of the registry."""
        tools = ", ".join(self.list_tools())
        return f"<ToolRegistry: [{tools}]>"
