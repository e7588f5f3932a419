"""
MCP server for cmdmcp.

Wraps the MCP SDK's low-level Server so that the tool list comes from a
ToolRegistry built at startup:

    tools/list  -> one entry per configured command, with its input schema
    tools/call  -> CommandTool.call(); failures come back with isError=true

Protocol-side input validation is turned off: the parameter validator is the
single gate, so callers always see its messages.
"""

import logging
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from cmdmcp import __version__
from cmdmcp.errors import ToolCallError, ToolNotFoundError
from cmdmcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "cmdmcp"


class CommandServer:
    """
    Serves the tools of a ToolRegistry over MCP.

    Example:
        server = CommandServer(ToolRegistry.from_config(config, CommandExecutor()))
        asyncio.run(server.run_stdio())
    """

    def __init__(
        self,
        registry: ToolRegistry,
        name: str = SERVER_NAME,
        version: str = __version__,
    ) -> None:
        self.registry = registry
        self.server: Server = Server(name=name, version=version)
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Hook the instance methods up to the MCP request handlers."""

        @self.server.list_tools()  # type: ignore[misc]
        async def _list_tools() -> list[types.Tool]:
            return await self.list_tools()

        @self.server.call_tool(validate_input=False)  # type: ignore[misc]
        async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

    async def list_tools(self) -> list[types.Tool]:
        """Describe every registered tool."""
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in self.registry
        ]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        """
        Run one tool call.

        Returns:
            The reply text of a successful call

        Raises:
            ToolCallError: For an unknown tool, invalid parameters, or a failed
                command. The MCP SDK reports it to the caller with isError=true.
        """
        logger.info("Executing MCP tool: %s", name)
        logger.debug("Tool parameters: %s", arguments)

        try:
            tool = self.registry.get(name)
        except ToolNotFoundError as e:
            logger.error("%s", e.message)
            raise ToolCallError(f"Error executing command: {e.message}") from e

        try:
            response = await tool.call(arguments or {})
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            raise ToolCallError(f"Error executing command: {e}") from e

        if response.is_error:
            raise ToolCallError(response.text)
        return [types.TextContent(type="text", text=response.text)]

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the client disconnects."""
        logger.info("Registered %d tools: %s", len(self.registry), ", ".join(self.registry.list_tools()))
        async with stdio_server() as (read_stream, write_stream):
            logger.info("cmdmcp server is running and listening for requests...")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
