"""
Configured commands exposed as tools.

A CommandTool wraps one CommandEntry. It publishes the entry's arguments as
a JSON Schema input contract, validates incoming parameters, runs the
command through a CommandExecutor, and renders the outcome as text:

    Command executed successfully:

    STDOUT:
    <stdout>

    STDERR:
    <stderr>

    Exit Code: 0
"""

import logging
from collections.abc import Mapping
from typing import Any

from cmdmcp.schema import ArgumentType, CommandEntry, ExecutionResult
from cmdmcp.tools.base import Tool, ToolResponse
from cmdmcp.tools.executor import CommandExecutor
from cmdmcp.tools.validation import format_validation_errors, validate_parameters

logger = logging.getLogger(__name__)

JSON_SCHEMA_TYPES = {
    ArgumentType.STRING: "string",
    ArgumentType.NUMBER: "number",
    ArgumentType.BOOLEAN: "boolean",
}


def build_input_schema(command: CommandEntry) -> dict[str, Any]:
    """
    Derive the parameter contract for a command.

    Every declared argument becomes a property carrying its type and
    description, plus its default when one is declared. Required arguments
    are listed under "required".
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for arg in command.arguments:
        prop: dict[str, Any] = {
            "type": JSON_SCHEMA_TYPES[arg.type],
            "description": arg.description,
        }
        if arg.default_value is not None:
            prop["default"] = arg.default_value
        properties[arg.name] = prop
        if arg.required:
            required.append(arg.name)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def render_result(result: ExecutionResult) -> str:
    """Render an execution result as the caller-facing reply text."""
    label = "Command executed successfully:" if result.success else "Command failed:"
    return (
        f"{label}\n\n"
        f"STDOUT:\n{result.stdout}\n\n"
        f"STDERR:\n{result.stderr}\n\n"
        f"Exit Code: {result.exit_code}"
    )


class CommandTool(Tool):
    """
    A configured command exposed as a tool.

    Example:
        tool = CommandTool(entry, CommandExecutor())
        response = await tool.call({"message": "hello"})
        print(response.text)
    """

    def __init__(self, entry: CommandEntry, executor: CommandExecutor) -> None:
        self.entry = entry
        self.executor = executor
        self._input_schema = build_input_schema(entry)

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def description(self) -> str:
        return self.entry.description or f"Run {self.entry.command.split()[0]}"

    def input_schema(self) -> dict[str, Any]:
        return self._input_schema

    def validate_args(self, params: Mapping[str, Any]) -> list[str]:
        return validate_parameters(self.entry, params)

    async def run(self, params: Mapping[str, Any]) -> ExecutionResult:
        """Execute the command without validating first."""
        return await self.executor.execute_async(self.entry, params)

    async def call(self, params: Mapping[str, Any]) -> ToolResponse:
        """
        Validate parameters, run the command, and render the reply.

        Invalid parameters are rejected without running anything.
        """
        errors = self.validate_args(params)
        if errors:
            message = f"Parameter validation failed: {format_validation_errors(errors)}"
            logger.error("%s: %s", self.name, message)
            return ToolResponse.fail(f"Error executing command: {message}")

        result = await self.run(params)
        logger.info(
            "Tool execution completed: %s (%s)",
            self.name,
            "SUCCESS" if result.success else "FAILURE",
        )
        return ToolResponse(text=render_result(result), is_error=not result.success)
