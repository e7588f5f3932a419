"""
Tools module for cmdmcp.

Every configured command is exposed as a tool. The pieces:
    - validation: checks caller parameters against declared arguments
    - executor: builds the argument vector and runs the command
    - CommandTool: one command as a tool (input schema, call, reply text)
    - ToolRegistry: name -> tool lookup, built from the configuration

Callers validate before executing; CommandTool.call() does both in order.
"""

from cmdmcp.tools.base import Tool, ToolResponse
from cmdmcp.tools.command import CommandTool, build_input_schema, render_result
from cmdmcp.tools.executor import CommandExecutor, build_arguments
from cmdmcp.tools.registry import ToolRegistry
from cmdmcp.tools.validation import validate_parameters

__all__ = [
    "Tool",
    "ToolResponse",
    "CommandTool",
    "CommandExecutor",
    "ToolRegistry",
    "build_arguments",
    "build_input_schema",
    "render_result",
    "validate_parameters",
]
