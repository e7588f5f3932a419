"""
Base classes for the tool interface.

This module defines the core abstractions for tools in cmdmcp:
- Tool: Abstract base class for anything exposed to an MCP client
- ToolResponse: The text reply of a tool call plus its error flag

Design Principles:
    - Tools are stateless between calls
    - Tools validate their own arguments and report problems as data
    - Tools return ToolResponse - never raise for expected failures
    - Tools are registered by name - the registry handles lookup
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolResponse:
    """
    Caller-facing result of a tool call.

    Attributes:
        text: The reply text
        is_error: Whether the reply reports a failure
    """

    text: str
    is_error: bool = False

    @classmethod
    def fail(cls, text: str) -> "ToolResponse":
        """Create an error response."""
        return cls(text=text, is_error=True)


class Tool(ABC):
    """
    Abstract base class for all cmdmcp tools.

    Subclasses must implement:
    - name property: The tool's unique identifier
    - input_schema(): JSON Schema describing accepted parameters
    - call(): Performs the tool's action
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The unique identifier for this tool."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        return f"Tool: {self.name}"

    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """
        JSON Schema for the tool's parameters.

        Returns:
            An object schema, as sent in an MCP tools/list response
        """
        ...

    @abstractmethod
    async def call(self, params: Mapping[str, Any]) -> ToolResponse:
        """
        Run the tool with caller-supplied parameters.

        Note:
            - Do NOT raise exceptions for expected failures
            - Use ToolResponse.fail() for invalid parameters or failed runs
        """
        ...

    def validate_args(self, params: Mapping[str, Any]) -> list[str]:
        """
        Validate the parameters for this tool.

        The default implementation accepts anything.

        Returns:
            List of validation error messages (empty if valid)
        """
        return []

    def __repr__(self) -> str:
        """String representation of the tool."""
        return f"<Tool: {self.name}>"
