"""
Exception hierarchy for cmdmcp.

All cmdmcp exceptions inherit from CmdMcpError, allowing callers to catch
all cmdmcp-specific exceptions with a single except clause.

Exception Categories:
    - ConfigError: Configuration could not be found, parsed, or validated
    - ToolError: A tool lookup or tool call was rejected
    - ToolCallError: Carries the caller-facing reply of a failed tool call

Parameter validation failures are NOT exceptions: the validator returns a list
of messages and the tool layer decides how to reply. Likewise a command that
exits non-zero, or cannot be spawned at all, is reported as an ExecutionResult.

Design Principles:
    - All errors have error codes for programmatic handling
    - All errors include context (source, tool, args where applicable)
    - All errors provide actionable suggestions where possible
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Configuration errors: 1xxx
ERROR_CONFIG_NOT_FOUND = 1001
ERROR_CONFIG_PARSE = 1002
ERROR_CONFIG_INVALID = 1003
ERROR_CONFIG_EMPTY_SOURCE = 1004
ERROR_CONFIG_NOT_LOADED = 1005

# Tool errors: 2xxx
ERROR_TOOL_NOT_FOUND = 2001
ERROR_TOOL_INVALID_ARGS = 2002


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class CmdMcpError(Exception):
    """
    Base exception for all cmdmcp errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


@dataclass
class ConfigError(CmdMcpError):
    """
    Base class for configuration errors.

    These are fatal at startup: the CLI reports them and exits non-zero.

    Attributes:
        source: Where the configuration came from (a path, "--config", "stdin", ...)
    """

    source: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context["source"] = self.source


@dataclass
class ConfigNotFoundError(ConfigError):
    """Raised when a configuration file does not exist."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Configuration file not found: {self.source}"
        if self.code == 0:
            self.code = ERROR_CONFIG_NOT_FOUND
        if not self.suggestion:
            self.suggestion = "Check the --config-file path or MCP_CLI_CONFIG_PATH"
        super().__post_init__()


@dataclass
class ConfigParseError(ConfigError):
    """Raised when configuration text is not valid JSON or YAML."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Failed to parse configuration from {self.source}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_CONFIG_PARSE
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class ConfigValidationError(ConfigError):
    """Raised when a parsed configuration does not match the schema."""

    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Configuration validation failed: {', '.join(self.errors)}"
        if self.code == 0:
            self.code = ERROR_CONFIG_INVALID
        if not self.suggestion:
            self.suggestion = "Run 'cmdmcp schema' to see the expected configuration format"
        super().__post_init__()
        self.context["errors"] = self.errors


@dataclass
class ConfigSourceEmptyError(ConfigError):
    """Raised when the selected configuration source provides no content."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"No configuration provided via {self.source}"
        if self.code == 0:
            self.code = ERROR_CONFIG_EMPTY_SOURCE
        if not self.suggestion:
            self.suggestion = "Pass --config-file, --config, or set MCP_CLI_CONFIG_PATH"
        super().__post_init__()


@dataclass
class ConfigNotLoadedError(ConfigError):
    """Raised when configuration is read before it was loaded."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = "Configuration not loaded. Call load_config() first."
        if self.code == 0:
            self.code = ERROR_CONFIG_NOT_LOADED
        super().__post_init__()


# =============================================================================
# Tool Errors
# =============================================================================


@dataclass
class ToolError(CmdMcpError):
    """
    Base class for tool errors.

    Attributes:
        tool: Name of the tool involved
        tool_args: Arguments that were provided
    """

    tool: str = ""
    tool_args: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context.update({
            "tool": self.tool,
            "tool_args": self.tool_args,
        })


@dataclass
class ToolNotFoundError(ToolError):
    """Raised when a tool is not registered."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Tool not found: {self.tool}"
        if self.code == 0:
            self.code = ERROR_TOOL_NOT_FOUND
        if not self.suggestion:
            self.suggestion = "Check the tool name against the configured commands"
        super().__post_init__()


@dataclass
class ToolInvalidArgsError(ToolError):
    """Raised when tool arguments fail validation."""

    validation_errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Parameter validation failed: {', '.join(self.validation_errors)}"
        if self.code == 0:
            self.code = ERROR_TOOL_INVALID_ARGS
        super().__post_init__()
        self.context["validation_errors"] = self.validation_errors


class ToolCallError(Exception):
    """
    A failed tool call, carrying the exact text to send back to the caller.

    The MCP server raises this from its call_tool handler; the MCP SDK turns
    any handler exception into a result with isError=true and str(exc) as text.
    """

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return self.text
