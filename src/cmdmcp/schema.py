"""
Schema definitions for cmdmcp.

This module defines the models used throughout cmdmcp:
- Config/CommandEntry/CommandArgument: What commands are exposed and how
- ExecutionResult: The outcome of running one command
- ParamValue: The scalar kinds a tool-call parameter may carry

Design Decisions:
    - Configuration models are immutable (frozen=True) and reject unknown keys
    - Field names are snake_case; aliases keep the camelCase configuration format
    - Default values use strict scalar types so "10" never silently becomes 10
    - The pydantic models ARE the structural configuration schema;
      Config.model_json_schema() renders it as JSON Schema
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)


# A caller-supplied parameter value. bool is listed separately because it is a
# subclass of int: always test for bool before testing for numbers.
ParamValue = str | int | float | bool

COMMAND_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"
ARGUMENT_NAME_PATTERN = r"^[A-Za-z0-9_][A-Za-z0-9_-]*$"


# =============================================================================
# Enums
# =============================================================================


class ArgumentType(str, Enum):
    """The scalar type an argument accepts."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


# =============================================================================
# Configuration Models
# =============================================================================


class CommandArgument(BaseModel):
    """
    One declared argument of a command.

    Each argument becomes a `--<name> <value>` pair in the argument vector
    when the caller supplies it or a default is declared.

    Attributes:
        name: Flag name, unique within the command
        description: Human-readable description shown to the caller
        type: Scalar type the argument accepts
        required: Whether the caller must supply it
        default_value: Value used when the caller omits the argument
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(
        ...,
        description="Argument name, rendered as --<name>",
        min_length=1,
        pattern=ARGUMENT_NAME_PATTERN,
    )
    description: str = Field(
        default="",
        description="Human-readable description of the argument",
    )
    type: ArgumentType = Field(
        ...,
        description="Scalar type: string, number, or boolean",
    )
    required: bool = Field(
        default=False,
        description="Whether the argument must be supplied",
    )
    default_value: StrictBool | StrictInt | StrictFloat | StrictStr | None = Field(
        default=None,
        alias="defaultValue",
        description="Value used when the argument is not supplied",
    )

    @model_validator(mode="after")
    def validate_default_matches_type(self) -> "CommandArgument":
        """Reject a default value that cannot be represented as the declared type."""
        value = self.default_value
        if value is None:
            return self

        if self.type is ArgumentType.STRING:
            ok = isinstance(value, str)
        elif self.type is ArgumentType.NUMBER:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        else:
            ok = isinstance(value, bool)

        if not ok:
            msg = f"defaultValue for '{self.name}' must be a {self.type.value}"
            raise ValueError(msg)
        return self


class CommandEntry(BaseModel):
    """
    A command exposed as a tool.

    Attributes:
        name: Tool name, unique within the configuration
        description: Tool description shown to the caller
        command: Executable followed by whitespace-separated fixed arguments
        arguments: Declared arguments, in the order they are rendered
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        description="Tool name (letters, digits, '_' and '-')",
        min_length=1,
        pattern=COMMAND_NAME_PATTERN,
    )
    description: str = Field(
        default="",
        description="What the command does",
    )
    command: str = Field(
        ...,
        description="Executable name followed by fixed arguments",
        min_length=1,
    )
    arguments: list[CommandArgument] = Field(
        default_factory=list,
        description="Declared arguments, in rendering order",
    )

    @field_validator("command")
    @classmethod
    def validate_command_not_blank(cls, v: str) -> str:
        """The command must name an executable."""
        if not v.split():
            msg = "command must name an executable"
            raise ValueError(msg)
        return v

    @field_validator("arguments")
    @classmethod
    def validate_unique_argument_names(cls, v: list[CommandArgument]) -> list[CommandArgument]:
        """Argument names must be unique within a command."""
        seen: set[str] = set()
        for arg in v:
            if arg.name in seen:
                msg = f"Duplicate argument name: {arg.name}"
                raise ValueError(msg)
            seen.add(arg.name)
        return v

    def get_argument(self, name: str) -> CommandArgument | None:
        """Look up a declared argument by name."""
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


class Config(BaseModel):
    """
    Complete cmdmcp configuration.

    Attributes:
        version: Configuration format version
        commands: Commands to expose as tools
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(
        default="1.0",
        description="Configuration format version",
    )
    commands: list[CommandEntry] = Field(
        ...,
        description="Commands to expose as tools",
    )

    @field_validator("commands")
    @classmethod
    def validate_unique_command_names(cls, v: list[CommandEntry]) -> list[CommandEntry]:
        """Command names must be unique within the configuration."""
        seen: set[str] = set()
        for entry in v:
            if entry.name in seen:
                msg = f"Duplicate command name: {entry.name}"
                raise ValueError(msg)
            seen.add(entry.name)
        return v

    def get_command(self, name: str) -> CommandEntry | None:
        """Look up a command by name."""
        for entry in self.commands:
            if entry.name == name:
                return entry
        return None


# =============================================================================
# Runtime Models
# =============================================================================


@dataclass(frozen=True)
class ExecutionResult:
    """
    The outcome of running one command.

    Built once per invocation and returned to the caller. A command that
    could not be spawned at all reports exit_code -1 with the reason in stderr.

    Attributes:
        success: True iff exit_code == 0
        stdout: Captured standard output
        stderr: Captured standard error (or the spawn failure description)
        exit_code: Process exit code, or -1 if the process never ran
        args: The argument vector passed after the executable
        duration_ms: Wall-clock execution time in milliseconds
    """

    success: bool
    stdout: str
    stderr: str
    exit_code: int
    args: list[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @classmethod
    def from_exit(
        cls,
        exit_code: int,
        stdout: str,
        stderr: str,
        **extra: Any,
    ) -> "ExecutionResult":
        """Create a result for a process that ran to completion."""
        return cls(
            success=exit_code == 0,
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            **extra,
        )

    @classmethod
    def spawn_failure(cls, error: str, **extra: Any) -> "ExecutionResult":
        """Create a result for a command that could not be executed."""
        return cls(success=False, stdout="", stderr=error, exit_code=-1, **extra)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exitCode": self.exit_code,
        }

