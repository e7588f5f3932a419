"""
Unit tests for command tools.

Tests cover:
- Input schema generation from argument declarations
- Reply rendering for successful and failed runs
- CommandTool.call validation and execution
"""

import asyncio
import json
import sys
from pathlib import Path

from cmdmcp.schema import CommandArgument, CommandEntry, ExecutionResult
from cmdmcp.tools.command import CommandTool, build_input_schema, render_result
from cmdmcp.tools.executor import CommandExecutor


class TestBuildInputSchema:
    """Tests for the generated parameter contract."""

    def test_echo_schema(self, echo_command: CommandEntry) -> None:
        assert build_input_schema(echo_command) == {
            "type": "object",
            "properties": {
                "message": {"type": "string", "description": "Message to echo"},
            },
            "required": ["message"],
        }

    def test_types_defaults_and_optional(self, argv_command: CommandEntry) -> None:
        schema = build_input_schema(argv_command)

        assert schema["properties"]["name"]["type"] == "string"
        assert schema["properties"]["count"] == {
            "type": "number",
            "description": "How many",
            "default": 10,
        }
        assert schema["properties"]["loud"]["type"] == "boolean"
        assert "default" not in schema["properties"]["loud"]
        assert schema["required"] == ["name"]

    def test_no_arguments(self) -> None:
        entry = CommandEntry(name="date", command="date")
        assert build_input_schema(entry) == {"type": "object", "properties": {}}

    def test_property_order_follows_declaration(self, argv_command: CommandEntry) -> None:
        assert list(build_input_schema(argv_command)["properties"]) == ["name", "count", "loud"]


class TestRenderResult:
    """Tests for reply text."""

    def test_success(self) -> None:
        text = render_result(ExecutionResult.from_exit(0, "hello\n", ""))
        assert text == "Command executed successfully:\n\nSTDOUT:\nhello\n\n\nSTDERR:\n\n\nExit Code: 0"

    def test_failure(self) -> None:
        text = render_result(ExecutionResult.from_exit(2, "", "oops"))
        assert text.startswith("Command failed:\n\n")
        assert "STDERR:\noops\n\n" in text
        assert text.endswith("Exit Code: 2")

    def test_spawn_failure(self) -> None:
        text = render_result(ExecutionResult.spawn_failure("Executable not found: nope"))
        assert text.startswith("Command failed:")
        assert text.endswith("Exit Code: -1")


class TestCommandTool:
    """Tests for calling a configured command as a tool."""

    def test_name_and_description(self, echo_command: CommandEntry, executor: CommandExecutor) -> None:
        tool = CommandTool(echo_command, executor)
        assert tool.name == "echo-test"
        assert tool.description == "Echo a message"
        assert repr(tool) == "<Tool: echo-test>"

    def test_description_fallback(self, executor: CommandExecutor) -> None:
        tool = CommandTool(CommandEntry(name="d", command="date -u"), executor)
        assert tool.description == "Run date"

    def test_call_success(self, echo_command: CommandEntry, executor: CommandExecutor) -> None:
        tool = CommandTool(echo_command, executor)

        response = asyncio.run(tool.call({"message": "hello"}))

        assert response.is_error is False
        assert response.text.startswith("Command executed successfully:")
        assert "--message hello" in response.text
        assert response.text.endswith("Exit Code: 0")

    def test_call_validation_failure_does_not_execute(
        self, echo_command: CommandEntry, executor: CommandExecutor, temp_dir: Path
    ) -> None:
        marker = temp_dir / "ran"
        script = temp_dir / "touch.py"
        script.write_text(f"open({str(marker)!r}, 'w').close()\n")
        entry = echo_command.model_copy(update={"command": f"{sys.executable} {script}"})
        tool = CommandTool(entry, executor)

        response = asyncio.run(tool.call({}))

        assert response.is_error is True
        assert response.text == (
            "Error executing command: Parameter validation failed: "
            "Required argument 'message' is missing"
        )
        assert not marker.exists()

    def test_call_process_failure(self, executor: CommandExecutor, exit_script: Path) -> None:
        entry = CommandEntry(name="fails", command=f"{sys.executable} {exit_script} 4")
        tool = CommandTool(entry, executor)

        response = asyncio.run(tool.call({}))

        assert response.is_error is True
        assert response.text.startswith("Command failed:")
        assert response.text.endswith("Exit Code: 4")

    def test_run_skips_validation(self, argv_command: CommandEntry, executor: CommandExecutor) -> None:
        tool = CommandTool(argv_command, executor)

        result = asyncio.run(tool.run({}))

        assert json.loads(result.stdout) == ["--count", "10"]
