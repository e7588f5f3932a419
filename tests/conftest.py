"""
Pytest configuration and fixtures for cmdmcp tests.

This module provides shared fixtures used across unit, integration,
and security tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from cmdmcp.schema import CommandArgument, CommandEntry
from cmdmcp.tools.executor import CommandExecutor

# Prints its argv (after the script name) as JSON, one line
ARGV_SCRIPT = """\
import json
import sys

print(json.dumps(sys.argv[1:]))
"""

# Writes to both streams, then exits with the code given as its first argument
EXIT_SCRIPT = """\
import sys

print("to stdout")
print("to stderr", file=sys.stderr)
sys.exit(int(sys.argv[1]) if len(sys.argv) > 1 else 0)
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def executor() -> CommandExecutor:
    """An executor with default settings (no timeout, no output cap)."""
    return CommandExecutor()


@pytest.fixture
def argv_script(temp_dir: Path) -> Path:
    """A Python script that echoes its arguments as a JSON list."""
    path = temp_dir / "argv.py"
    path.write_text(ARGV_SCRIPT)
    return path


@pytest.fixture
def exit_script(temp_dir: Path) -> Path:
    """A Python script that writes to stdout/stderr and exits with a chosen code."""
    path = temp_dir / "exit.py"
    path.write_text(EXIT_SCRIPT)
    return path


@pytest.fixture
def echo_command() -> CommandEntry:
    """The echo-test command: echo with one required string argument."""
    return CommandEntry(
        name="echo-test",
        description="Echo a message",
        command="echo",
        arguments=[
            CommandArgument(
                name="message",
                description="Message to echo",
                type="string",
                required=True,
            ),
        ],
    )


@pytest.fixture
def argv_command(argv_script: Path) -> CommandEntry:
    """A command with one argument of each type that reports its argv."""
    return CommandEntry(
        name="show-args",
        description="Print the argument vector",
        command=f"{sys.executable} {argv_script}",
        arguments=[
            CommandArgument(name="name", description="A name", type="string", required=True),
            CommandArgument(name="count", description="How many", type="number", defaultValue=10),
            CommandArgument(name="loud", description="Shout", type="boolean"),
        ],
    )


@pytest.fixture
def sample_config_json() -> str:
    """Return a simple configuration document as JSON."""
    return """
{
  "version": "1.0",
  "commands": [
    {
      "name": "echo-test",
      "description": "Echo a message",
      "command": "echo",
      "arguments": [
        {"name": "message", "description": "Message to echo", "type": "string", "required": true}
      ]
    },
    {
      "name": "list-files",
      "description": "List a directory",
      "command": "ls -1",
      "arguments": [
        {"name": "count", "description": "Limit", "type": "number", "required": false, "defaultValue": 10}
      ]
    }
  ]
}
"""


@pytest.fixture
def sample_config_yaml() -> str:
    """Return the echo-test configuration as YAML."""
    return """
version: "1.0"
commands:
  - name: echo-test
    description: Echo a message
    command: echo
    arguments:
      - name: message
        description: Message to echo
        type: string
        required: true
"""
