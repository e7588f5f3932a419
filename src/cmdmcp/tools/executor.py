"""
Command execution for configured commands.

The executor turns a command declaration plus caller parameters into a
process invocation:

    command.command  = "git log --oneline"
    arguments        = [count: number, author: string]
    params           = {"author": "ann", "count": 5, "extra": "x"}

    argv = ["git", "log", "--oneline", "--count", "5", "--author", "ann"]

Security Note:
    - The process is spawned with an argument list (shell=False), so shell
      metacharacters in values are passed through literally
    - Only DECLARED arguments are rendered; extra caller keys never become flags
    - stdin is not connected, so a child cannot read the MCP transport

    This is NOT a sandbox: the child runs with the server's privileges.

Blocking behavior:
    execute() blocks until the child exits and buffers all output in memory.
    By default there is no timeout and no output cap. Both can be enabled
    per executor (timeout_seconds, max_output_bytes).
"""

import asyncio
import logging
import subprocess
import time
from collections.abc import Mapping
from typing import Any

from cmdmcp.schema import CommandEntry, ExecutionResult, ParamValue

logger = logging.getLogger(__name__)


def render_value(value: ParamValue) -> str:
    """
    Render a parameter value as a single argv token.

    Booleans become "true"/"false" and integral floats drop their
    fractional part, so 10.0 renders as "10".
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def build_arguments(command: CommandEntry, params: Mapping[str, Any]) -> list[str]:
    """
    Build the per-call argument vector, in declaration order.

    A declared argument takes the caller's value, else its default, else it
    is left out entirely.
    """
    args: list[str] = []
    for arg in command.arguments:
        if arg.name in params:
            value = params[arg.name]
        elif arg.default_value is not None:
            value = arg.default_value
            logger.debug("Using default value for '%s': %r", arg.name, value)
        else:
            continue

        args.append(f"--{arg.name}")
        args.append(render_value(value))
    return args


def split_command(command: CommandEntry) -> tuple[str, list[str]]:
    """Split the command template into the executable and its fixed arguments."""
    parts = command.command.split()
    if not parts:
        msg = f"Command '{command.name}' has no executable"
        raise ValueError(msg)
    return parts[0], parts[1:]


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def _truncate(data: bytes, max_bytes: int | None) -> bytes:
    if max_bytes is None or len(data) <= max_bytes:
        return data
    marker = f"\n... [truncated, exceeded {max_bytes} bytes]".encode()
    return data[:max_bytes] + marker


class CommandExecutor:
    """
    Runs configured commands and reports the outcome as an ExecutionResult.

    execute() never raises for a failing or missing executable: a non-zero
    exit is a normal result with success=False, and a command that cannot be
    spawned yields exit_code -1 with the reason in stderr.

    Attributes:
        max_output_bytes: Per-stream cap on captured output (None = unbounded)
        timeout_seconds: Kill the child after this long (None = wait forever)
    """

    def __init__(
        self,
        max_output_bytes: int | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        if max_output_bytes is not None and max_output_bytes <= 0:
            msg = "max_output_bytes must be positive"
            raise ValueError(msg)
        if timeout_seconds is not None and timeout_seconds <= 0:
            msg = "timeout_seconds must be positive"
            raise ValueError(msg)
        self.max_output_bytes = max_output_bytes
        self.timeout_seconds = timeout_seconds

    def execute(
        self,
        command: CommandEntry,
        params: Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """
        Run a command with the given parameters.

        Parameters are expected to have passed validate_parameters() already.

        Args:
            command: The command declaration to run
            params: Caller-supplied parameters (default: none)

        Returns:
            ExecutionResult describing the outcome
        """
        params = params or {}
        logger.info("Starting execution of command: %s", command.name)
        start = time.monotonic()

        args: list[str] = []
        try:
            args = build_arguments(command, params)
            executable, base_args = split_command(command)
            argv = [executable, *base_args, *args]
            logger.debug("Final command: %s", argv)

            # shell=False: each element is one argument, never parsed by a shell
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=self.timeout_seconds,
                shell=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Command '%s' timed out after %s seconds",
                command.name,
                self.timeout_seconds,
            )
            return ExecutionResult.spawn_failure(
                f"Command timed out after {self.timeout_seconds} seconds",
                args=args,
                duration_ms=_elapsed_ms(start),
            )
        except FileNotFoundError as e:
            return self._spawn_failure(command, f"Executable not found: {e.filename or e}", args, start)
        except PermissionError as e:
            return self._spawn_failure(command, f"Permission denied executing: {e.filename or e}", args, start)
        except Exception as e:
            return self._spawn_failure(command, str(e) or type(e).__name__, args, start)

        stdout = _decode(_truncate(completed.stdout, self.max_output_bytes))
        stderr = _decode(_truncate(completed.stderr, self.max_output_bytes))
        result = ExecutionResult.from_exit(
            completed.returncode,
            stdout,
            stderr,
            args=args,
            duration_ms=_elapsed_ms(start),
        )

        logger.info(
            "Command '%s' completed in %.0fms with exit code %d",
            command.name,
            result.duration_ms,
            result.exit_code,
        )
        if not result.success:
            logger.warning("Command '%s' failed with exit code %d", command.name, result.exit_code)
        return result

    async def execute_async(
        self,
        command: CommandEntry,
        params: Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """Run execute() on a worker thread and await its result."""
        return await asyncio.to_thread(self.execute, command, params)

    def _spawn_failure(
        self,
        command: CommandEntry,
        error: str,
        args: list[str],
        start: float,
    ) -> ExecutionResult:
        logger.error("Command execution failed for '%s': %s", command.name, error)
        return ExecutionResult.spawn_failure(error, args=args, duration_ms=_elapsed_ms(start))


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000
