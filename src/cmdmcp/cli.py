"""
CLI entry point for cmdmcp.

This module provides the Typer-based command-line interface for cmdmcp.

Commands:
    serve       Expose the configured commands as MCP tools over stdio
    check       Validate a configuration and list its commands
    schema      Print the configuration JSON Schema
    call        Run one configured command locally, as a tool call would

Architecture Note:
    The CLI is the composition root: it resolves the configuration once,
    builds the executor and registry, and passes them down. The core modules
    never read options or the environment themselves.

    While serving, stdout belongs to the MCP transport, so everything the CLI
    prints during `serve` goes to stderr.
"""

import asyncio
import json
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cmdmcp import __version__
from cmdmcp.config import CONFIG_JSON_ENV, CONFIG_PATH_ENV, resolve_configuration
from cmdmcp.errors import ConfigError, ToolInvalidArgsError
from cmdmcp.logging_utils import configure_logging, resolve_log_level
from cmdmcp.schema import Config, ExecutionResult
from cmdmcp.server import CommandServer
from cmdmcp.tools.executor import CommandExecutor
from cmdmcp.tools.registry import ToolRegistry
from cmdmcp.tools.validation import validate_parameters

# Initialize Typer app with metadata
app = typer.Typer(
    name="cmdmcp",
    help="Expose command-line executables as MCP tools.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich consoles for formatted output
console = Console()
err_console = Console(stderr=True)


# Options shared by every command that needs a configuration
ConfigFileOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config-file",
        "-c",
        help=f"Path to the configuration file (JSON or YAML). Falls back to ${CONFIG_PATH_ENV}.",
        resolve_path=True,
    ),
]
ConfigTextOption = Annotated[
    Optional[str],
    typer.Option(
        "--config",
        help=f"Configuration as an inline JSON string. Falls back to ${CONFIG_JSON_ENV}.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        help="Enable verbose logging to stderr.",
    ),
]
DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Enable debug logging and full error tracebacks.",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]cmdmcp[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    cmdmcp - Expose command-line executables as MCP tools.

    Declare commands and their typed arguments in a configuration file;
    cmdmcp validates each tool call and runs the command safely.
    """
    pass


def _load_config(
    config_file: Path | None,
    config_text: str | None,
    out: Console,
    debug: bool,
    json_output: bool = False,
) -> Config:
    """Resolve the configuration or exit with code 1."""
    try:
        return resolve_configuration(config_text=config_text, config_file=config_file)
    except ConfigError as e:
        if json_output:
            _output_json_error("config_error", str(e), debug, details=e.to_dict())
        else:
            out.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
            if debug:
                out.print(f"[dim]{traceback.format_exc()}[/dim]")
        raise typer.Exit(code=1)


@app.command()
def serve(
    config_file: ConfigFileOption = None,
    config_text: ConfigTextOption = None,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
    max_output_bytes: Annotated[
        Optional[int],
        typer.Option(
            "--max-output-bytes",
            help="Truncate each captured stream after this many bytes. Unbounded by default.",
            min=1,
        ),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(
            "--timeout",
            help="Kill a command after this many seconds. No timeout by default.",
            min=0.001,
        ),
    ] = None,
) -> None:
    """
    Serve the configured commands as MCP tools over stdio.

    Configuration is taken from --config, --config-file, $MCP_CLI_CONFIG_JSON,
    $MCP_CLI_CONFIG_PATH, or stdin, in that order.

    Example:
        $ cmdmcp serve --config-file commands.json
    """
    configure_logging(resolve_log_level(verbose=verbose, debug=debug))
    config = _load_config(config_file, config_text, err_console, debug)

    executor = CommandExecutor(max_output_bytes=max_output_bytes, timeout_seconds=timeout)
    server = CommandServer(ToolRegistry.from_config(config, executor))

    try:
        asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        raise typer.Exit(code=0)
    except Exception as e:
        err_console.print(f"[red]Error starting server: {escape(str(e))}[/red]")
        if debug:
            err_console.print(f"[dim]{traceback.format_exc()}[/dim]")
        raise typer.Exit(code=1)


@app.command()
def check(
    config_file: ConfigFileOption = None,
    config_text: ConfigTextOption = None,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Validate a configuration and list the tools it defines.

    Example:
        $ cmdmcp check --config-file commands.json
    """
    configure_logging(resolve_log_level(verbose=verbose, debug=debug))
    config = _load_config(config_file, config_text, console, debug, json_output)

    if json_output:
        print(json.dumps(config.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2))
        return

    console.print(f"[green]✓[/green] Configuration valid: [bold]{len(config.commands)}[/bold] commands")
    if not config.commands:
        return
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Command")
    table.add_column("Arguments")
    table.add_column("Description", style="dim")

    for entry in config.commands:
        arg_lines = []
        for arg in entry.arguments:
            line = f"--{arg.name} <{arg.type.value}>"
            if arg.required:
                line += " [bold](required)[/bold]"
            if arg.default_value is not None:
                line += f" [dim]= {escape(repr(arg.default_value))}[/dim]"
            arg_lines.append(line)
        table.add_row(
            entry.name,
            escape(entry.command),
            "\n".join(arg_lines) or "[dim]none[/dim]",
            escape(entry.description),
        )

    console.print(table)


@app.command()
def schema() -> None:
    """
    Print the JSON Schema that configuration documents must match.

    Example:
        $ cmdmcp schema > config-schema.json
    """
    print(json.dumps(Config.model_json_schema(), indent=2))


def _parse_params(raw: list[str]) -> dict[str, str]:
    """Parse repeated key=value options."""
    params: dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got: {item}", param_hint="--param")
        params[key] = value
    return params


@app.command()
def call(
    name: Annotated[
        str,
        typer.Argument(help="Name of the configured command to run."),
    ],
    param: Annotated[
        Optional[list[str]],
        typer.Option(
            "--param",
            "-p",
            help="Parameter as key=value. Repeat for several parameters.",
        ),
    ] = None,
    config_file: ConfigFileOption = None,
    config_text: ConfigTextOption = None,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Run one configured command the way a tool call would.

    Parameters are passed as strings; number and boolean arguments accept
    their textual forms ("42", "true").

    Example:
        $ cmdmcp call echo-test -p message=hello --config-file commands.json
    """
    configure_logging(resolve_log_level(verbose=verbose, debug=debug))
    config = _load_config(config_file, config_text, console, debug, json_output)
    params = _parse_params(param or [])

    entry = config.get_command(name)
    if entry is None:
        message = f"Unknown command: {name}"
        if json_output:
            _output_json_error("tool_not_found", message, debug)
        else:
            console.print(f"[red]{escape(message)}[/red]")
            console.print(f"[dim]Available: {', '.join(c.name for c in config.commands) or 'none'}[/dim]")
        raise typer.Exit(code=1)

    errors = validate_parameters(entry, params)
    if errors:
        error = ToolInvalidArgsError(tool=name, tool_args=params, validation_errors=errors)
        if json_output:
            _output_json_error("invalid_parameters", error.message, debug, details=error.to_dict())
        else:
            console.print(f"[red]{escape(error.message)}[/red]")
        raise typer.Exit(code=1)

    result = CommandExecutor().execute(entry, params)

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _display_execution_result(name, result, verbose)

    raise typer.Exit(code=0 if result.success else 1)


def _display_execution_result(name: str, result: ExecutionResult, verbose: bool) -> None:
    """Display a command's output in a formatted way."""
    if result.success:
        status_icon = "[green]✓[/green]"
        status_style = "green"
    else:
        status_icon = "[red]✗[/red]"
        status_style = "red"

    console.print(
        f"{status_icon} [bold]{name}[/bold]: "
        f"[{status_style}]exit code {result.exit_code}[/{status_style}]"
    )
    if verbose:
        console.print(f"[dim]Arguments: {' '.join(result.args) or '(none)'}[/dim]")

    if result.stdout:
        console.print(Panel(Text(result.stdout.rstrip("\n")), title="stdout", title_align="left"))
    if result.stderr:
        console.print(Panel(Text(result.stderr.rstrip("\n")), title="stderr", title_align="left", border_style="red"))

    console.print(f"[dim]Duration: {result.duration_ms:.1f}ms[/dim]")


def _output_json_error(
    error_type: str,
    message: str,
    include_traceback: bool = False,
    details: dict | None = None,
) -> None:
    """Output an error in JSON format."""
    output = {
        "error": True,
        "error_type": error_type,
        "message": message,
    }
    if details:
        output["details"] = details
    if include_traceback:
        output["traceback"] = traceback.format_exc()
    print(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    app()
