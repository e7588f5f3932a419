"""
cmdmcp - Expose command-line executables as MCP tools.

A configuration document declares named commands, the executable each one
runs, and a typed argument schema. cmdmcp turns every declared command into
an MCP tool:
- Incoming parameters are validated against the declared argument schema
- Validated parameters become a `--name value` argument vector (never a shell string)
- The executable runs to completion and its output and exit code are returned

Example usage:
    $ cmdmcp serve --config-file commands.json
    $ cmdmcp check --config-file commands.json
    $ cmdmcp call echo-test -p message=hello --config-file commands.json
"""

__version__ = "0.1.0"
__author__ = "cmdmcp Contributors"

__all__ = [
    "__version__",
    "__author__",
]
