"""
Logging setup for cmdmcp.

stdout carries the MCP protocol, so every log line goes to stderr through a
Rich handler. The level comes from CLI flags first, then the environment:

    --debug, LOG_LEVEL=debug, DEBUG=1   -> DEBUG
    --verbose, LOG_LEVEL=verbose        -> INFO
    otherwise                           -> WARNING
"""

import logging
import os
from collections.abc import Mapping

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "cmdmcp"


def resolve_log_level(
    verbose: bool = False,
    debug: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick a logging level from CLI flags and LOG_LEVEL / DEBUG."""
    env = os.environ if environ is None else environ
    env_level = env.get("LOG_LEVEL", "").strip().lower()
    env_debug = env.get("DEBUG", "").strip() == "1"

    if debug or env_debug or env_level == "debug":
        return logging.DEBUG
    if verbose or env_level in ("verbose", "info"):
        return logging.INFO
    return logging.WARNING


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Attach a stderr Rich handler to the package logger. Call once at startup.

    Calling it again replaces the previous handler instead of stacking another.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_cmdmcp_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=level <= logging.DEBUG,
    )
    handler._cmdmcp_handler = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
