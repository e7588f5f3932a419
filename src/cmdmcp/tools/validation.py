"""
Parameter validation for configured commands.

Checks a caller's parameter map against a command's declared arguments:
- every required argument is present
- every supplied value that matches a declared argument has the right type

Undeclared parameters are ignored here; the executor never renders them.
Errors are returned as a list of messages, never raised.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from cmdmcp.schema import ArgumentType, CommandArgument, CommandEntry

logger = logging.getLogger(__name__)

BOOLEAN_STRINGS = ("true", "false")

# Numeric string forms, matched after trimming surrounding whitespace.
NUMERIC_STRING = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+"
    r"|0[oO][0-7]+"
    r"|0[bB][01]+"
)


def is_numeric_string(value: str) -> bool:
    """
    True if the string is a number literal.

    Accepts decimal and exponent forms, 0x/0o/0b literals, signed Infinity
    and the blank string. Rejects "nan", "inf", and digit separators ("1_000").
    """
    text = value.strip()
    return not text or NUMERIC_STRING.fullmatch(text) is not None


def is_number_like(value: Any) -> bool:
    """True for a non-NaN int/float (not bool), or a numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, str):
        return is_numeric_string(value)
    return False


def is_boolean_like(value: Any) -> bool:
    """True for bool, or exactly the strings "true" and "false"."""
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value in BOOLEAN_STRINGS


def check_argument_type(arg: CommandArgument, value: Any) -> str | None:
    """
    Check one value against its declared type.

    Returns:
        An error message, or None if the value is acceptable
    """
    if arg.type is ArgumentType.STRING:
        ok = isinstance(value, str)
    elif arg.type is ArgumentType.NUMBER:
        ok = is_number_like(value)
    elif arg.type is ArgumentType.BOOLEAN:
        ok = is_boolean_like(value)
    else:
        ok = False

    if ok:
        return None
    return f"Argument '{arg.name}' must be a {arg.type.value}"


def validate_parameters(command: CommandEntry, params: Mapping[str, Any]) -> list[str]:
    """
    Validate a parameter map against a command's declared arguments.

    Args:
        command: The command whose arguments define what is accepted
        params: Caller-supplied parameters

    Returns:
        Every error found, in order (empty if valid)
    """
    errors: list[str] = []

    for arg in command.arguments:
        if arg.required and arg.name not in params:
            errors.append(f"Required argument '{arg.name}' is missing")

    for name, value in params.items():
        arg = command.get_argument(name)
        if arg is None:
            logger.debug("Ignoring unknown parameter for %s: %s", command.name, name)
            continue
        error = check_argument_type(arg, value)
        if error:
            errors.append(error)

    for error in errors:
        logger.warning("%s: %s", command.name, error)
    return errors


def format_validation_errors(errors: list[str]) -> str:
    """Join validation errors for display."""
    return ", ".join(errors)
