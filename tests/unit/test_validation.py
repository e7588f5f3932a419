"""
Unit tests for parameter validation.

Tests cover:
- Required argument detection
- Type checks for string, number, and boolean arguments
- Unknown parameters being ignored
- Error collection without short-circuiting
"""

import pytest

from cmdmcp.schema import CommandArgument, CommandEntry
from cmdmcp.tools.validation import (
    format_validation_errors,
    is_boolean_like,
    is_number_like,
    validate_parameters,
)


def make_command(*arguments: CommandArgument) -> CommandEntry:
    return CommandEntry(name="test-cmd", description="", command="true", arguments=list(arguments))


class TestRequiredArguments:
    """Tests for required argument checks."""

    def test_missing_required_argument(self, echo_command: CommandEntry) -> None:
        """A missing required argument is reported by name."""
        errors = validate_parameters(echo_command, {})
        assert errors == ["Required argument 'message' is missing"]

    def test_present_required_argument(self, echo_command: CommandEntry) -> None:
        """Supplying the required argument passes."""
        assert validate_parameters(echo_command, {"message": "hello"}) == []

    def test_missing_optional_argument_is_fine(self) -> None:
        """Optional arguments may be omitted."""
        command = make_command(CommandArgument(name="count", type="number", defaultValue=10))
        assert validate_parameters(command, {}) == []

    def test_every_missing_required_argument_reported(self) -> None:
        """All missing required arguments are reported, in declaration order."""
        command = make_command(
            CommandArgument(name="first", type="string", required=True),
            CommandArgument(name="second", type="number", required=True),
        )
        errors = validate_parameters(command, {})
        assert errors == [
            "Required argument 'first' is missing",
            "Required argument 'second' is missing",
        ]


class TestUnknownParameters:
    """Tests for parameters that match no declared argument."""

    def test_unknown_parameter_ignored(self, echo_command: CommandEntry) -> None:
        """An undeclared key is not an error."""
        errors = validate_parameters(echo_command, {"message": "hi", "extra": "value"})
        assert errors == []

    def test_unknown_parameter_with_any_type_ignored(self, echo_command: CommandEntry) -> None:
        """Undeclared keys are not type-checked either."""
        errors = validate_parameters(echo_command, {"message": "hi", "extra": [1, 2, 3]})
        assert errors == []


class TestStringArguments:
    """Tests for string-typed arguments."""

    def test_string_accepted(self, echo_command: CommandEntry) -> None:
        assert validate_parameters(echo_command, {"message": ""}) == []

    @pytest.mark.parametrize("value", [42, 1.5, True, None, ["a"], {"a": 1}])
    def test_non_string_rejected(self, echo_command: CommandEntry, value: object) -> None:
        """Anything that is not a str is rejected."""
        errors = validate_parameters(echo_command, {"message": value})
        assert errors == ["Argument 'message' must be a string"]


class TestNumberArguments:
    """Tests for number-typed arguments."""

    @pytest.fixture
    def command(self) -> CommandEntry:
        return make_command(CommandArgument(name="count", type="number"))

    @pytest.mark.parametrize(
        "value",
        [0, 42, -7, 3.14, "42", "-1.5", "1e3", " 8 ", "1.", ".5", "0x1A", "0o17", "0b101", "Infinity", "-Infinity"],
    )
    def test_numbers_and_numeric_strings_accepted(self, command: CommandEntry, value: object) -> None:
        assert validate_parameters(command, {"count": value}) == []

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_string_accepted(self, command: CommandEntry, value: str) -> None:
        """A blank string converts to zero, so it counts as a number."""
        assert validate_parameters(command, {"count": value}) == []

    @pytest.mark.parametrize(
        "value",
        ["abc", "nan", "NaN", "12abc", "inf", "infinity", "1_000", "-0x1A", "0x", ".", "1e"],
    )
    def test_non_numeric_strings_rejected(self, command: CommandEntry, value: str) -> None:
        errors = validate_parameters(command, {"count": value})
        assert errors == ["Argument 'count' must be a number"]

    @pytest.mark.parametrize("value", [True, False, None, [1], float("nan")])
    def test_other_kinds_rejected(self, command: CommandEntry, value: object) -> None:
        """Booleans are not numbers, even though bool subclasses int."""
        errors = validate_parameters(command, {"count": value})
        assert errors == ["Argument 'count' must be a number"]


class TestBooleanArguments:
    """Tests for boolean-typed arguments."""

    @pytest.fixture
    def command(self) -> CommandEntry:
        return make_command(CommandArgument(name="verbose", type="boolean"))

    @pytest.mark.parametrize("value", [True, False, "true", "false"])
    def test_booleans_and_literal_strings_accepted(self, command: CommandEntry, value: object) -> None:
        assert validate_parameters(command, {"verbose": value}) == []

    @pytest.mark.parametrize("value", ["True", "FALSE", "yes", "1", "", 1, 0, None])
    def test_other_values_rejected(self, command: CommandEntry, value: object) -> None:
        errors = validate_parameters(command, {"verbose": value})
        assert errors == ["Argument 'verbose' must be a boolean"]


class TestErrorCollection:
    """Tests that validation reports everything at once."""

    def test_all_errors_collected(self) -> None:
        """Missing and mistyped arguments are reported together."""
        command = make_command(
            CommandArgument(name="path", type="string", required=True),
            CommandArgument(name="depth", type="number"),
            CommandArgument(name="follow", type="boolean"),
        )
        errors = validate_parameters(command, {"depth": "deep", "follow": "maybe"})
        assert errors == [
            "Required argument 'path' is missing",
            "Argument 'depth' must be a number",
            "Argument 'follow' must be a boolean",
        ]

    def test_format_joins_with_commas(self) -> None:
        assert format_validation_errors(["a", "b"]) == "a, b"
        assert format_validation_errors([]) == ""


class TestHelpers:
    """Tests for the scalar kind checks."""

    def test_is_number_like(self) -> None:
        assert is_number_like(1)
        assert is_number_like("2.5")
        assert is_number_like("inf")
        assert not is_number_like(True)
        assert not is_number_like("nan")

    def test_is_boolean_like(self) -> None:
        assert is_boolean_like(False)
        assert is_boolean_like("true")
        assert not is_boolean_like("on")
