"""
Configuration loading for cmdmcp.

Configuration can come from several places. The first source that is set wins:

    1. --config          inline JSON/YAML text given on the command line
    2. --config-file     path given on the command line
    3. MCP_CLI_CONFIG_JSON   inline text in the environment
    4. MCP_CLI_CONFIG_PATH   path in the environment
    5. stdin             text piped into the process

Documents are parsed as JSON first and as YAML when that fails (tab-indented
JSON is not valid YAML), then validated against the Config model. Every
failure is raised as a ConfigError.

The loaded Config is built once by the caller (normally the CLI) and passed
to whatever needs it; nothing here is cached at module level.
"""

import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

import yaml
from pydantic import ValidationError

from cmdmcp.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigSourceEmptyError,
    ConfigValidationError,
)
from cmdmcp.schema import CommandEntry, Config

logger = logging.getLogger(__name__)

CONFIG_JSON_ENV = "MCP_CLI_CONFIG_JSON"
CONFIG_PATH_ENV = "MCP_CLI_CONFIG_PATH"


def format_validation_error(error: ValidationError) -> list[str]:
    """Render pydantic errors as '<location>: <message>' strings."""
    messages = []
    for item in error.errors():
        location = "/".join(str(part) for part in item["loc"])
        messages.append(f"/{location}: {item['msg']}" if location else item["msg"])
    return messages


def parse_config_text(content: str, source: str) -> Config:
    """
    Parse and validate configuration text.

    Args:
        content: JSON or YAML text
        source: Description of where the text came from, for error messages

    Returns:
        Validated Config object

    Raises:
        ConfigSourceEmptyError: If the text is blank
        ConfigParseError: If the text is not valid JSON or YAML
        ConfigValidationError: If the document doesn't match the schema
    """
    if not content.strip():
        raise ConfigSourceEmptyError(source=source)

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigParseError(source=source, underlying_error=str(e)) from e

    return validate_config_data(data, source)


def validate_config_data(data: Any, source: str) -> Config:
    """Validate an already-parsed document against the Config model."""
    logger.debug("Validating configuration from %s", source)
    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        errors = format_validation_error(e)
        logger.debug("Validation errors: %s", errors)
        raise ConfigValidationError(source=source, errors=errors) from e

    logger.info(
        "Configuration from %s validated with %d commands",
        source,
        len(config.commands),
    )
    if not config.commands:
        logger.warning("Configuration contains no commands")
    return config


class ConfigurationManager:
    """
    Loads a configuration file and answers lookups against it.

    Example:
        manager = ConfigurationManager("commands.json")
        manager.load_config()
        entry = manager.get_command("echo-test")
    """

    def __init__(self, config_file_path: Path | str) -> None:
        self._config_file_path = Path(config_file_path)
        self._config: Config | None = None
        logger.debug("ConfigurationManager initialized with file path: %s", self._config_file_path)

    @property
    def config_file_path(self) -> Path:
        return self._config_file_path

    def load_config(self) -> Config:
        """
        Load and validate the configuration file.

        Returns:
            The validated Config

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigParseError: If the file cannot be read or parsed
            ConfigValidationError: If the document doesn't match the schema
        """
        path = self._config_file_path
        source = str(path)
        logger.info("Loading configuration from: %s", source)

        if not path.is_file():
            raise ConfigNotFoundError(source=source)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(source=source, underlying_error=str(e)) from e

        self._config = parse_config_text(content, source)
        return self._config

    def get_config(self) -> Config:
        """Return the loaded configuration."""
        if self._config is None:
            raise ConfigNotLoadedError(source=str(self._config_file_path))
        return self._config

    def get_commands(self) -> list[CommandEntry]:
        """Return every configured command."""
        return self.get_config().commands

    def get_command(self, name: str) -> CommandEntry | None:
        """Return the command with the given name, or None."""
        command = self.get_config().get_command(name)
        if command is None:
            logger.warning("Command not found: %s", name)
        return command

    def is_loaded(self) -> bool:
        return self._config is not None


def resolve_configuration(
    config_text: str | None = None,
    config_file: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    stdin: TextIO | None = None,
) -> Config:
    """
    Resolve the configuration from the first available source.

    Args:
        config_text: Inline configuration (the --config option)
        config_file: Configuration file path (the --config-file option)
        environ: Environment to read MCP_CLI_CONFIG_* from (default: os.environ)
        stdin: Stream to read as a last resort (default: sys.stdin)

    Returns:
        Validated Config object

    Raises:
        ConfigError: If the selected source is missing, empty, or invalid
    """
    env = os.environ if environ is None else environ

    if config_text:
        logger.info("Using configuration from --config argument")
        return parse_config_text(config_text, "--config")

    if config_file:
        logger.info("Using configuration file from --config-file: %s", config_file)
        return ConfigurationManager(config_file).load_config()

    env_json = env.get(CONFIG_JSON_ENV)
    if env_json:
        logger.info("Using configuration from %s", CONFIG_JSON_ENV)
        return parse_config_text(env_json, CONFIG_JSON_ENV)

    env_path = env.get(CONFIG_PATH_ENV)
    if env_path:
        logger.info("Using configuration file from %s: %s", CONFIG_PATH_ENV, env_path)
        return ConfigurationManager(env_path).load_config()

    stream = sys.stdin if stdin is None else stdin
    logger.info("Reading configuration from stdin")
    try:
        content = stream.read()
    except (OSError, ValueError) as e:
        raise ConfigParseError(source="stdin", underlying_error=str(e)) from e
    return parse_config_text(content, "stdin")


__all__ = [
    "CONFIG_JSON_ENV",
    "CONFIG_PATH_ENV",
    "ConfigError",
    "ConfigurationManager",
    "parse_config_text",
    "resolve_configuration",
    "validate_config_data",
]
