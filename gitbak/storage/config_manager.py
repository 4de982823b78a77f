"""
Manages loading and validation of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitbak.exceptions import ConfigurationError
from gitbak.models.config import GitbakConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any] | None = None) -> GitbakConfig:
        """
        Loads configuration from the INI file if present, applies CLI overrides,
        and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated GitbakConfig object.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_from_file = self._get_config_as_dict()
            log.debug(f"Loaded configuration from '{self.config_file_path}'.")

        if cli_options:
            config_from_file.update(cli_options)

        try:
            return GitbakConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        known_keys = GitbakConfig.get_ini_keys()
        unknown = [key for key in section if key not in known_keys]
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown configuration keys: {', '.join(unknown)}"
                "[/yellow]"
            )
        return {key: section[key] for key in section if key in known_keys}
