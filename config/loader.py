"""Configuration file loader and validator.

Reads ``pivotchat.ini`` into the ``Config`` dataclass tree, coerces each value to the type of the
field default and validates the result. Raises exceptions for any issue encountered while
loading; unknown values of enumerated keys are only logged.
"""

from __future__ import annotations

import ast
import configparser
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ALLOWED_BACKENDS: Final[list[str]] = ["local", "http", "google", "deepl"]
ALLOWED_CACHE_POLICIES: Final[list[str]] = ["fifo", "lru"]
PIVOT_LANGUAGE: Final[str] = "english"


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Loads and validates the pipeline configuration.

    Args:
        config_filename (str | Path): INI file to load.
        script_name (str): Executing script name, used in error messages.
        **args: Command-line overrides: ``debug`` (bool), ``backend`` (str), ``endpoint`` (str).

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values or types.
    """

    def __init__(
        self,
        *,
        config_filename: str | Path,
        script_name: str,
        **args,
    ) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_path.name}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()
        # Keys are matched against upper-case dataclass fields
        parser.optionxform = str.upper  # type: ignore[assignment]

        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name
        self._convert_settings(parser)
        self._warn_unknown_sections(parser)

        # Apply command-line argument overrides
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        if args.get("backend"):
            self.config.TRANSLATION.BACKEND = str(args["backend"])
        if args.get("endpoint"):
            self.config.BACKEND.ENDPOINT = str(args["endpoint"])
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Copy every defined INI value onto the matching Config field.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Section '%s' not defined; defaults are used", section.name)
                continue
            self._convert_section_field(parser, formatter, section)

    def _convert_section_field(
        self, parser: ConfigParser, formatter: _ConfigFormatter, section: DataclassField[Any]
    ) -> None:
        for key in fields(getattr(self.config, section.name)):
            if not parser.has_option(section.name, key.name):
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue

            formatted_value = formatter.apply_format(section, key)
            setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _warn_unknown_sections(self, parser: ConfigParser) -> None:
        known: set[str] = {section.name for section in fields(self.config)}
        for name in parser.sections():
            if name not in known:
                logger.warning("Unknown section '%s' in configuration file is ignored", name)

    def _validate_settings(self) -> None:
        """Check enumerated keys, numeric ranges and cross-key requirements.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        try:
            self._inspect_defined_item("TRANSLATION", "BACKEND", ALLOWED_BACKENDS)
            self._inspect_defined_item("CACHE", "POLICY", ALLOWED_CACHE_POLICIES)
            self._validate_range("CACHE", "MAX_TRANSLATIONS", minimum=1)
            self._validate_range("CACHE", "MAX_CORRECTIONS", minimum=1)
            self._validate_range("CACHE", "TEXT_PREFIX", minimum=0)
            self._validate_range("CACHE", "INFLIGHT_TIMEOUT", minimum=0.0, exclusive=True)
            self._validate_range("TRANSLATION", "TIMEOUT", minimum=0.0, exclusive=True)
            self._validate_range("CORRECTION", "MAX_DISTANCE", minimum=0)
            self._validate_range("CORRECTION", "MAX_VARIANT_DISTANCE", minimum=0)
            self._validate_range("INPUT", "VOICE_BURST_CHARS", minimum=0)
            self._validate_range("INPUT", "ENGLISH_RATIO", minimum=0.0, maximum=1.0)
            self._validate_range("PREVIEW", "DEBOUNCE_SEC", minimum=0.0)
        except (AttributeError, TypeError) as err:
            msg: str = f"Invalid configuration value: {err}"
            raise ConfigFormatError(msg) from None

        if self.config.TRANSLATION.PIVOT_LANGUAGE.strip().lower() != PIVOT_LANGUAGE:
            msg = f"'TRANSLATION.PIVOT_LANGUAGE' must be '{PIVOT_LANGUAGE}'"
            raise ConfigValueError(msg)
        if self.config.TRANSLATION.BACKEND == "http" and not self.config.BACKEND.ENDPOINT.strip():
            msg = "'BACKEND.ENDPOINT' must be set when 'TRANSLATION.BACKEND' is 'http'"
            raise ConfigValueError(msg)
        if not isinstance(self.config.REGISTRY.ALIASES, dict):
            msg = f"Unsupported type used for 'REGISTRY.ALIASES': {type(self.config.REGISTRY.ALIASES)}"
            raise ConfigTypeError(msg)

    def _inspect_defined_item(self, section_name: str, key_name: str, defined_list: list[str]) -> None:
        """Log a warning for values outside the allowed options.

        Raises:
            ConfigTypeError: If the configured value is not a string.
        """
        value: Any = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"

        if not isinstance(value, str):
            msg: str = f"Unsupported type used for '{field_name}': {type(value)}"
            raise ConfigTypeError(msg)
        if value not in defined_list:
            logger.warning("Unknown value '%s' is set for '%s'", value, field_name)

    def _validate_range(
        self,
        section_name: str,
        key_name: str,
        *,
        minimum: float | None = None,
        maximum: float | None = None,
        exclusive: bool = False,
    ) -> None:
        """Raise ConfigValueError when a numeric setting is out of range."""
        value: int | float = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"
        too_small: bool = minimum is not None and (value <= minimum if exclusive else value < minimum)
        too_large: bool = maximum is not None and value > maximum
        if too_small or too_large:
            msg: str = f"'{field_name}' is out of range: {value}"
            raise ConfigValueError(msg)


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str, dict)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the field default.

        bool, int and float go through the parser helpers; anything else is read as a Python
        literal, so strings must be quoted in the file.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If the literal has a different type than the default.
        """
        formatters: dict[
            type[bool | int | float], Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float]
        ] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
        }

        default: Any = getattr(getattr(self.config, section.name), key.name)
        formatter: Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float] | None = formatters.get(
            type(default)
        )
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            value: Any = ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

        if not isinstance(value, type(default)):
            msg = f"Unsupported type used for '{section.name}.{key.name}': {type(value).__name__}"
            raise ConfigTypeError(msg)
        return value

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"', "%"):
            value = value.removeprefix(char).removesuffix(char)
        return float(value)

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"', "%"):
            value = value.removeprefix(char).removesuffix(char)
        return int(float(value))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        return self.parser.getboolean(section.name, key.name)
