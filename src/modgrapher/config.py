"""Configuration Management with Pydantic.

Settings are read from an optional YAML file and may be overridden by
MODGRAPHER_* environment variables. Command-line flags take precedence over
both and are applied by the CLI.
"""

import codecs
import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

logger = structlog.get_logger(__name__)

OUTPUT_FORMATS = ("text", "json")

ENV_OVERRIDES = {
    "logging_level": "MODGRAPHER_LOGGING_LEVEL",
    "json_logs": "MODGRAPHER_JSON_LOGS",
    "output_format": "MODGRAPHER_OUTPUT_FORMAT",
    "input_encoding": "MODGRAPHER_INPUT_ENCODING",
    "verify": "MODGRAPHER_VERIFY",
}
BOOLEAN_KEYS = ("json_logs", "verify")


class ModGrapherConfig(BaseModel):
    """modgrapher configuration.

    Attributes:
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render log records as JSON instead of console output
        output_format: How the graph is printed ('text' or 'json')
        input_encoding: Codec used to decode named input files and stdin
        verify: Run consistency checks on the graph before printing it
    """

    logging_level: str = Field(
        default="WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log records",
    )
    output_format: str = Field(
        default="text",
        description="Output format for the rendered graph",
    )
    input_encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Encoding of the input stream",
    )
    verify: bool = Field(
        default=False,
        description="Check graph consistency after building",
    )

    model_config = {"str_strip_whitespace": True}

    @field_validator("logging_level", mode="before")
    @classmethod
    def normalize_logging_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate that the output format is supported.

        Raises:
            ValueError: If the format is unknown
        """
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            msg = f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}"
            raise ValueError(msg)
        return v

    @field_validator("input_encoding")
    @classmethod
    def validate_input_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            msg = f"Unknown input encoding: {v}"
            raise ValueError(msg) from e
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ModGrapherConfig":
        """Load configuration from a YAML file.

        An empty file yields the defaults. Environment overrides are applied
        on top of the file contents.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated ModGrapherConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If the YAML is invalid or does not hold a mapping
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls(**cls._apply_env_overrides(config_data))
        logger.info(
            "configuration_loaded",
            output_format=config.output_format,
            logging_level=config.logging_level,
        )
        return config

    @classmethod
    def from_env(cls) -> "ModGrapherConfig":
        """Build configuration from defaults plus environment overrides."""
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply MODGRAPHER_* environment variable overrides.

        Args:
            config_data: Base configuration dictionary from file

        Returns:
            Configuration dictionary with environment overrides applied
        """
        for key, env_var in ENV_OVERRIDES.items():
            value: Any = os.environ.get(env_var)
            if value is None:
                continue

            if key in BOOLEAN_KEYS:
                value = value.lower() in ("true", "1", "yes")

            config_data[key] = value
            logger.debug("env_override_applied", env_var=env_var, config_key=key)

        return config_data


def load_config(config_path: str | Path | None = None) -> ModGrapherConfig:
    """Load configuration from a file, or from the environment alone.

    Args:
        config_path: Path to a YAML file. If None, only defaults and
            environment overrides are used.

    Returns:
        Loaded ModGrapherConfig instance
    """
    if config_path is None:
        return ModGrapherConfig.from_env()
    return ModGrapherConfig.from_yaml(config_path)


__all__ = [
    "OUTPUT_FORMATS",
    "ModGrapherConfig",
    "load_config",
]
