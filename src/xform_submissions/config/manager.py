"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading functionality, including
support for JSON configuration files, environment variable overrides, and
configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from xform_submissions.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from xform_submissions.config.schema import Config, LoggingConfig, SubmissionsConfig
from xform_submissions.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "XFORM_SUB_"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (XFORM_SUB_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> config.submissions.instances_dir_name
        'instances'
    """
    # Load .env file if present in project root
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        )


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
            )
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check file permissions and path"
            )
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Config file must contain a JSON object: {config_path}"
            )
        logger.info(f"Loaded configuration from {config_path}")
        return config_dict

    logger.info(
        f"Config file not found: {config_path}. Using default configuration."
    )
    # Return a deep copy of defaults to avoid mutation
    return json.loads(json.dumps(DEFAULT_CONFIG))


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with XFORM_SUB_ prefix.

    For example: XFORM_SUB_LOG_LEVEL, XFORM_SUB_INSTANCES_DIR

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied
    """
    # Logging section
    if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = log_level
        logger.debug("Override: log_level from environment")

    if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config_dict.setdefault("logging", {})["log_file"] = log_file
        logger.debug("Override: log_file from environment")

    if redact_secrets := os.getenv(f"{ENV_PREFIX}REDACT_SECRETS"):
        config_dict.setdefault("logging", {})["redact_secrets"] = _parse_bool(redact_secrets)
        logger.debug("Override: redact_secrets from environment")

    # Submissions section
    if submission_file_name := os.getenv(f"{ENV_PREFIX}SUBMISSION_FILE_NAME"):
        config_dict.setdefault("submissions", {})["submission_file_name"] = submission_file_name
        logger.debug("Override: submission_file_name from environment")

    if instances_dir_name := os.getenv(f"{ENV_PREFIX}INSTANCES_DIR"):
        config_dict.setdefault("submissions", {})["instances_dir_name"] = instances_dir_name
        logger.debug("Override: instances_dir_name from environment")

    if skip_invalid := os.getenv(f"{ENV_PREFIX}SKIP_INVALID"):
        config_dict.setdefault("submissions", {})["skip_invalid"] = _parse_bool(skip_invalid)
        logger.debug("Override: skip_invalid from environment")

    if instance_id_fallback := os.getenv(f"{ENV_PREFIX}INSTANCE_ID_FALLBACK"):
        config_dict.setdefault("submissions", {})["instance_id_fallback"] = instance_id_fallback
        logger.debug("Override: instance_id_fallback from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string.

    Args:
        value: String value to parse (case-insensitive)

    Returns:
        Boolean value
    """
    return value.lower() in ("true", "1", "yes", "on")


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Args:
        config: Configuration instance

    Returns:
        LoggingConfig instance
    """
    return config.logging


def get_submissions_config(config: Config) -> SubmissionsConfig:
    """Get submission reading configuration.

    Args:
        config: Configuration instance

    Returns:
        SubmissionsConfig instance

    Example:
        >>> config = load_config()
        >>> get_submissions_config(config).skip_invalid
        True
    """
    return config.submissions
