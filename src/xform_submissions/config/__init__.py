"""Config module.

This module provides configuration management functionality.
"""

from xform_submissions.config.manager import (
    get_logging_config,
    get_submissions_config,
    load_config,
)
from xform_submissions.config.schema import (
    Config,
    LoggingConfig,
    SubmissionsConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_logging_config",
    "get_submissions_config",
    # Configuration models
    "Config",
    "LoggingConfig",
    "SubmissionsConfig",
]
