"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "log_file": "logs/xform-submissions.log",
        # Encryption keys and signatures stay out of logs unless opted out
        "redact_secrets": True,
    },
    "submissions": {
        "submission_file_name": "submission.xml",
        "instances_dir_name": "instances",
        "skip_invalid": True,
        "instance_id_fallback": "directory",
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
