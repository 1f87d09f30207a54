"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
INSTANCE_ID_FALLBACKS = ["directory", "none"]


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_secrets: Whether to redact encryption keys and signatures from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/xform-submissions.log"),
        description="Log file path"
    )
    redact_secrets: bool = Field(
        default=True,
        description="Redact encryption keys and signatures from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper


class SubmissionsConfig(BaseModel):
    """Configuration for locating and reading submissions.

    A form directory stores one sub-directory per submission under its
    instances directory, each holding the submission document and its
    media attachments.

    Attributes:
        submission_file_name: File name of the submission document
        instances_dir_name: Name of the directory holding submissions
        skip_invalid: Record invalid submissions as failures instead of stopping
        instance_id_fallback: What to use when a submission has no instance ID
            ("directory" uses the submission directory name, "none" skips it)

    Example:
        >>> submissions = SubmissionsConfig(skip_invalid=False)
        >>> submissions.submission_file_name
        'submission.xml'
    """

    submission_file_name: str = Field(
        default="submission.xml",
        min_length=1,
        description="File name of the submission document"
    )
    instances_dir_name: str = Field(
        default="instances",
        min_length=1,
        description="Directory holding one sub-directory per submission"
    )
    skip_invalid: bool = Field(
        default=True,
        description="Skip invalid submissions instead of stopping"
    )
    instance_id_fallback: str = Field(
        default="directory",
        description="Instance ID fallback: directory or none"
    )

    @field_validator("instance_id_fallback")
    @classmethod
    def validate_instance_id_fallback(cls, v: str) -> str:
        """Validate instance ID fallback strategy.

        Raises:
            ValueError: If the strategy is not one of: directory, none
        """
        v_lower = v.lower()
        if v_lower not in INSTANCE_ID_FALLBACKS:
            raise ValueError(
                f"Invalid instance_id_fallback: {v}. "
                f"Must be one of: {', '.join(INSTANCE_ID_FALLBACKS)}"
            )
        return v_lower


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        logging: Logging configuration
        submissions: Submission reading configuration

    Example:
        >>> config = Config(submissions=SubmissionsConfig(instances_dir_name="data"))
        >>> config.submissions.instances_dir_name
        'data'
    """

    logging: LoggingConfig = LoggingConfig()
    submissions: SubmissionsConfig = SubmissionsConfig()
