"""Custom exception classes for the XForm submissions utility.

All exceptions inherit from XFormSubmissionError to allow catching all custom exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class XFormSubmissionError(Exception):
    """Base exception for all XForm submissions custom exceptions."""

    pass


class ValidationError(XFormSubmissionError):
    """Raised when submission data validation fails.

    Examples:
        - Missing form identity on the submission root
        - Malformed submission dates
    """

    pass


class MissingFormIdError(ValidationError):
    """Raised when a submission root carries neither an "id" nor an "xmlns" attribute.

    The submission cannot be attributed to any form, so it must be rejected
    or skipped by the caller.
    """

    def __init__(self, message: str = "Unable to extract form id") -> None:
        super().__init__(message)


class MalformedDateError(ValidationError):
    """Raised when a date-time value is not valid ISO-8601.

    Attributes:
        value: The offending raw value
    """

    def __init__(self, value: str, reason: Optional[str] = None) -> None:
        self.value = value
        message = f"Malformed ISO-8601 date-time: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SubmissionParseError(XFormSubmissionError):
    """Raised when a submission document cannot be loaded.

    Examples:
        - Submission file not found
        - Permission denied
        - XML is not well-formed

    Attributes:
        path: Path of the submission file, if the document came from disk
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigurationError(XFormSubmissionError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass


class ErrorCategory(Enum):
    """Error categorization for handling strategy.

    Determines how errors are handled while scanning a form's submissions.

    Attributes:
        PERMANENT: Skip the submission, continue the scan (invalid documents)
        CRITICAL: Halt processing immediately (configuration problems, unknown errors)
    """

    PERMANENT = "PERMANENT"
    CRITICAL = "CRITICAL"


@dataclass
class ErrorInfo:
    """Structured error information for actionable error handling.

    Attributes:
        category: Error category (PERMANENT, CRITICAL)
        error_type: Exception class name (e.g., "MissingFormIdError")
        message: User-friendly error message
        remediation: Actionable guidance for resolving the error
        technical_details: Optional technical details for debugging
        submission_file: Optional path of the submission that failed

    Example:
        >>> error_info = create_error_info(
        ...     MissingFormIdError(),
        ...     submission_file=Path("instances/uuid1/submission.xml")
        ... )
        >>> error_info.category
        <ErrorCategory.PERMANENT: 'PERMANENT'>
    """

    category: ErrorCategory
    error_type: str
    message: str
    remediation: str
    technical_details: Optional[str] = None
    submission_file: Optional[Path] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "error_type": self.error_type,
            "message": self.message,
            "remediation": self.remediation,
            "technical_details": self.technical_details,
            "submission_file": str(self.submission_file) if self.submission_file else None,
        }


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize exception for error handling strategy.

    Args:
        exception: The exception to categorize

    Returns:
        ErrorCategory indicating handling strategy

    Example:
        >>> categorize_error(MissingFormIdError())
        <ErrorCategory.PERMANENT: 'PERMANENT'>
        >>> categorize_error(ConfigurationError("bad config"))
        <ErrorCategory.CRITICAL: 'CRITICAL'>
    """
    if isinstance(exception, ConfigurationError):
        return ErrorCategory.CRITICAL

    # A broken document only affects itself
    if isinstance(exception, (ValidationError, SubmissionParseError)):
        return ErrorCategory.PERMANENT

    return ErrorCategory.CRITICAL


def create_error_info(
    exception: Exception,
    submission_file: Optional[Path] = None,
) -> ErrorInfo:
    """Create structured error information from exception.

    Args:
        exception: Exception that occurred
        submission_file: Optional path of the submission being processed

    Returns:
        ErrorInfo with categorization and remediation guidance
    """
    category = categorize_error(exception)

    technical_details = None
    if exception.__cause__ is not None:
        technical_details = f"Caused by: {type(exception.__cause__).__name__}: {exception.__cause__}"

    if submission_file is None:
        submission_file = getattr(exception, "path", None)

    return ErrorInfo(
        category=category,
        error_type=type(exception).__name__,
        message=str(exception),
        remediation=_generate_remediation(exception),
        technical_details=technical_details,
        submission_file=submission_file,
    )


def _generate_remediation(exception: Exception) -> str:
    """Generate actionable remediation message for an error.

    Args:
        exception: Exception that occurred

    Returns:
        Actionable remediation message
    """
    if isinstance(exception, MissingFormIdError):
        return (
            "Submission root has no 'id' or 'xmlns' attribute. "
            "Check that the document was produced by the expected form."
        )

    if isinstance(exception, MalformedDateError):
        return (
            "The 'submissionDate' attribute is not ISO-8601. "
            "Expected a value like 2020-01-01T00:00:00.000+00:00."
        )

    if isinstance(exception, SubmissionParseError):
        return (
            "Submission file could not be read. Check that it exists, "
            "is readable and contains well-formed XML."
        )

    if isinstance(exception, ConfigurationError):
        return (
            "Configuration error. Check config.json for missing or invalid values. "
            "Use examples/config.example.json as template."
        )

    return "Review error message and check the log file for complete details."
