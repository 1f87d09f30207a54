"""Reading submissions from a form directory.

A form directory keeps each submission in its own sub-directory of the
instances directory, next to its media attachments:

    <form_dir>/instances/<instance dir>/submission.xml
    <form_dir>/instances/<instance dir>/photo.jpg

This module loads submission documents, resolves their instance IDs and
freezes their metadata.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from xform_submissions.config.schema import SubmissionsConfig
from xform_submissions.models.submission import SubmissionMetadata
from xform_submissions.models.xml_element import XmlElement
from xform_submissions.submission.lazy_metadata import SubmissionLazyMetadata
from xform_submissions.utils.exceptions import (
    ErrorCategory,
    ErrorInfo,
    XFormSubmissionError,
    create_error_info,
)

logger = logging.getLogger(__name__)

FALLBACK_DIRECTORY = "directory"
FALLBACK_NONE = "none"


@dataclass
class ScanResult:
    """Outcome of reading every submission of a form directory.

    Attributes:
        form_dir: The scanned form directory
        submissions: Metadata of the submissions that were read
        failures: Error information per submission file that could not be read
        skipped: Submission files skipped because no instance ID was found
    """

    form_dir: Path
    submissions: List[SubmissionMetadata] = field(default_factory=list)
    failures: Dict[Path, ErrorInfo] = field(default_factory=dict)
    skipped: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of submission files found."""
        return len(self.submissions) + len(self.failures) + len(self.skipped)

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "form_dir": str(self.form_dir),
            "total": self.total,
            "submissions": [metadata.to_dict() for metadata in self.submissions],
            "failures": [info.to_dict() for info in self.failures.values()],
            "skipped": [str(path) for path in self.skipped],
        }


def read_submission(path: Path) -> SubmissionLazyMetadata:
    """Parse a submission document and bind lazy metadata to its root.

    Args:
        path: Path to the submission document

    Returns:
        SubmissionLazyMetadata bound to the document root

    Raises:
        SubmissionParseError: If the file is missing, unreadable or malformed
    """
    return SubmissionLazyMetadata(XmlElement.from_file(path))


def resolve_instance_id(
    metadata: SubmissionLazyMetadata,
    submission_file: Path,
    fallback: str = FALLBACK_DIRECTORY,
) -> Optional[str]:
    """Decide the authoritative instance ID of a submission.

    The document's own instance ID wins. Otherwise, with the "directory"
    fallback, the name of the directory holding the submission is used.

    Args:
        metadata: Lazy metadata of the submission
        submission_file: Path of the submission document
        fallback: "directory" or "none"

    Returns:
        The instance ID, or None if it cannot be resolved
    """
    instance_id = metadata.get_instance_id()
    if instance_id is not None:
        return instance_id
    if fallback == FALLBACK_DIRECTORY:
        dir_name = submission_file.parent.name
        if dir_name:
            logger.debug(
                f"No instance ID in {submission_file}, using directory name {dir_name!r}"
            )
            return dir_name
    return None


def load_submission_metadata(
    path: Path,
    fallback: str = FALLBACK_DIRECTORY,
) -> Optional[SubmissionMetadata]:
    """Read a submission document and freeze its metadata.

    Args:
        path: Path to the submission document
        fallback: Instance ID fallback ("directory" or "none")

    Returns:
        Frozen metadata, or None if no instance ID could be resolved

    Raises:
        SubmissionParseError: If the document cannot be loaded
        MissingFormIdError: If the document has no form ID
        MalformedDateError: If the submission date is not ISO-8601
    """
    metadata = read_submission(path)
    instance_id = resolve_instance_id(metadata, path, fallback)
    if instance_id is None:
        logger.warning(f"Skipping submission without instance ID: {path}")
        return None
    return metadata.freeze(instance_id, path)


def iter_submission_files(
    form_dir: Path,
    instances_dir_name: str = "instances",
    submission_file_name: str = "submission.xml",
) -> Iterator[Path]:
    """Yield the submission documents of a form directory in sorted order.

    Instance directories without a submission document are ignored. A
    missing instances directory yields nothing.
    """
    instances_dir = form_dir / instances_dir_name
    if not instances_dir.is_dir():
        logger.debug(f"No instances directory in {form_dir}")
        return
    for instance_dir in sorted(p for p in instances_dir.iterdir() if p.is_dir()):
        submission_file = instance_dir / submission_file_name
        if submission_file.is_file():
            yield submission_file


def scan_form_submissions(
    form_dir: Path,
    config: Optional[SubmissionsConfig] = None,
) -> ScanResult:
    """Load the metadata of every submission in a form directory.

    Args:
        form_dir: Form directory holding the instances directory
        config: Submission reading configuration, defaults if None

    Returns:
        ScanResult with loaded metadata, failures and skipped files

    Raises:
        XFormSubmissionError: If skip_invalid is off, or the error is critical
    """
    if config is None:
        config = SubmissionsConfig()

    result = ScanResult(form_dir=form_dir)
    logger.info(f"Scanning submissions in {form_dir}")

    for submission_file in iter_submission_files(
        form_dir, config.instances_dir_name, config.submission_file_name
    ):
        try:
            metadata = load_submission_metadata(submission_file, config.instance_id_fallback)
        except XFormSubmissionError as e:
            error_info = create_error_info(e, submission_file=submission_file)
            if not config.skip_invalid or error_info.category == ErrorCategory.CRITICAL:
                logger.error(f"Failed to read submission {submission_file}: {e}")
                raise
            logger.warning(f"Skipping invalid submission {submission_file}: {e}")
            result.failures[submission_file] = error_info
            continue

        if metadata is None:
            result.skipped.append(submission_file)
        else:
            result.submissions.append(metadata)

    logger.info(
        f"Scanned {result.total} submissions in {form_dir}: "
        f"{len(result.submissions)} read, {len(result.failures)} failed, "
        f"{len(result.skipped)} skipped"
    )
    return result
