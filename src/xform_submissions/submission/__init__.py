"""Submission module.

This module provides lazy submission metadata extraction and submission reading.
"""

from xform_submissions.submission.lazy_metadata import SubmissionLazyMetadata
from xform_submissions.submission.reader import (
    ScanResult,
    iter_submission_files,
    load_submission_metadata,
    read_submission,
    resolve_instance_id,
    scan_form_submissions,
)

__all__ = [
    "SubmissionLazyMetadata",
    "ScanResult",
    "iter_submission_files",
    "load_submission_metadata",
    "read_submission",
    "resolve_instance_id",
    "scan_form_submissions",
]
