"""Submission metadata examples.

This module demonstrates reading metadata from a single submission document
and scanning a form directory, including how invalid submissions are reported.
"""

import logging
import sys
from pathlib import Path

from xform_submissions.config.schema import SubmissionsConfig
from xform_submissions.models.xml_element import XmlElement
from xform_submissions.submission import SubmissionLazyMetadata, scan_form_submissions
from xform_submissions.utils.exceptions import MissingFormIdError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

SAMPLE_SUBMISSION = """<?xml version="1.0" encoding="UTF-8"?>
<data xmlns="http://opendatakit.org/submissions" id="household-survey" version="2"
      submissionDate="2020-01-01T00:00:00.000+00:00">
  <name>Jane</name>
  <meta>
    <instanceID>uuid:7b1bd7a5-1a0f-4f0c-9a2f-6c7d2b2e5c1e</instanceID>
  </meta>
  <instanceID>uuid:7b1bd7a5-1a0f-4f0c-9a2f-6c7d2b2e5c1e</instanceID>
  <media>
    <file>house.jpg</file>
    <file>signature.png</file>
  </media>
</data>"""


def example_1_read_single_submission():
    """Example 1: Read metadata lazily from an in-memory document."""
    print("=" * 80)
    print("EXAMPLE 1: Lazy metadata of a single submission")
    print("=" * 80)

    metadata = SubmissionLazyMetadata(XmlElement.from_string(SAMPLE_SUBMISSION))

    print(f"Form ID:     {metadata.get_form_id()}")
    print(f"Version:     {metadata.get_version()}")
    print(f"Instance ID: {metadata.get_instance_id()}")
    print(f"Submitted:   {metadata.get_submission_date()}")
    print(f"Media:       {metadata.get_media_names()}")

    frozen = metadata.freeze(metadata.get_instance_id(), Path("instances/uuid1/submission.xml"))
    print(f"Key:         {frozen.key}")
    print(f"Attachments: {frozen.attachment_paths()}")
    print()


def example_2_missing_form_id():
    """Example 2: A submission without form identity is rejected."""
    print("=" * 80)
    print("EXAMPLE 2: Missing form ID")
    print("=" * 80)

    metadata = SubmissionLazyMetadata(XmlElement.from_string("<data version='1'/>"))
    try:
        metadata.freeze("uuid:1", Path("submission.xml"))
    except MissingFormIdError as e:
        print(f"Rejected: {e}")
    print()


def example_3_scan_form_directory(form_dir: Path):
    """Example 3: Scan every submission of a form directory."""
    print("=" * 80)
    print(f"EXAMPLE 3: Scanning {form_dir}")
    print("=" * 80)

    result = scan_form_submissions(form_dir, SubmissionsConfig(skip_invalid=True))
    print(f"Read {len(result.submissions)} of {result.total} submissions")
    for path, error_info in result.failures.items():
        print(f"  {path}: {error_info.message}")
        print(f"    Fix: {error_info.remediation}")
    print()


if __name__ == "__main__":
    example_1_read_single_submission()
    example_2_missing_form_id()
    if len(sys.argv) > 1:
        example_3_scan_form_directory(Path(sys.argv[1]))
