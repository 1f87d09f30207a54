"""Models module.

This module provides the XML element wrapper and submission metadata records.
"""

from xform_submissions.models.submission import SubmissionKey, SubmissionMetadata
from xform_submissions.models.xml_element import XmlElement

__all__ = [
    "SubmissionKey",
    "SubmissionMetadata",
    "XmlElement",
]
