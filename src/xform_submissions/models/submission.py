"""Submission metadata data models.

This module defines the immutable records produced once a submission's
metadata has been fully resolved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SubmissionKey:
    """Composite identifier uniquely naming one submission.

    Attributes:
        form_id: Form ID taken from the submission root
        version: Form version, if the form declares one
        instance_id: Instance ID of the submission

    Example:
        >>> key = SubmissionKey(form_id="formA", version="2", instance_id="uuid:123")
        >>> str(key)
        'formA[2]/uuid:123'
    """

    form_id: str
    version: Optional[str]
    instance_id: str

    def __str__(self) -> str:
        version = f"[{self.version}]" if self.version is not None else ""
        return f"{self.form_id}{version}/{self.instance_id}"


@dataclass(frozen=True)
class SubmissionMetadata:
    """Fully-resolved metadata of one submission.

    Safe to pass across component boundaries: instances never change once
    created.

    Attributes:
        key: Submission key (form ID, version, instance ID)
        submission_file: Path to the submission document
        submission_date: When the server received the submission
        encrypted_xml_file: File name of the encrypted submission payload
        base64_encrypted_key: Base64 encoded symmetric key of an encrypted submission
        encrypted_signature: Base64 encoded signature of an encrypted submission
        attachments: File names of the media attachments, in document order
    """

    key: SubmissionKey
    submission_file: Optional[Path] = None
    submission_date: Optional[datetime] = None
    encrypted_xml_file: Optional[Path] = None
    base64_encrypted_key: Optional[str] = None
    encrypted_signature: Optional[str] = None
    attachments: Tuple[Path, ...] = field(default_factory=tuple)

    @property
    def is_encrypted(self) -> bool:
        """Check if the submission payload is encrypted.

        Returns:
            True if the submission points to an encrypted XML file
        """
        return self.encrypted_xml_file is not None

    @property
    def submission_dir(self) -> Optional[Path]:
        """Directory holding the submission document and its attachments."""
        if self.submission_file is None:
            return None
        return self.submission_file.parent

    def attachment_paths(self) -> List[Path]:
        """Resolve attachment names against the submission directory.

        No existence check is made. When the submission file is unknown the
        bare attachment names are returned.
        """
        submission_dir = self.submission_dir
        if submission_dir is None:
            return list(self.attachments)
        return [submission_dir / name for name in self.attachments]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the submission metadata.

        Example:
            >>> metadata = SubmissionMetadata(key=SubmissionKey("formA", None, "uuid:1"))
            >>> metadata.to_dict()["form_id"]
            'formA'
        """
        return {
            "form_id": self.key.form_id,
            "version": self.key.version,
            "instance_id": self.key.instance_id,
            "submission_file": str(self.submission_file) if self.submission_file else None,
            "submission_date": self.submission_date.isoformat() if self.submission_date else None,
            "encrypted": self.is_encrypted,
            "encrypted_xml_file": str(self.encrypted_xml_file) if self.encrypted_xml_file else None,
            "base64_encrypted_key": self.base64_encrypted_key,
            "encrypted_signature": self.encrypted_signature,
            "attachments": [str(path) for path in self.attachments],
        }
