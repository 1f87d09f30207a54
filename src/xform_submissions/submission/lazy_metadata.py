"""Lazily evaluated submission metadata.

SubmissionLazyMetadata is created while reading a submission document and
reads each metadata value from the XML tree only once, the first time it
is asked for.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from xform_submissions.models.submission import SubmissionKey, SubmissionMetadata
from xform_submissions.models.xml_element import XmlElement
from xform_submissions.utils.exceptions import MissingFormIdError
from xform_submissions.utils.iso8601 import parse_datetime
from xform_submissions.utils.optionals import first_present

logger = logging.getLogger(__name__)

# Marks a cache slot that has not been computed yet. None means "computed, absent".
_UNSET = object()


class SubmissionLazyMetadata:
    """Metadata of one submission, read lazily from its root element.

    Every accessor computes its value on first use and caches it for the
    lifetime of the instance. The root element is shared, never mutated,
    and must not change while this object is in use.

    Instances are meant for single-threaded use: cache slots are written
    without locking, so two threads racing on a first access may both
    compute the same value.

    Example:
        >>> root = XmlElement.from_string('<data id="formA" version="2"/>')
        >>> metadata = SubmissionLazyMetadata(root)
        >>> metadata.get_form_id()
        'formA'
        >>> metadata.get_version()
        '2'
    """

    def __init__(self, root: XmlElement) -> None:
        self.root = root
        self._form_id = _UNSET
        self._instance_id = _UNSET
        self._version = _UNSET
        self._submission_date = _UNSET
        self._encrypted_xml_file = _UNSET
        self._base64_encrypted_key = _UNSET
        self._encrypted_signature = _UNSET
        self._media_names = _UNSET

    def get_form_id(self) -> str:
        """Return the form ID, taken from the root's "id" or "xmlns" attribute.

        Raises:
            MissingFormIdError: If the root has neither attribute
        """
        if self._form_id is _UNSET:
            form_id = first_present(
                self.root.get_attribute_value("id"),
                self.root.get_attribute_value("xmlns"),
            )
            if form_id is None:
                raise MissingFormIdError()
            self._form_id = form_id
        return self._form_id

    def get_instance_id(self) -> Optional[str]:
        """Return the instance ID from the <instanceID> element or the root's "instanceID" attribute."""
        if self._instance_id is _UNSET:
            self._instance_id = first_present(
                self._child_value("instanceID"),
                self.root.get_attribute_value("instanceID"),
            )
        return self._instance_id

    def get_version(self) -> Optional[str]:
        """Return the form version from the root's "version" attribute."""
        if self._version is _UNSET:
            self._version = self.root.get_attribute_value("version")
        return self._version

    def get_submission_date(self) -> Optional[datetime]:
        """Return the root's "submissionDate" attribute as an offset-aware datetime.

        Raises:
            MalformedDateError: If the attribute is present but not ISO-8601
        """
        if self._submission_date is _UNSET:
            value = self.root.get_attribute_value("submissionDate")
            self._submission_date = parse_datetime(value) if value is not None else None
        return self._submission_date

    def get_base64_encrypted_key(self) -> Optional[str]:
        """Return the base64 encoded encryption key from <base64EncryptedKey>."""
        if self._base64_encrypted_key is _UNSET:
            self._base64_encrypted_key = self._child_value("base64EncryptedKey")
        return self._base64_encrypted_key

    def get_encrypted_xml_file(self) -> Optional[str]:
        """Return the file name of the encrypted submission from <encryptedXmlFile>."""
        if self._encrypted_xml_file is _UNSET:
            self._encrypted_xml_file = self._child_value("encryptedXmlFile")
        return self._encrypted_xml_file

    def get_encrypted_signature(self) -> Optional[str]:
        """Return the submission signature from <base64EncryptedElementSignature>."""
        if self._encrypted_signature is _UNSET:
            self._encrypted_signature = self._child_value("base64EncryptedElementSignature")
        return self._encrypted_signature

    def get_media_names(self) -> List[str]:
        """Return the media attachment names.

        These are the values of every <file> child of every <media> element,
        in document order. <file> elements without a value are skipped.
        """
        if self._media_names is _UNSET:
            names = []
            for media in self.root.find_elements("media"):
                for file_element in media.find_elements("file"):
                    name = file_element.maybe_value()
                    if name is not None:
                        names.append(name)
            self._media_names = names
        return self._media_names

    def freeze(self, instance_id: str, submission_file: Union[Path, str]) -> SubmissionMetadata:
        """Resolve every value and build an immutable SubmissionMetadata.

        Args:
            instance_id: The caller's authoritative instance ID. It is not
                necessarily the one returned by get_instance_id().
            submission_file: Path of the submission document. Not accessed.

        Returns:
            SubmissionMetadata keyed by (form ID, version, instance_id)

        Raises:
            MissingFormIdError: If the root has no "id" or "xmlns" attribute
            MalformedDateError: If "submissionDate" is not ISO-8601
        """
        key = SubmissionKey(
            form_id=self.get_form_id(),
            version=self.get_version(),
            instance_id=instance_id,
        )
        encrypted_xml_file = self.get_encrypted_xml_file()
        metadata = SubmissionMetadata(
            key=key,
            submission_file=Path(submission_file),
            submission_date=self.get_submission_date(),
            encrypted_xml_file=Path(encrypted_xml_file) if encrypted_xml_file is not None else None,
            base64_encrypted_key=self.get_base64_encrypted_key(),
            encrypted_signature=self.get_encrypted_signature(),
            attachments=tuple(Path(name) for name in self.get_media_names()),
        )
        logger.debug(f"Froze submission metadata for {key}")
        return metadata

    def _child_value(self, name: str) -> Optional[str]:
        element = self.root.find_element(name)
        return element.maybe_value() if element is not None else None
