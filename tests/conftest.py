"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

XFORMS_NS = "http://www.w3.org/2002/xforms"


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def plain_submission_xml() -> str:
    """Unencrypted submission with a version, a date and two media blocks."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
    <data xmlns="{XFORMS_NS}" id="household-survey" version="2"
          submissionDate="2020-01-01T00:00:00.000+00:00" instanceID="uuid:attribute">
      <name>Jane</name>
      <instanceID>uuid:element</instanceID>
      <media>
        <file>a.jpg</file>
        <file>b.jpg</file>
      </media>
      <media>
        <file>c.jpg</file>
      </media>
    </data>"""


@pytest.fixture
def encrypted_submission_xml() -> str:
    """Encrypted submission manifest as written by the collection server."""
    return """<?xml version="1.0" encoding="UTF-8"?>
    <data xmlns="http://opendatakit.org/submissions" encrypted="yes" id="secret-form" version="20200101">
      <base64EncryptedKey>c2VjcmV0LWtleQ==</base64EncryptedKey>
      <meta xmlns="http://openrosa.org/xforms">
        <instanceID>uuid:meta</instanceID>
      </meta>
      <media>
        <file>photo.jpg.enc</file>
      </media>
      <encryptedXmlFile>submission.xml.enc</encryptedXmlFile>
      <base64EncryptedElementSignature>c2lnbmF0dXJl</base64EncryptedElementSignature>
      <instanceID>uuid:encrypted</instanceID>
    </data>"""


@pytest.fixture
def make_submission(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a submission document into a form directory.

    Returns:
        Callable taking (instance directory name, XML content) and returning
        the path of the written submission.xml
    """

    def _make(instance_dir: str, xml: str) -> Path:
        submission_dir = tmp_path / "form" / "instances" / instance_dir
        submission_dir.mkdir(parents=True, exist_ok=True)
        submission_file = submission_dir / "submission.xml"
        submission_file.write_text(xml, encoding="utf-8")
        return submission_file

    return _make


@pytest.fixture
def form_dir(tmp_path: Path) -> Path:
    """Form directory used by the make_submission factory."""
    return tmp_path / "form"


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in original_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(original_level)
