"""Unit tests for the namespace-agnostic XML element wrapper."""

from pathlib import Path

import pytest

from xform_submissions.models.xml_element import XmlElement
from xform_submissions.utils.exceptions import SubmissionParseError


class TestParsing:
    """Test building XmlElement from text and files."""

    def test_from_string(self):
        root = XmlElement.from_string('<data id="formA"/>')

        assert root.name == "data"
        assert root.get_attribute_value("id") == "formA"

    def test_from_bytes_with_declaration(self):
        root = XmlElement.from_string(b'<?xml version="1.0" encoding="UTF-8"?><data/>')

        assert root.name == "data"

    def test_from_string_with_declaration(self):
        root = XmlElement.from_string('<?xml version="1.0" encoding="UTF-8"?><data/>')

        assert root.name == "data"

    def test_malformed_string_raises(self):
        with pytest.raises(SubmissionParseError) as exc_info:
            XmlElement.from_string("<data><unclosed></data>")

        assert "Malformed XML" in str(exc_info.value)

    def test_from_file(self, tmp_path: Path):
        # Arrange
        submission_file = tmp_path / "submission.xml"
        submission_file.write_text('<data id="formA"/>', encoding="utf-8")

        # Act
        root = XmlElement.from_file(submission_file)

        # Assert
        assert root.get_attribute_value("id") == "formA"

    def test_missing_file_raises(self, tmp_path: Path):
        missing = tmp_path / "missing.xml"

        with pytest.raises(SubmissionParseError) as exc_info:
            XmlElement.from_file(missing)

        assert exc_info.value.path == missing
        assert "not found" in str(exc_info.value)

    def test_malformed_file_raises(self, tmp_path: Path):
        submission_file = tmp_path / "submission.xml"
        submission_file.write_text("<data>", encoding="utf-8")

        with pytest.raises(SubmissionParseError) as exc_info:
            XmlElement.from_file(submission_file)

        assert exc_info.value.path == submission_file

    def test_external_entities_are_not_resolved(self, tmp_path: Path):
        # Arrange
        secret = tmp_path / "secret.txt"
        secret.write_text("top secret", encoding="utf-8")
        xml = (
            f'<!DOCTYPE data [<!ENTITY xxe SYSTEM "file://{secret}">]>'
            "<data><instanceID>&xxe;</instanceID></data>"
        )

        # Act
        root = XmlElement.from_string(xml)

        # Assert
        assert root.find_element("instanceID").maybe_value() != "top secret"


class TestLookups:
    """Test attribute and child lookups."""

    def test_missing_attribute(self):
        assert XmlElement.from_string("<data/>").get_attribute_value("id") is None

    def test_xmlns_is_default_namespace(self):
        root = XmlElement.from_string('<data xmlns="http://www.w3.org/2002/xforms"/>')

        assert root.get_attribute_value("xmlns") == "http://www.w3.org/2002/xforms"

    def test_inherited_namespace_is_not_declared(self):
        root = XmlElement.from_string('<data xmlns="urn:a"><child/></data>')

        assert root.find_element("child").get_attribute_value("xmlns") is None

    def test_redeclared_namespace_on_child(self):
        root = XmlElement.from_string('<data xmlns="urn:a"><meta xmlns="urn:b"/></data>')

        assert root.find_element("meta").get_attribute_value("xmlns") == "urn:b"

    def test_find_element_matches_local_name(self):
        root = XmlElement.from_string(
            '<data xmlns="urn:a"><instanceID>uuid:1</instanceID></data>'
        )

        assert root.find_element("instanceID").maybe_value() == "uuid:1"

    def test_find_element_returns_first(self):
        root = XmlElement.from_string("<data><file>a</file><file>b</file></data>")

        assert root.find_element("file").maybe_value() == "a"

    def test_find_element_missing(self):
        assert XmlElement.from_string("<data/>").find_element("media") is None

    def test_find_element_only_direct_children(self):
        root = XmlElement.from_string("<data><group><file>a</file></group></data>")

        assert root.find_element("file") is None

    def test_find_elements_in_document_order(self):
        root = XmlElement.from_string(
            "<data><file>a</file><!-- note --><other/><file>b</file></data>"
        )

        values = [element.maybe_value() for element in root.find_elements("file")]

        assert values == ["a", "b"]

    def test_find_elements_none(self):
        assert XmlElement.from_string("<data/>").find_elements("media") == []

    def test_has_children(self):
        assert XmlElement.from_string("<data><a/></data>").has_children()
        assert not XmlElement.from_string("<data><!-- only a comment --></data>").has_children()


class TestMaybeValue:
    """Test direct text extraction."""

    @pytest.mark.parametrize(
        "xml,expected",
        [
            ("<file>a.jpg</file>", "a.jpg"),
            ("<file>  a.jpg\n</file>", "a.jpg"),
            ("<file/>", None),
            ("<file>   </file>", None),
            ("<file><child>x</child></file>", None),
        ],
    )
    def test_maybe_value(self, xml, expected):
        assert XmlElement.from_string(xml).maybe_value() == expected
