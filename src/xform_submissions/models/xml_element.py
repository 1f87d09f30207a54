"""Namespace-agnostic XML element wrapper.

Submission documents carry a default namespace on their root element
(usually the XForms namespace), which makes plain lxml tag lookups
cumbersome. XmlElement hides that by matching children on their local
names and by exposing the default namespace declaration as the "xmlns"
attribute.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from lxml import etree

from xform_submissions.utils.exceptions import SubmissionParseError

logger = logging.getLogger(__name__)

XMLNS_ATTRIBUTE = "xmlns"


def _secure_parser() -> etree.XMLParser:
    """Create a parser that never resolves external entities or hits the network."""
    return etree.XMLParser(resolve_entities=False, no_network=True)


class XmlElement:
    """Read-only view over an lxml element.

    Attributes:
        element: The wrapped lxml element

    Example:
        >>> root = XmlElement.from_string('<data id="form1"><instanceID>uuid:1</instanceID></data>')
        >>> root.get_attribute_value("id")
        'form1'
        >>> root.find_element("instanceID").maybe_value()
        'uuid:1'
    """

    def __init__(self, element: etree._Element) -> None:
        self.element = element

    @classmethod
    def from_string(cls, xml: Union[str, bytes]) -> "XmlElement":
        """Parse XML content and wrap its root element.

        Args:
            xml: XML document as text or bytes

        Returns:
            XmlElement bound to the document root

        Raises:
            SubmissionParseError: If the XML is not well-formed
        """
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        try:
            return cls(etree.fromstring(xml, parser=_secure_parser()))
        except etree.XMLSyntaxError as e:
            error_msg = (
                f"Malformed XML at line {e.lineno}: {e.msg}. "
                f"Check for unclosed tags or invalid characters."
            )
            logger.debug(error_msg)
            raise SubmissionParseError(error_msg) from e

    @classmethod
    def from_file(cls, path: Path) -> "XmlElement":
        """Parse an XML file and wrap its root element.

        Args:
            path: Path to the XML file

        Returns:
            XmlElement bound to the document root

        Raises:
            SubmissionParseError: If the file is missing, unreadable or malformed
        """
        try:
            content = path.read_bytes()
        except FileNotFoundError as e:
            raise SubmissionParseError(
                f"Submission file not found: {path}", path=path
            ) from e
        except PermissionError as e:
            raise SubmissionParseError(
                f"Permission denied reading submission file: {path}", path=path
            ) from e
        except OSError as e:
            raise SubmissionParseError(
                f"Failed to read submission file: {path}. Error: {e}", path=path
            ) from e

        try:
            root = etree.fromstring(content, parser=_secure_parser())
        except etree.XMLSyntaxError as e:
            raise SubmissionParseError(
                f"Malformed XML in {path} at line {e.lineno}: {e.msg}", path=path
            ) from e

        logger.debug(f"Parsed submission document: {path}")
        return cls(root)

    @property
    def name(self) -> str:
        """Local name of the element, without namespace."""
        return etree.QName(self.element).localname

    def get_attribute_value(self, name: str) -> Optional[str]:
        """Return the value of a namespace-less attribute.

        lxml does not expose namespace declarations as attributes, so
        "xmlns" resolves to the default namespace declared on this element.
        """
        if name == XMLNS_ATTRIBUTE:
            return self._declared_default_namespace()
        return self.element.get(name)

    def find_element(self, name: str) -> Optional["XmlElement"]:
        """Return the first direct child with the given local name."""
        for child in self._children(name):
            return child
        return None

    def find_elements(self, name: str) -> List["XmlElement"]:
        """Return all direct children with the given local name, in document order."""
        return list(self._children(name))

    def has_children(self) -> bool:
        return any(isinstance(child.tag, str) for child in self.element)

    def maybe_value(self) -> Optional[str]:
        """Return the element's own text, or None if it is missing or blank."""
        text = self.element.text
        if text is None:
            return None
        text = text.strip()
        return text or None

    def _children(self, name: str) -> Iterator["XmlElement"]:
        for child in self.element:
            # Comments and processing instructions have non-string tags
            if not isinstance(child.tag, str):
                continue
            if etree.QName(child).localname == name:
                yield XmlElement(child)

    def _declared_default_namespace(self) -> Optional[str]:
        namespace = self.element.nsmap.get(None)
        if namespace is None:
            return None
        parent = self.element.getparent()
        if parent is not None and parent.nsmap.get(None) == namespace:
            # Inherited, not declared here
            return None
        return namespace

    def __repr__(self) -> str:
        return f"XmlElement({self.name!r})"
