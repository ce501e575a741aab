"""XML documents: read XML text into a tree of leaves and sections and write it back."""

from pathlib import Path
from typing import Self
import re
import warnings
from xml.etree.ElementTree import Element, ParseError, XMLPullParser
from ..exceptions_warnings import MalformedDocument, XMLAttributeWarning
from ..globals import XML_DECLARATION, XML_INDENT, XML_NEWLINE
from ..log import get_logger
from ..utils import read_text, touch
from .nodes import Node, XMLLeaf, XMLNode, XMLSection, _NodeContainer

logger = get_logger(__name__)

_DOCUMENT_TAG = "vergil-document"
"""Element wrapping the top-level nodes while parsing. Documents may hold several."""
_DECLARATION = re.compile(r"^\s*<\?xml\b[^>]*\?>")


class _Frame:
    """An element that has been opened but not yet closed while parsing."""

    __slots__ = ("key", "attributes", "children")

    def __init__(self, element: Element) -> None:
        self.key = _local_name(element.tag)
        self.attributes = _read_attributes(element)
        self.children: list[Node] = []

    def close(self, element: Element) -> Node | None:
        """Turn the frame into a node once its element is complete.

        Args:
            element (Element): The closed element (holds the text content).

        Returns:
            Node | None: A section if the element had child nodes, a leaf if it only
                had text and None if it was empty (empty elements are dropped).
        """
        if self.children:
            # text next to child elements is discarded
            return XMLSection(self.key, self.attributes, self.children)
        if (text := element.text) and text.strip():
            return XMLLeaf(self.key, text, self.attributes)
        return None


def _local_name(name: str) -> str:
    """Strip the "{uri}" namespace part ElementTree puts in front of qualified names."""
    return name.rpartition("}")[2]


def _read_attributes(element: Element) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for name, value in element.attrib.items():
        lowered = _local_name(name).lower()
        if lowered in attributes:
            warnings.warn(
                f"Attribute '{name}' of element '{element.tag}' collides with another"
                f" attribute after lower-casing. Keeping the last one.",
                XMLAttributeWarning,
            )
        attributes[lowered] = value
    return attributes


def _has_text(text: str | None) -> bool:
    return text is not None and len(text.strip()) > 0


def _escape(value: str) -> str:
    return value.replace("&", "&amp;")


def _escape_attribute(value: str) -> str:
    # attributes are written in double quotes
    return _escape(value).replace('"', "&quot;").replace("<", "&lt;")


class XMLFile(_NodeContainer):
    """XML document read into leaves and sections. Best used for shorter files such as
    configurations or small data sets (recipient lists, query definitions, ...).
    """

    def __init__(self, location: str | Path | None = None) -> None:
        """
        Args:
            location (str | Path | None, optional): Path of the XML file. Will be
                created (empty) if it doesn't exist. If None, the document has no
                backing file until saved to an explicit path. Defaults to None.

        Raises:
            MalformedDocument: If the file doesn't contain valid XML.
        """
        self.children: list[Node] = []
        self.location: Path | None = None if location is None else Path(location)
        if self.location is not None:
            if touch(self.location):
                logger.debug(f"Created empty XML file {self.location}.")
            self._load(read_text(self.location))

    @classmethod
    def from_text(cls, xml_text: str) -> Self:
        """Create a document from a string of XML. The document has no backing file.

        Args:
            xml_text (str): The XML text.

        Raises:
            MalformedDocument: If xml_text is not valid XML.

        Returns:
            Self: The new document.
        """
        document = cls()
        document._load(xml_text)
        return document

    def _load(self, xml_text: str) -> None:
        """Parse XML text in a single pass and append the resulting top-level nodes.

        The text may hold any number of top-level elements after an optional XML
        declaration.

        Args:
            xml_text (str): The XML text to parse.

        Raises:
            MalformedDocument: If the text is no valid XML or has text outside of
                elements.
        """
        if not xml_text.strip():
            return

        location = f" in {self.location}" if self.location else ""
        parser = XMLPullParser(events=("start", "end"))
        stack: list[_Frame] = []

        try:
            parser.feed(f"<{_DOCUMENT_TAG}>")
            parser.feed(_DECLARATION.sub("", xml_text, count=1))
            parser.feed(f"</{_DOCUMENT_TAG}>")
            parser.close()
        except ParseError as e:
            raise MalformedDocument(f"Invalid XML{location}: {e}") from e

        for event, element in parser.read_events():
            if event == "start":
                stack.append(_Frame(element))
                continue

            frame = stack.pop()
            if not stack:
                # end of the wrapper, everything below it is a top-level node
                if _has_text(element.text):
                    raise MalformedDocument(f"Text outside of elements{location}.")
                self.children.extend(frame.children)
                continue
            if len(stack) == 1 and _has_text(element.tail):
                raise MalformedDocument(f"Text outside of elements{location}.")

            node = frame.close(element)
            # free the element's subtree, the nodes hold everything needed
            element.clear()
            if node is not None:
                stack[-1].children.append(node)

        logger.debug(
            f"Loaded {len(self.children)} top-level node(s)"
            f"{f' from {self.location}' if self.location else ''}."
        )

    # ----------
    # writing
    # ----------

    def save(self, path: str | Path | None = None) -> None:
        """Write the document to a file, overwriting it completely.

        Args:
            path (str | Path | None, optional): Where to write to. If None, writes to
                the document's location. A document without location adopts path as
                its location. Defaults to None.

        Raises:
            ValueError: If neither path nor a location exists.
        """
        if path is None:
            if self.location is None:
                raise ValueError("Document has no location, a path is required.")
            path = self.location
        path = Path(path)
        if self.location is None:
            self.location = path
        path.write_text(self.to_string(), encoding="utf-8")
        logger.debug(f"Saved XML document to {path}.")

    def to_string(self, whitespace: bool = True) -> str:
        """Convert the document to XML text.

        Args:
            whitespace (bool, optional): Whether to put every element on a new line,
                indented by one tab per level. Defaults to True.

        Returns:
            str: The XML text including XML declaration.
        """
        return XML_DECLARATION + "".join(
            self._write_node(child, 0, whitespace) for child in self.children
        )

    def __str__(self) -> str:
        return self.to_string()

    def _write_node(self, node: XMLNode, indent: int, whitespace: bool) -> str:
        """Convert a node (and its children) to XML text.

        Only "&" is escaped in leaf values. Attribute values also escape '"' and "<".
        """
        line_start = XML_NEWLINE + XML_INDENT * indent if whitespace else ""

        out = f"{line_start}<{node.key}"
        out += "".join(
            f' {name}="{_escape_attribute(value)}"'
            for name, value in node.attributes.items()
        )
        out += ">"
        if isinstance(node, XMLSection):
            out += "".join(
                self._write_node(child, indent + 1, whitespace) for child in node.children
            )
            out += line_start
        else:
            out += _escape(node.value)
        out += f"</{node.key}>"
        return out

    def __repr__(self) -> str:
        return f"XMLFile({str(self.location) if self.location else None!r})"
