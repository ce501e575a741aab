"""XML nodes are either leaves (key and value) or sections (key and child nodes)."""

from enum import Enum
from typing import Any, Iterator, Self, overload
from ..exceptions_warnings import ConversionError, KeyNotFound
from ..result import ErrorKind, Lookup
from ..type_converters.converters import convert, to_string
from ..utils import keys_match


class _Missing:
    """Sentinel type for arguments that weren't passed."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class XMLNode:
    """Common parent of leaves and sections. Holds key and attributes."""

    def __init__(self, key: str, attributes: dict[str, str] | None = None) -> None:
        """
        Args:
            key (str): Name of the node's element.
            attributes (dict[str, str] | None, optional): The node's attributes.
                Names are stored lower-cased. Defaults to None.
        """
        if not key or not key.strip():
            raise ValueError("Node key cannot be empty.")
        self.key = key
        self.attributes: dict[str, str] = {
            name.lower(): value for name, value in (attributes or {}).items()
        }

    @property
    def value(self) -> str:
        return ""

    def has_value(self) -> bool:
        """Check whether this node holds a non-empty value."""
        return len(self.value) > 0

    def get_attributes(self) -> dict[str, str]:
        return self.attributes

    def get_attribute(self, name: str) -> str | None:
        """Get the value of an attribute regardless of the name's case.

        Args:
            name (str): Name of the attribute.

        Returns:
            str | None: The attribute's value or None if it doesn't exist.
        """
        return next(
            (val for attr, val in self.attributes.items() if keys_match(attr, name)),
            None,
        )

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name.lower()] = to_string(value)

    def matches(self, key: str) -> bool:
        """Check whether this node's key equals key (case-insensitive)."""
        return keys_match(self.key, key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


class XMLLeaf(XMLNode):
    """Node holding a value. A leaf with an empty value is inert but valid."""

    def __init__(
        self, key: str, value: Any = "", attributes: dict[str, str] | None = None
    ) -> None:
        """
        Args:
            key (str): Name of the leaf's element.
            value (Any, optional): The leaf's value, stored as string.
                Defaults to "" (no value).
            attributes (dict[str, str] | None, optional): The leaf's attributes.
                Defaults to None.
        """
        super().__init__(key, attributes)
        self.value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = to_string(value)

    def get_as[T](self, type_: type[T]) -> T:
        """Get this leaf's value converted to type_.

        Raises:
            ConversionError: If the value can't be converted.
        """
        return convert(self.value, type_)

    def __repr__(self) -> str:
        return f"XMLLeaf({self.key!r}, {self.value!r})"


type Node = XMLLeaf | XMLSection
"""A node of the XML tree."""


class _NodeContainer:
    """Ordered collection of nodes with lookup and recursive search. Shared by
    sections and documents."""

    children: list[Node]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.children)

    # ----------
    # lookup
    # ----------

    def _first_child(self, key: str) -> Node | None:
        return next((child for child in self.children if child.matches(key)), None)

    def get(self, key: str, default: Any = "") -> Any:
        """Get the value of the first direct child matching key.

        Args:
            key (str): Key of the child node (case-insensitive).
            default (Any, optional): Returned if no child matches or the first
                matching child has no value (e.g. is a section). Defaults to "".

        Returns:
            str | Any: The child's value or default.
        """
        child = self._first_child(key)
        if child is None or not child.value:
            return default
        return child.value

    def has_value(self, key: str) -> bool:
        """Check whether the first direct child matching key has a non-empty value."""
        return len(self.get(key, "")) > 0

    def get_as[T](self, key: str, type_: type[T], default: T = MISSING) -> T:
        """Get the value of a direct child converted to type_.

        Args:
            key (str): Key of the child node (case-insensitive).
            type_ (type[T]): Type to convert the value to (str, int, float, bool, an
                Enum or any registered type).
            default (T, optional): Returned if the key has no value. Conversion errors
                are raised regardless. If not passed, a missing value raises
                KeyNotFound.

        Raises:
            KeyNotFound: If the key has no value and no default was passed.
            ConversionError: If the value can't be converted.

        Returns:
            T: The converted value or default.
        """
        if self.has_value(key):
            return convert(self.get(key), type_)
        if default is MISSING:
            raise KeyNotFound(f"Key {key} not found.")
        return default

    def get_enum[E: Enum](
        self,
        key: str,
        enum_type: type[E],
        default: E = MISSING,
        ignore_case: bool = True,
    ) -> E:
        """Get the value of a direct child as member of enum_type (by member name).

        Args:
            key (str): Key of the child node (case-insensitive).
            enum_type (type[E]): The enum to parse against.
            default (E, optional): Returned if the key has no value. If not passed,
                a missing value raises KeyNotFound.
            ignore_case (bool, optional): Whether to match member names regardless of
                case. Defaults to True.

        Raises:
            KeyNotFound: If the key has no value and no default was passed.
            ConversionError: If the value is no member name of enum_type.

        Returns:
            E: The enum member or default.
        """
        if self.has_value(key):
            return convert(self.get(key), enum_type, ignore_case=ignore_case)
        if default is MISSING:
            raise KeyNotFound(f"Key {key} not found.")
        return default

    def try_get[T](self, key: str, type_: type[T] = str) -> Lookup[T]:
        """Look up a direct child's value without raising for missing or malformed
        values.

        Args:
            key (str): Key of the child node (case-insensitive).
            type_ (type[T], optional): Type to convert the value to. Defaults to str.

        Returns:
            Lookup[T]: The value or the kind of error that occurred.
        """
        if not self.has_value(key):
            return Lookup(key, error=ErrorKind.KEY_NOT_FOUND, message=f"Key {key} not found.")
        try:
            return Lookup(key, value=convert(self.get(key), type_))
        except ConversionError as e:
            return Lookup(key, error=e.kind, message=str(e))

    def get_children(self, key: str | None = None) -> list[Node]:
        """Get the direct children, optionally only those matching key."""
        if key is None:
            return self.children
        return [child for child in self.children if child.matches(key)]

    @overload
    def get_sections(self) -> list["XMLSection"]: ...
    @overload
    def get_sections(self, key: str) -> list["XMLSection"]: ...
    @overload
    def get_sections(self, key: str, value: str) -> list["XMLSection"]: ...

    def get_sections(
        self, key: str | None = None, value: str | None = None
    ) -> list["XMLSection"]:
        """Get the direct children that are sections.

        Args:
            key (str | None, optional): If value is None, only sections with this key
                are returned. Otherwise only sections that contain a direct child with
                this key whose value equals value (case-insensitive). Defaults to None.
            value (str | None, optional): Value the child with key must have.
                Defaults to None.

        Returns:
            list[XMLSection]: The matching sections in document order.
        """
        sections = [child for child in self.children if isinstance(child, XMLSection)]
        if key is None:
            return sections
        if value is None:
            return [section for section in sections if section.matches(key)]
        return [
            section
            for section in sections
            if section.has_value(key)
            and section.get(key).casefold() == to_string(value).casefold()
        ]

    def has_sections(self, key: str | None = None) -> bool:
        return len(self.get_sections() if key is None else self.get_sections(key)) > 0

    def find_node(self, key: str) -> Node | None:
        """Find the first node with key in this container, depth first.

        Every direct child is checked in order. A child that doesn't match but is a
        section is searched before moving on to the next child.

        Args:
            key (str): The key to search for (case-insensitive).

        Returns:
            Node | None: The found node or None.
        """
        for child in self.children:
            if child.matches(key):
                return child
            if isinstance(child, XMLSection) and (found := child.find_node(key)) is not None:
                return found
        return None

    def find_section(self, key: str) -> "XMLSection | None":
        """Find the first-occurring, highest-level section with key. Should be used to
        find unique container sections.

        Direct child sections are checked first, then each child section is searched
        recursively in order.

        Args:
            key (str): The key to search for (case-insensitive).

        Returns:
            XMLSection | None: The found section or None.
        """
        if sections := self.get_sections(key):
            return sections[0]
        for section in self.get_sections():
            if (found := section.find_section(key)) is not None:
                return found
        return None

    # ----------
    # modification
    # ----------

    @overload
    def add_child(self, node: Node, /) -> Node: ...
    @overload
    def add_child(self, key: str, value: Any = "", /) -> XMLLeaf: ...

    def add_child(self, key_or_node: str | Node, value: Any = "", /) -> Node:
        """Append a child node.

        Args:
            key_or_node (str | Node): Either a node to append or the key of a new leaf.
            value (Any, optional): Value of the new leaf. Ignored if a node is passed.
                Defaults to "" (empty leaf).

        Returns:
            Node: The appended node.
        """
        node = (
            key_or_node
            if isinstance(key_or_node, XMLNode)
            else XMLLeaf(key_or_node, value)
        )
        self.children.append(node)
        return node

    def add_section(self, key_or_section: "str | XMLSection") -> "XMLSection":
        """Append a child section.

        Args:
            key_or_section (str | XMLSection): Either a section to append or the key
                of a new, empty section.

        Returns:
            XMLSection: The appended section.
        """
        section = (
            key_or_section
            if isinstance(key_or_section, XMLSection)
            else XMLSection(key_or_section)
        )
        self.children.append(section)
        return section

    def remove_child(self, key_or_node: str | Node) -> bool:
        """Remove the first direct child matching a key, or a specific node.

        Args:
            key_or_node (str | Node): Key (case-insensitive) or the node itself.

        Returns:
            bool: Whether a child was removed.
        """
        for index, child in enumerate(self.children):
            if (
                child is key_or_node
                if isinstance(key_or_node, XMLNode)
                else child.matches(key_or_node)
            ):
                del self.children[index]
                return True
        return False


class XMLSection(XMLNode, _NodeContainer):
    """Node holding ordered child nodes."""

    def __init__(
        self,
        key: str,
        attributes: dict[str, str] | None = None,
        children: list[Node] | None = None,
    ) -> None:
        """
        Args:
            key (str): Name of the section's element.
            attributes (dict[str, str] | None, optional): The section's attributes.
                Defaults to None.
            children (list[Node] | None, optional): The section's children.
                Defaults to None.
        """
        super().__init__(key, attributes)
        self.children: list[Node] = list(children) if children else []

    def has_value(self, key: str | None = None) -> bool:
        """Without key, check this section's own value (always empty). With key, check
        whether the first direct child matching key has a non-empty value."""
        if key is None:
            return False
        return _NodeContainer.has_value(self, key)

    def copy(self) -> Self:
        """Deep copy of this section."""
        return type(self)(
            self.key,
            dict(self.attributes),
            [
                child.copy()
                if isinstance(child, XMLSection)
                else XMLLeaf(child.key, child.value, dict(child.attributes))
                for child in self.children
            ],
        )

    def __repr__(self) -> str:
        return f"XMLSection({self.key!r}, children={len(self.children)})"
