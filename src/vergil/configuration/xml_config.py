"""Configuration stored as the leaves of one section of an XML file."""

from pathlib import Path
from types import TracebackType
from typing import Any, Self
from ..exceptions_warnings import MalformedConfig
from ..globals import DEFAULT_XML_CONFIG_NAME
from ..log import get_logger
from ..utils import copy_doc
from ..xml.document import XMLFile
from ..xml.nodes import XMLLeaf, XMLSection
from .config import Config

logger = get_logger(__name__)


class XMLConfig(Config):
    """Config whose properties are the direct children of a parent section, e.g.

    <config>
        <debug>true</debug>
        <server>localhost</server>
    </config>
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_XML_CONFIG_NAME,
        parent_node: str | None = None,
        autosave: bool = True,
    ) -> None:
        """
        Args:
            path (str | Path, optional): Path of the XML file. Will be created if it
                doesn't exist. Defaults to "Config.xml" (in the working directory).
            parent_node (str | None, optional): Key of the section holding the
                properties. If None, the first top-level section is used.
                Defaults to None.
            autosave (bool, optional): Whether to write the file after every change.
                Defaults to True.

        Raises:
            MalformedDocument: If the file doesn't contain valid XML.
            MalformedConfig: If the parent section doesn't exist.
        """
        self.path = Path(path)
        self.parent_node = parent_node
        self.autosave = autosave
        self.document = XMLFile(self.path)
        if parent_node is not None and not self.document.children:
            self.document.add_section(parent_node)
            logger.debug(f"Added section '{parent_node}' to empty config {self.path}.")
            if autosave:
                self.document.save()
        self._parent()
        self._load_debug()

    def _parent(self) -> XMLSection:
        """Resolve the section holding the properties.

        Raises:
            MalformedConfig: If the section doesn't exist.
        """
        if self.parent_node is None:
            if sections := self.document.get_sections():
                return sections[0]
            raise MalformedConfig(f"No config section found in {self.path}.")
        if (section := self.document.find_section(self.parent_node)) is None:
            raise MalformedConfig(
                f"Config section '{self.parent_node}' not found in {self.path}."
            )
        return section

    @property
    def section(self) -> XMLSection:
        """The section holding the properties."""
        return self._parent()

    def get(self, key: str) -> str | None:
        return self._parent().get(key, None)

    def set(self, key: str, value: Any) -> None:
        parent = self._parent()
        leaf = XMLLeaf(key, value)
        for index, child in enumerate(parent.children):
            if child.matches(key):
                if isinstance(child, XMLLeaf):
                    child.value = leaf.value
                else:
                    parent.children[index] = leaf
                break
        else:
            parent.add_child(leaf)

        if self.autosave:
            self.save()

    def delete_property(self, key: str) -> None:
        if self._parent().remove_child(key) and self.autosave:
            self.save()

    @copy_doc(XMLFile.save, annotations=True)
    def save(self, path: str | Path | None = None) -> None:
        self.document.save(path)

    def reload(self) -> None:
        """Discard unsaved changes and read the file again.

        Raises:
            MalformedDocument: If the file doesn't contain valid XML anymore.
            MalformedConfig: If the parent section doesn't exist anymore.
        """
        self.document = XMLFile(self.path)
        self._parent()
        self._load_debug()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.save()

    def __repr__(self) -> str:
        return f"XMLConfig({str(self.path)!r}, parent_node={self.parent_node!r})"
