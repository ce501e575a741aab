from vergil import (
    ConversionError,
    ErrorKind,
    KeyNotFound,
    XMLFile,
    XMLLeaf,
    XMLSection,
)
from enum import Enum
import pytest

key_not_found = pytest.raises(KeyNotFound)
conversion_error = pytest.raises(ConversionError)


class Mode(Enum):
    FAST = 1
    Safe = 2


def settings() -> XMLSection:
    section = XMLSection("settings")
    section.add_child("debug", True)
    section.add_child("timeout", "1,500")
    section.add_child("ratio", "0.25")
    section.add_child("mode", "fast")
    section.add_child("x", "first")
    section.add_child("x", "second")
    section.add_child("empty")
    section.add_section("nested").add_child("debug", "nested value")
    return section


class TestLeaf:

    def test_value_is_stringified(self):
        assert XMLLeaf("a", 5).value == "5"
        assert XMLLeaf("a", False).value == "false"
        assert XMLLeaf("a", Mode.FAST).value == "FAST"
        assert XMLLeaf("a").value == ""

    def test_has_value(self):
        assert XMLLeaf("a", "b").has_value()
        assert not XMLLeaf("a").has_value()

    def test_get_as(self):
        assert XMLLeaf("a", " 42 ").get_as(int) == 42
        with conversion_error:
            XMLLeaf("a", "b").get_as(int)

    @pytest.mark.parametrize("key", ["", "   "])
    def test_empty_key(self, key: str):
        with pytest.raises(ValueError):
            XMLLeaf(key)

    def test_attributes_case_insensitive(self):
        leaf = XMLLeaf("a", "b", {"Name": "value"})
        assert leaf.get_attributes() == {"name": "value"}
        assert leaf.get_attribute("NAME") == "value"
        assert leaf.get_attribute("missing") is None
        leaf.set_attribute("Count", 3)
        assert leaf.get_attribute("count") == "3"


class TestSectionLookup:

    @pytest.mark.parametrize("key", ["debug", "Debug", "DEBUG", " debug "])
    def test_case_insensitive(self, key: str):
        assert settings().get(key) == "true"

    def test_first_match(self):
        section = settings()
        assert section.get("x") == "first"
        assert [c.value for c in section.get_children("X")] == ["first", "second"]

    def test_get_default(self):
        section = settings()
        assert section.get("missing") == ""
        assert section.get("missing", None) is None
        # empty leaves and sections have no value
        assert section.get("empty", "default") == "default"
        assert section.get("nested", "default") == "default"

    @pytest.mark.parametrize(
        "key,type_,result",
        [
            ("debug", bool, True),
            ("timeout", int, 1500),
            ("ratio", float, 0.25),
            ("x", str, "first"),
            ("mode", Mode, Mode.FAST),
        ],
    )
    def test_get_as(self, key: str, type_: type, result):
        assert settings().get_as(key, type_) == result

    def test_get_as_missing(self):
        section = settings()
        with key_not_found:
            section.get_as("missing", int)
        with key_not_found:
            section.get_as("empty", int)
        assert section.get_as("missing", int, 5) == 5

    def test_conversion_error_ignores_default(self):
        with conversion_error:
            settings().get_as("x", int, 5)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            settings().get_as("x", complex)

    def test_get_enum(self):
        section = settings()
        section.add_child("other", "SAFE")
        assert section.get_enum("mode", Mode) is Mode.FAST
        assert section.get_enum("other", Mode) is Mode.Safe
        assert section.get_enum("missing", Mode, Mode.Safe) is Mode.Safe
        with conversion_error:
            section.get_enum("other", Mode, ignore_case=False)
        with key_not_found:
            section.get_enum("missing", Mode)

    def test_try_get(self):
        section = settings()
        found = section.try_get("timeout", int)
        assert found.ok and found.value == 1500
        missing = section.try_get("missing", int)
        assert missing.error is ErrorKind.KEY_NOT_FOUND
        assert missing.value_or(7) == 7
        wrong = section.try_get("x", int)
        assert wrong.error is ErrorKind.CONVERSION_ERROR
        with conversion_error:
            wrong.unwrap()
        with key_not_found:
            missing.unwrap()

    def test_has_value(self):
        section = settings()
        assert section.has_value("debug")
        assert not section.has_value("empty")
        assert not section.has_value("nested")
        assert not section.has_value()


class TestSectionStructure:

    def test_get_sections(self):
        root = XMLSection("root")
        for name, kind in (("a", "db"), ("b", "mail"), ("c", "DB")):
            job = root.add_section("job")
            job.add_child("name", name)
            job.add_child("kind", kind)
        root.add_section("other")
        root.add_child("job", "leaf")

        assert len(root.get_sections()) == 4
        assert len(root.get_sections("JOB")) == 3
        assert [s.get("name") for s in root.get_sections("kind", "db")] == ["a", "c"]
        assert root.get_sections("missing", "db") == []
        assert root.has_sections("other")
        assert not root.has_sections("missing")

    def test_find_node_depth_first(self):
        root = XMLSection("root")
        first = root.add_section("first")
        first.add_section("deep").add_child("target", "deep")
        root.add_child("target", "shallow")
        assert root.find_node("target").value == "deep"
        assert root.find_node("missing") is None

    def test_find_section_prefers_direct_children(self):
        root = XMLSection("root")
        root.add_section("outer").add_section("target").add_child("level", 2)
        root.add_section("target").add_child("level", 1)
        assert root.find_section("TARGET").get("level") == "1"
        assert root.find_section("missing") is None

    def test_find_empty_section(self):
        root = XMLSection("root")
        empty = root.add_section("outer").add_section("empty")
        assert root.find_section("empty") is empty
        assert root.find_node("empty") is empty

    def test_remove_child(self):
        section = settings()
        assert section.remove_child("X")
        assert section.get("x") == "second"
        leaf = section.get_children("x")[0]
        assert section.remove_child(leaf)
        assert section.get_children("x") == []
        assert not section.remove_child("x")

    def test_add_child_node(self):
        section = XMLSection("root")
        leaf = XMLLeaf("a", "b")
        assert section.add_child(leaf) is leaf
        sub = XMLSection("sub")
        assert section.add_section(sub) is sub
        assert section.children == [leaf, sub]

    def test_copy(self):
        section = settings()
        copied = section.copy()
        copied.find_section("nested").add_child("new", "value")
        copied.get_children("debug")[0].value = "false"
        assert section.find_node("new") is None
        assert section.get("debug") == "true"
        assert copied.get("debug") == "false"


class TestDocumentContainer:

    def test_document_level_lookup(self):
        document = XMLFile.from_text(
            "<config><debug>false</debug>"
            "<recipients><name>A</name><name>B</name></recipients></config>"
        )
        names = document.find_section("recipients").get_children("name")
        assert [n.value for n in names] == ["A", "B"]
        assert all(isinstance(n, XMLLeaf) for n in names)
        assert document.find_section("config").get("debug") == "false"
        assert document.find_node("debug").value == "false"
