from .base import Base
from vergil import ErrorKind, KeyNotFound, MalformedConfig, TextConfig
from vergil.exceptions_warnings import ConversionError
from enum import Enum
from pathlib import Path
import pytest

CONTENT = ("# comment", "debug=false", "timeout=30")


class Level(Enum):
    LOW = 1
    HIGH = 2


class TestTextConfig:

    def test_scenario(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT)

        assert config.get_as("debug", bool) is False
        assert config.get_as("timeout", int) == 30
        assert config.get("missing") is None
        assert config.get_as("missing", int, 5) == 5

        config.set("timeout", "60")
        assert base.lines(config.path) == ["# comment", "debug=false", "timeout=60"]

    @pytest.mark.parametrize("key", ["debug", "DEBUG", " Debug "])
    def test_case_insensitive(self, tmp_path: Path, key: str):
        assert Base(tmp_path).text_config(*CONTENT).get(key) == "false"

    def test_values_and_keys_are_stripped(self, tmp_path: Path):
        config = Base(tmp_path).text_config("server = localhost ", "port= 80")
        assert config.get("server") == "localhost"
        assert config.get_as("port", int) == 80

    def test_first_match(self, tmp_path: Path):
        config = Base(tmp_path).text_config("x=first", "x=second")
        assert config.get("x") == "first"

    def test_empty_value_is_missing(self, tmp_path: Path):
        config = Base(tmp_path).text_config("x=", "x=second")
        assert config.get("x") == "second"
        config = Base(tmp_path).text_config("y=")
        assert config.get("y") is None
        with pytest.raises(KeyNotFound):
            config.get_as("y", str)

    def test_comments_are_ignored(self, tmp_path: Path):
        config = Base(tmp_path).text_config(
            "", "# a=b", " indented=1", "\tindented=2", "real=3"
        )
        assert config.get("a") is None
        assert config.get("indented") is None
        assert config.get_properties() == {"real": "3"}

    def test_get_properties(self, tmp_path: Path):
        config = Base(tmp_path).text_config(*CONTENT, "empty=", "Timeout=90")
        assert config.get_properties() == {"debug": "false", "timeout": "30"}

    def test_get_enum(self, tmp_path: Path):
        config = Base(tmp_path).text_config("level=high")
        assert config.get_enum("level", Level) is Level.HIGH
        assert config.get_enum("missing", Level, Level.LOW) is Level.LOW
        with pytest.raises(ConversionError):
            config.get_enum("level", Level, ignore_case=False)

    def test_try_get(self, tmp_path: Path):
        config = Base(tmp_path).text_config(*CONTENT)
        assert config.try_get("timeout", int).value == 30
        assert config.try_get("debug").value == "false"
        assert config.try_get("missing").error is ErrorKind.KEY_NOT_FOUND
        assert config.try_get("debug", int).error is ErrorKind.CONVERSION_ERROR


class TestValidation:

    @pytest.mark.parametrize(
        "lines,index",
        [
            (("badline",), 0),
            (("# comment", "a=1", "badline"), 2),
            (("a=1", "b=2=3"), 1),
            (("a=1", "", "b;2"), 2),
        ],
    )
    def test_malformed(self, tmp_path: Path, lines: tuple[str, ...], index: int):
        path = Base(tmp_path).export("\n".join(lines))
        with pytest.raises(MalformedConfig) as e:
            TextConfig(path)
        assert f"line {index}" in str(e.value)
        assert str(path) in str(e.value)

    def test_other_delimiter(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config("a:1", "b:x=y", delimiter=":")
        assert config.get("b") == "x=y"
        with pytest.raises(MalformedConfig):
            base.text_config("a=1", delimiter=":")

    @pytest.mark.parametrize("delimiter", ["", "==", "#", " "])
    def test_invalid_delimiter(self, tmp_path: Path, delimiter: str):
        with pytest.raises(ValueError):
            TextConfig(tmp_path / "Config.txt", delimiter=delimiter)

    def test_missing_file_is_created(self, tmp_path: Path):
        path = tmp_path / "sub" / "Config.txt"
        config = TextConfig(path)
        assert path.exists()
        assert config.get_properties() == {}
        assert config.debug is False


class TestModification:

    def test_set_idempotent(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT)
        config.set("k", "v1")
        count = len(base.lines(config.path))
        config.set("k", "v2")
        lines = base.lines(config.path)
        assert len(lines) == count
        assert [line for line in lines if line.startswith("k=")] == ["k=v2"]
        assert config.get("k") == "v2"

    def test_set_replaces_case_insensitive(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT)
        config.set("DEBUG", True)
        assert base.lines(config.path) == ["# comment", "DEBUG=true", "timeout=30"]

    def test_set_replaces_first_only(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config("x=1", "x=2")
        config.set("x", 3)
        assert base.lines(config.path) == ["x=3", "x=2"]

    @pytest.mark.parametrize(
        "value",
        ["a=b", "two\nlines", "two\rlines", "form\x0cfeed", "next\x85line", "line\u2028sep"],
    )
    def test_set_invalid_value(self, tmp_path: Path, value: str):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT)
        with pytest.raises(ValueError):
            config.set("key", value)
        assert base.lines(config.path) == list(CONTENT)

    def test_delete(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT, "x=1", "x=2")
        config.delete_property(" TIMEOUT ")
        config.delete_property("x")
        config.delete_property("missing")
        assert base.lines(config.path) == ["# comment", "debug=false", "x=2"]

    def test_debug(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config("debug=yes")
        assert config.debug is True
        config.debug = False
        assert config.debug is False
        assert base.lines(config.path) == ["debug=false"]

    def test_changes_on_disk_are_seen(self, tmp_path: Path):
        base = Base(tmp_path)
        config = base.text_config(*CONTENT)
        config.path.write_text("timeout=45\n", encoding="utf-8")
        assert config.get_as("timeout", int) == 45

    def test_set_multiline_key(self, tmp_path: Path):
        config = Base(tmp_path).text_config(*CONTENT)
        with pytest.raises(ValueError):
            config.set("a\x0bb", "1")
        assert TextConfig(config.path).get("timeout") == "30"
