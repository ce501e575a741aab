"""Line based configuration files with one key/value pair per line."""

from pathlib import Path
from typing import Any
from ..exceptions_warnings import MalformedConfig
from ..globals import COMMENT_CHARACTERS, DEFAULT_DELIMITER, DEFAULT_TEXT_CONFIG_NAME
from ..log import get_logger
from ..type_converters.converters import to_string
from ..utils import is_significant, keys_match, normalize_key, read_text, touch
from .config import Config

logger = get_logger(__name__)


class TextConfig(Config):
    """Configuration file of "key=value" lines. Lines that are empty or start with a
    space, tab or "#" are comments. Every access reads the file again, every change
    rewrites it.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_TEXT_CONFIG_NAME,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        """
        Args:
            path (str | Path, optional): Path of the config file. Will be created if it
                doesn't exist. Defaults to "Config.txt" (in the working directory).
            delimiter (str, optional): Single character separating keys from values.
                Defaults to "=".

        Raises:
            ValueError: If delimiter is not a single, non-comment character.
            MalformedConfig: If any line of the file is not a comment and not
                a valid key/value pair.
        """
        if len(delimiter) != 1 or delimiter in COMMENT_CHARACTERS:
            raise ValueError(
                f"'{delimiter}' is not a valid delimiter (single character that doesn't"
                " start a comment)."
            )
        self.delimiter = delimiter
        self.path = Path(path)
        if touch(self.path):
            logger.debug(f"Created empty config file {self.path}.")
        self._validate()
        self._load_debug()

    def _read_lines(self) -> list[str]:
        return read_text(self.path).splitlines()

    def _write_lines(self, lines: list[str]) -> None:
        self.path.write_text(
            "".join(f"{line}\n" for line in lines), encoding="utf-8"
        )

    def _validate(self) -> None:
        """Verify the whole file before any access.

        Raises:
            MalformedConfig: At the first line that is significant but no valid
                key/value pair.
        """
        for index, line in enumerate(self._read_lines()):
            if not is_significant(line):
                continue
            if self.delimiter not in line:
                problem = f"Key/value pairs should be delimited with '{self.delimiter}'."
            elif len(line.split(self.delimiter)) != 2:
                problem = "Config files should be written with key/value pairs."
            else:
                continue
            raise MalformedConfig(
                f"Incorrect format at line {index} in {self.path}: {problem}"
            )

    def _index_of(self, lines: list[str], key: str) -> int | None:
        """Index of the first significant line whose key matches key."""
        return next(
            (
                index
                for index, line in enumerate(lines)
                if is_significant(line)
                and keys_match(line.split(self.delimiter)[0], key)
            ),
            None,
        )

    def get(self, key: str) -> str | None:
        for line in self._read_lines():
            if not is_significant(line) or self.delimiter not in line:
                continue
            line_key, value = line.split(self.delimiter)[:2]
            if keys_match(line_key, key) and value:
                return value.strip()
        return None

    def get_properties(self) -> dict[str, str]:
        """Get all key/value pairs that have a value, in file order.

        Returns:
            dict[str, str]: Stripped keys and values.
        """
        properties: dict[str, str] = {}
        seen: set[str] = set()
        for line in self._read_lines():
            if not is_significant(line) or self.delimiter not in line:
                continue
            line_key, value = line.split(self.delimiter)[:2]
            # first match wins, like get
            if value and (normalized := normalize_key(line_key)) not in seen:
                seen.add(normalized)
                properties[line_key.strip()] = value.strip()
        return properties

    def set(self, key: str, value: Any) -> None:
        key = key.strip()
        value = to_string(value)
        if self.delimiter in value or self.delimiter in key:
            raise ValueError(
                f"Neither key nor value may contain the delimiter '{self.delimiter}'."
            )
        # must stay one line for _read_lines
        if any("".join(part.splitlines()) != part for part in (key, value)):
            raise ValueError("Neither key nor value may span multiple lines.")

        lines = self._read_lines()
        new_line = f"{key}{self.delimiter}{value}"
        if (index := self._index_of(lines, key)) is None:
            lines.append(new_line)
        else:
            lines[index] = new_line
        self._write_lines(lines)

    def delete_property(self, key: str) -> None:
        lines = self._read_lines()
        if (index := self._index_of(lines, key)) is not None:
            del lines[index]
            self._write_lines(lines)

    def __repr__(self) -> str:
        return f"TextConfig({str(self.path)!r}, delimiter={self.delimiter!r})"
