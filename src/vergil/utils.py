from pathlib import Path
from typing import Callable
from charset_normalizer import from_bytes as read_from_bytes
from .exceptions_warnings import MalformedConfig
from .globals import COMMENT_CHARACTERS


def normalize_key(key: str) -> str:
    """Normalize a key for comparison. Every key lookup goes through this.

    Args:
        key (str): The key to normalize.

    Returns:
        str: The stripped, case-folded key.
    """
    return key.strip().casefold()


def keys_match(key: str, other: str) -> bool:
    """Check whether two keys are equal regardless of case and surrounding whitespace.

    Args:
        key (str): The first key.
        other (str): The second key.

    Returns:
        bool
    """
    return normalize_key(key) == normalize_key(other)


def is_significant(line: str) -> bool:
    """Check whether a line of a text config contains meaningful data.

    Args:
        line (str): The line to check.

    Returns:
        bool: False if the line is empty or starts with whitespace or a comment
            character, else True.
    """
    return bool(line) and line[0] not in COMMENT_CHARACTERS


def read_text(path: str | Path) -> str:
    """Read a file's content, detecting its encoding.

    Args:
        path (str | Path): The file to read.

    Raises:
        MalformedConfig: If the content can't be decoded as text.

    Returns:
        str: The decoded content without byte order mark.
    """
    raw = Path(path).read_bytes()
    if not raw:
        return ""
    if (best := read_from_bytes(raw).best()) is None:
        raise MalformedConfig(f"{path} does not contain decodable text.")
    return str(best).removeprefix("\ufeff")


def touch(path: str | Path) -> bool:
    """Create an empty file (and missing parent directories) if it doesn't exist.

    Args:
        path (str | Path): The file to create.

    Returns:
        bool: Whether the file was created.
    """
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return True


def copy_doc[
    **P, T
](doc_source: Callable[..., T], annotations: bool = False) -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator to copy the docstring of doc_source to another.
    Inspired by Trevor (stackoverflow.com/users/13905088/trevor)
    from: stackoverflow.com/questions/68901049/
        copying-the-docstring-of-function-onto-another-function-by-name

    Args:
        doc_source (Callable): The source function to copy the docstring from.
        annotations (bool, optional): Whether to also copy annotations. Defaults to False.

    Returns:
        Callable: The decorated function.

    """

    def wrapped(doc_target: Callable[P, T]) -> Callable[P, T]:
        doc_target.__doc__ = doc_source.__doc__
        if annotations:
            doc_target.__annotations__ = doc_source.__annotations__
        return doc_target

    return wrapped
