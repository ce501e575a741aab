"""Explicit lookup results, for callers that would rather branch on an error kind
than catch exceptions."""

from dataclasses import dataclass
from enum import Enum, auto


class ErrorKind(Enum):
    """Kinds of errors a lookup can end with."""

    KEY_NOT_FOUND = auto()
    CONVERSION_ERROR = auto()
    MALFORMED_CONFIG = auto()


@dataclass(frozen=True)
class Lookup[T]:
    """Outcome of a lookup: either a value or an error kind with a message.

    Args:
        key (str): The requested key.
        value (T | None): The converted value if the lookup succeeded.
        error (ErrorKind | None): Kind of error if the lookup failed.
        message (str): Error description. Empty on success.
    """

    key: str
    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Get the value or raise the exception that matches the error kind.

        Raises:
            KeyNotFound | ConversionError | MalformedConfig: If the lookup failed.

        Returns:
            T: The looked up value.
        """
        if self.error is None:
            return self.value  # type: ignore[return-value]

        from .exceptions_warnings import ConversionError, KeyNotFound, MalformedConfig

        match self.error:
            case ErrorKind.KEY_NOT_FOUND:
                raise KeyNotFound(self.message)
            case ErrorKind.CONVERSION_ERROR:
                raise ConversionError(self.message)
            case ErrorKind.MALFORMED_CONFIG:
                raise MalformedConfig(self.message)

    def value_or[D](self, default: D) -> T | D:
        """Get the value or default if the lookup failed for any reason."""
        return self.value if self.error is None else default  # type: ignore[return-value]
