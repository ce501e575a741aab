"""vergil-specific exceptions and warnings"""

from .result import ErrorKind

# ---------- #
# Exceptions
# ---------- #


class VergilError(Exception):
    """Base class of all errors raised by vergil."""

    kind: ErrorKind


class KeyNotFound(VergilError, KeyError):
    """Raised when a key was requested without a default but doesn't resolve to a value."""

    kind = ErrorKind.KEY_NOT_FOUND

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class ConversionError(VergilError, ValueError):
    """Raised when a value exists but can't be converted to the requested type."""

    kind = ErrorKind.CONVERSION_ERROR


class MalformedConfig(VergilError):
    """Raised when a configuration file or its designated parent section is invalid."""

    kind = ErrorKind.MALFORMED_CONFIG


class MalformedDocument(MalformedConfig):
    """Raised when XML text could not be parsed."""


# ---------- #
# Warnings
# ---------- #


class VergilWarning(Warning):
    """Parent of all vergil warnings."""


class XMLAttributeWarning(VergilWarning):
    """Raised when attribute names of one element collide after lower-casing."""
