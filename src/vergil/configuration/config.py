"""Common interface of the configuration backends."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any
from ..exceptions_warnings import ConversionError, KeyNotFound, MalformedConfig
from ..globals import DEBUG_KEY
from ..result import ErrorKind, Lookup
from ..type_converters.converters import convert
from ..xml.nodes import MISSING


class Config(ABC):
    """String-keyed configuration with typed access. Keys are case-insensitive."""

    _debug: bool = False

    def _load_debug(self) -> None:
        """Cache the debug flag. Backends call this at the end of initialization."""
        self._debug = self.get_as(DEBUG_KEY, bool, False)

    @property
    def debug(self) -> bool:
        """The program's debug state, backed by the "debug" property."""
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self.set(DEBUG_KEY, value)
        self._debug = value

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get the value of a property.

        Args:
            key (str): The property to get (case-insensitive).

        Returns:
            str | None: The property's value or None if it doesn't exist.
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set a property and persist the change. Properties that don't exist yet are
        appended.

        Args:
            key (str): The property to set.
            value (Any): The new value.
        """

    @abstractmethod
    def delete_property(self, key: str) -> None:
        """Delete a property. Does nothing if the property doesn't exist.

        Args:
            key (str): The property to delete (case-insensitive).
        """

    def get_as[T](self, key: str, type_: type[T], default: T = MISSING) -> T:
        """Get the value of a property converted to type_.

        Args:
            key (str): The property to get (case-insensitive).
            type_ (type[T]): Type to convert the value to.
            default (T, optional): Returned if the property doesn't exist. Conversion
                errors are raised regardless. If not passed, a missing property raises
                KeyNotFound.

        Raises:
            KeyNotFound: If the property doesn't exist and no default was passed.
            ConversionError: If the value can't be converted.

        Returns:
            T: The converted value or default.
        """
        if (value := self.get(key)) is not None:
            return convert(value, type_)
        if default is MISSING:
            raise KeyNotFound(f"Property {key} not found.")
        return default

    def get_enum[E: Enum](
        self,
        key: str,
        enum_type: type[E],
        default: E = MISSING,
        ignore_case: bool = True,
    ) -> E:
        """Get the value of a property as member of enum_type (by member name).

        Args:
            key (str): The property to get (case-insensitive).
            enum_type (type[E]): The enum to parse against.
            default (E, optional): Returned if the property doesn't exist. If not
                passed, a missing property raises KeyNotFound.
            ignore_case (bool, optional): Whether to match member names regardless of
                case. Defaults to True.

        Raises:
            KeyNotFound: If the property doesn't exist and no default was passed.
            ConversionError: If the value is no member name of enum_type.

        Returns:
            E: The enum member or default.
        """
        if (value := self.get(key)) is not None:
            return convert(value, enum_type, ignore_case=ignore_case)
        if default is MISSING:
            raise KeyNotFound(f"Property {key} not found.")
        return default

    def try_get[T](self, key: str, type_: type[T] = str) -> Lookup[T]:
        """Look up a property without raising for missing, malformed or unresolvable
        values.

        Args:
            key (str): The property to get (case-insensitive).
            type_ (type[T], optional): Type to convert the value to. Defaults to str.

        Returns:
            Lookup[T]: The value or the kind of error that occurred.
        """
        try:
            value = self.get(key)
            if value is None:
                return Lookup(
                    key,
                    error=ErrorKind.KEY_NOT_FOUND,
                    message=f"Property {key} not found.",
                )
            return Lookup(key, value=convert(value, type_))
        except (ConversionError, MalformedConfig) as e:
            return Lookup(key, error=e.kind, message=str(e))
