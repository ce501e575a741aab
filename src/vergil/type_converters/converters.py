"""Converter functions and the registry that selects them by type."""

from enum import Enum
from functools import wraps
from typing import Any, Callable
import re
from ..exceptions_warnings import ConversionError

type Numerics = int | float
"""Possible numeric conversion result types."""
type ConvertibleTypes = str | Numerics | bool | Enum
"""Possible conversion result types."""

type TypeConverter[ConvertedType] = Callable[[str], ConvertedType]
"""Type of type converter functions. To create a type converter, use converter decorator."""


class WrongType(Exception):
    """Raised by converter processors if a string doesn't fit the requested type."""


def converter[T](processor: Callable[[str], T]) -> TypeConverter[T]:
    """Create a new TypeConverter.

    Args:
        processor (Callable[[str], T]): Callable to process the string input and
            convert it into an instance of arbitrary type. If conversion is not
            possible, should raise WrongType.

    Returns:
        TypeConverter[T]: TypeConverter that will return the processed input on call
            or raise ConversionError if conversion was not possible.
    """

    @wraps(processor)
    def convert(value: str) -> T:
        """Convert value.

        Args:
            value (str): The value to convert.

        Raises:
            ConversionError: If value could not be converted.

        Returns:
            T: The converted value.
        """
        if not isinstance(value, str):
            raise ConversionError(f"Can only convert strings, not {type(value)}.")
        try:
            return processor(value)
        except (WrongType, ValueError) as e:
            raise ConversionError(
                f"'{value}' could not be converted by {processor.__name__}."
            ) from e

    return convert


def string_converter(strip_whitespace: bool = True) -> TypeConverter[str]:
    """Create a new string converter.

    Args:
        strip_whitespace (bool, optional): Whether to strip leading and trailing
            whitespace from the string. Defaults to True.
    """

    @converter
    def to_string(string: str) -> str:
        return string.strip() if strip_whitespace else string

    return to_string


def bool_converter(
    true: str | tuple[str, ...] = ("1", "true", "yes", "y"),
    false: str | tuple[str, ...] = ("0", "false", "no", "n"),
) -> TypeConverter[bool]:
    """Create a new bool converter.

    Args:
        true (str | tuple[str, ...], optional): String(s) that should be regarded as True.
            Defaults to ("1", "true", "yes", "y").
        false (str | tuple[str, ...], optional): String(s) that should be regarded as False.
            Defaults to ("0", "false", "no", "n").

    Returns:
        TypeConverter[bool]: The bool converter.
    """

    if not isinstance(true, tuple):
        true = (true,)
    true = tuple(i.lower() for i in true)

    if not isinstance(false, tuple):
        false = (false,)
    false = tuple(i.lower() for i in false)

    @converter
    def to_bool(string: str) -> bool:
        """Converts a string to bool.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            bool: The converted boolean.
        """
        string = string.lower().strip()
        if string in true:
            return True
        elif string in false:
            return False
        raise WrongType

    return to_bool


def numeric_converter[
    T: Numerics
](
    numeric_type: type[T],
    decimal_sep: str = ".",
    thousands_sep: str = ",",
) -> TypeConverter[T]:
    """Create a new numeric type converter.

    Args:
        numeric_type (type[Numerics]): The type to convert to (int or float).
        decimal_sep (str, optional): Possible decimal separator inside the string.
            Defaults to ".".
        thousands_sep (str, optional): Possible thousands separator inside the string.
            Defaults to ",".

    Returns:
        TypeConverter[int | float]: The numeric type converter.
    """

    @converter
    def to_num(string: str) -> T:
        """Convert string to numeric type.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            Numerics: Converted string.
        """
        string = string.strip()
        if thousands_sep in string:
            ts = re.escape(thousands_sep)
            # assure that thousands separator is actually separating thousands
            if any(
                len(dec) != 3 for dec in re.findall(rf"(?<={ts})\d+(?={ts}|\D|$)", string)
            ):
                raise WrongType
            string = string.replace(thousands_sep, "")
        if decimal_sep in string:
            ds = re.escape(decimal_sep)
            # assure decimal separator is actually separating the decimal
            if not re.fullmatch(rf"(?=.*{ds})(?!.*{ds}.*{ds}).*", string):
                raise WrongType
            string = string.replace(decimal_sep, ".")
        return numeric_type(string)

    to_num.__name__ = f"to_{numeric_type.__name__}"
    return to_num


def enum_converter[E: Enum](enum_type: type[E], ignore_case: bool = True) -> TypeConverter[E]:
    """Create a new enum converter that resolves member names.

    Args:
        enum_type (type[E]): The enum to parse against.
        ignore_case (bool, optional): Whether member names are matched regardless of
            case. Defaults to True.

    Returns:
        TypeConverter[E]: The enum converter.
    """

    @converter
    def to_enum(string: str) -> E:
        string = string.strip()
        if string in enum_type.__members__:
            return enum_type[string]
        if ignore_case:
            folded = string.casefold()
            for name, member in enum_type.__members__.items():
                if name.casefold() == folded:
                    return member
        raise WrongType

    to_enum.__name__ = f"to_{enum_type.__name__}"
    return to_enum


# default converters
DEFAULT_STRING_CONVERTER = string_converter()
"""String converter with default conversion parameters."""
DEFAULT_BOOL_CONVERTER = bool_converter()
"""Bool converter with default conversion parameters."""
DEFAULT_INT_CONVERTER = numeric_converter(int)
"""Integer converter with default conversion parameters."""
DEFAULT_FLOAT_CONVERTER = numeric_converter(float)
"""Float converter with default conversion parameters."""

_REGISTRY: dict[type, TypeConverter[Any]] = {
    str: DEFAULT_STRING_CONVERTER,
    bool: DEFAULT_BOOL_CONVERTER,
    int: DEFAULT_INT_CONVERTER,
    float: DEFAULT_FLOAT_CONVERTER,
}


def register_converter[T](type_: type[T], type_converter: TypeConverter[T]) -> None:
    """Register a converter for a type (replaces an existing one).

    Args:
        type_ (type[T]): The type to register the converter for.
        type_converter (TypeConverter[T]): Converter producing instances of type_.
    """
    _REGISTRY[type_] = type_converter


def get_converter[T](type_: type[T], ignore_case: bool = True) -> TypeConverter[T]:
    """Get the registered converter of a type.

    Args:
        type_ (type[T]): The type to convert to.
        ignore_case (bool, optional): Only used for enums: whether member names are
            matched regardless of case. Defaults to True.

    Raises:
        TypeError: If no converter exists for type_.

    Returns:
        TypeConverter[T]: The matching converter.
    """
    if type_ in _REGISTRY:
        return _REGISTRY[type_]
    if isinstance(type_, type) and issubclass(type_, Enum):
        return enum_converter(type_, ignore_case=ignore_case)
    raise TypeError(f"No converter registered for {type_}.")


def convert[T](value: str, type_: type[T], ignore_case: bool = True) -> T:
    """Convert a string with the converter registered for type_.

    Args:
        value (str): The string to convert.
        type_ (type[T]): The type to convert to.
        ignore_case (bool, optional): Only used for enums. Defaults to True.

    Raises:
        ConversionError: If value can't be converted.

    Returns:
        T: The converted value.
    """
    return get_converter(type_, ignore_case=ignore_case)(value)


def to_string(value: Any) -> str:
    """Render a value the way it is stored in configurations and documents.

    Args:
        value (Any): The value to render.

    Returns:
        str: bools as "true"/"false", enum members by name, everything else via str.
    """
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case Enum():
            return value.name
        case _:
            return str(value)
