"""Type conversion utilities for configuration values."""

import logging
import types
import typing
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Optional

from ..exceptions import ConfigurationConversionError

logger = logging.getLogger(__name__)


class ConversionStrategy(Enum):
    """How a stored value is turned into the requested type."""

    DIRECT = "direct"  # Value already has the target type
    NULLABLE = "nullable"  # Optional[T], empty text means None
    STRING = "string"  # String representation
    ENUM = "enum"  # Case-insensitive member name lookup
    NUMERIC = "numeric"  # int, float, Decimal, bool or target_type(value)


def unwrap_optional(target_type: Any) -> Optional[Any]:
    """Return ``T`` for ``Optional[T]`` / ``T | None``, otherwise None."""
    origin = typing.get_origin(target_type)
    if origin is not typing.Union and origin is not types.UnionType:
        return None

    all_args = typing.get_args(target_type)
    args = [arg for arg in all_args if arg is not type(None)]
    if len(args) != 1 or len(all_args) != 2:
        return None
    return args[0]


class TypeConverter:
    """Converts stored configuration values to a requested Python type."""

    def __init__(self):
        """Initialize the type converter with default converters."""
        self._converters: dict[type, Callable[[Any], Any]] = {
            int: self._convert_int,
            float: self._convert_float,
            bool: self._convert_bool,
            Decimal: self._convert_decimal,
        }

    def resolve_strategy(self, value: Any, target_type: Any) -> ConversionStrategy:
        """Pick the conversion strategy for a value and target type.

        Args:
            value: Stored value
            target_type: Requested type

        Returns:
            Strategy that ``convert`` will apply
        """
        if self._is_instance(value, target_type):
            return ConversionStrategy.DIRECT
        if unwrap_optional(target_type) is not None:
            return ConversionStrategy.NULLABLE
        if target_type is str:
            return ConversionStrategy.STRING
        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return ConversionStrategy.ENUM
        return ConversionStrategy.NUMERIC

    def convert(self, value: Any, target_type: Any, key: Optional[str] = None) -> Any:
        """Convert value to target type.

        Args:
            value: Value to convert
            target_type: Target type, ``Optional[...]`` allowed
            key: Configuration key, used in error messages

        Returns:
            Converted value

        Raises:
            ConfigurationConversionError: If conversion fails
        """
        strategy = self.resolve_strategy(value, target_type)

        if strategy == ConversionStrategy.DIRECT:
            return value

        if strategy == ConversionStrategy.NULLABLE:
            if value is None or self._as_text(value) == "":
                return None
            return self.convert(value, unwrap_optional(target_type), key)

        if value is None:
            raise ConfigurationConversionError(key, value, target_type, "value is None")

        try:
            if strategy == ConversionStrategy.STRING:
                return self._as_text(value)

            if strategy == ConversionStrategy.ENUM:
                return self._convert_enum(value, target_type)

            converter = self._converters.get(target_type)
            if converter:
                return converter(value)

            if not callable(target_type):
                raise TypeError(f"Unsupported target type: {target_type!r}")
            return target_type(value)

        except ConfigurationConversionError:
            raise
        except Exception as e:
            raise ConfigurationConversionError(key, value, target_type, str(e)) from e

    def register_converter(
        self, target_type: type, converter: Callable[[Any], Any]
    ) -> None:
        """Register a custom converter for a numeric-strategy target type.

        Args:
            target_type: Type object
            converter: Function taking the stored value, raising on failure
        """
        self._converters[target_type] = converter
        logger.info(f"Registered custom converter for: {target_type}")

    @staticmethod
    def _is_instance(value: Any, target_type: Any) -> bool:
        if not isinstance(target_type, type):
            return False
        # bool is an int subclass but never stands in for a number here
        if isinstance(value, bool) and target_type is not bool:
            return target_type is object
        return isinstance(value, target_type)

    @staticmethod
    def _as_text(value: Any) -> str:
        if isinstance(value, Enum):
            return value.name
        return str(value)

    def _convert_enum(self, value: Any, enum_type: type[Enum]) -> Enum:
        """Convert value to an enum member by case-insensitive name."""
        name = self._as_text(value).strip()
        for member in enum_type:
            if member.name.lower() == name.lower():
                return member
        raise ValueError(f"'{name}' is not a member of {enum_type.__name__}")

    def _convert_int(self, value: Any) -> int:
        """Convert value to integer."""
        if isinstance(value, bool):
            raise TypeError("Cannot convert bool to int")

        if isinstance(value, int):
            return value

        if isinstance(value, (float, Decimal)):
            if value != int(value):
                raise ValueError(f"Cannot convert {value} to int (not integral)")
            return int(value)

        value = str(value).strip()

        if not value:
            raise ValueError("Cannot convert empty string to int")

        if "." in value:
            raise ValueError(f"Cannot convert '{value}' to int (contains decimal)")

        lower_value = value.lower()
        if lower_value.startswith("0b"):
            return int(value, 2)
        elif lower_value.startswith("0o"):
            return int(value, 8)
        elif lower_value.startswith("0x"):
            return int(value, 16)

        return int(value)

    def _convert_float(self, value: Any) -> float:
        """Convert value to float."""
        if isinstance(value, bool):
            raise TypeError("Cannot convert bool to float")

        if isinstance(value, (int, float, Decimal)):
            return float(value)

        value = str(value).strip()

        if not value:
            raise ValueError("Cannot convert empty string to float")

        # Handle special float values
        lower_value = value.lower()
        if lower_value in ("inf", "infinity", "+inf", "+infinity"):
            return float("inf")
        elif lower_value in ("-inf", "-infinity"):
            return float("-inf")
        elif lower_value == "nan":
            return float("nan")

        return float(value)

    def _convert_decimal(self, value: Any) -> Decimal:
        """Convert value to Decimal."""
        if isinstance(value, bool):
            raise TypeError("Cannot convert bool to Decimal")

        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal")

    def _convert_bool(self, value: Any) -> bool:
        """Convert value to boolean."""
        if isinstance(value, (int, float, Decimal)):
            return bool(value)

        value = str(value).strip().lower()

        if value in ("true", "yes", "on", "1"):
            return True
        elif value in ("false", "no", "off", "0"):
            return False
        else:
            raise ValueError(f"Cannot convert '{value}' to bool")
