"""
Value Converters.

A converter transforms a value on its way through a binding: `convert` runs
for model -> control transfers, `convert_back` for control -> model.

Provides:
- ValueConverter: Abstract converter contract
- IdentityConverter, StringFormatConverter, InverseBooleanConverter,
  DoubleToIntegerConverter, EnumToIntConverter: Built-in strategies
- FunctionConverter: Adapter for plain callables
- make_converter: Normalizes a descriptor's converter field into an instance
"""
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache
from numbers import Number
from string import Formatter
from typing import Any, Callable, Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from databinding.core.errors import ConversionError, ConfigurationError

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


class ValueConverter(ABC):
    """
    Bidirectional value transformation strategy.

    Both methods must be pure functions of their inputs and the converter's
    own configuration.

    Args (both methods):
        value: The value read from the binding source.
        target_type: Optional hint for the type the target expects.
        parameter: The descriptor's converter_parameter.
        culture: Locale name, or None for the process locale.
    """

    @abstractmethod
    def convert(self, value: Any, target_type: Optional[type], parameter: Any, culture: Optional[str]) -> Any:
        """Convert a model value for the control."""
        pass

    @abstractmethod
    def convert_back(self, value: Any, target_type: Optional[type], parameter: Any, culture: Optional[str]) -> Any:
        """Convert a control value for the model."""
        pass


class IdentityConverter(ValueConverter):
    """Passes values through unchanged."""

    def convert(self, value, target_type, parameter, culture):
        return value

    def convert_back(self, value, target_type, parameter, culture):
        return value


@lru_cache(maxsize=32)
def _locale(culture: str) -> Locale:
    # Accepts both "de_DE" and "de-DE"
    return Locale.parse(culture.replace("-", "_"))


class _CultureFormatter(Formatter):
    """str.format with the `n` presentation type rendered through babel."""

    def __init__(self, locale: Locale):
        self.locale = locale

    def format_field(self, value, format_spec):
        if format_spec.endswith("n") and isinstance(value, Number) and not isinstance(value, bool):
            return self._format_number(value, format_spec[:-1])
        return super().format_field(value, format_spec)

    def _format_number(self, value, spec: str) -> str:
        if not spec:
            return format_decimal(value, locale=self.locale)
        if spec.startswith(".") and spec[1:].isdigit():
            digits = int(spec[1:])
            pattern = "#,##0" + ("." + "0" * digits if digits else "")
            return format_decimal(value, format=pattern, locale=self.locale)
        raise ValueError(f"Unsupported culture format spec {spec + 'n'!r}")


class StringFormatConverter(ValueConverter):
    """
    Formats values for display with a `str.format` pattern.

    The pattern comes from the converter parameter when it is a string,
    otherwise from `format`. With a culture, the `n` presentation type
    ("{0:n}", "{0:.2n}") formats numbers with that locale's grouping and
    decimal symbols; without one it falls back to `str.format`.

    Formatting is lossy, so `convert_back` always yields None.
    """

    def __init__(self, format: Optional[str] = None, null_text: str = "---"):
        self.format = format
        self.null_text = null_text

    def convert(self, value, target_type, parameter, culture):
        if value is None:
            return self.null_text
        fmt = parameter if isinstance(parameter, str) else self.format
        if fmt is None:
            return value
        try:
            if culture:
                return _CultureFormatter(_locale(culture)).format(fmt, value)
            return fmt.format(value)
        except (ValueError, TypeError, IndexError, KeyError, UnknownLocaleError) as e:
            raise ConversionError(f"Cannot format {value!r} with {fmt!r}: {e}") from e

    def convert_back(self, value, target_type, parameter, culture):
        return None


class InverseBooleanConverter(ValueConverter):
    """Negates booleans in both directions."""

    def convert(self, value, target_type, parameter, culture):
        return self._invert(value)

    def convert_back(self, value, target_type, parameter, culture):
        return self._invert(value)

    @staticmethod
    def _invert(value: Any) -> bool:
        if not isinstance(value, bool):
            raise ConversionError(f"Expected a bool, got {type(value).__name__}: {value!r}")
        return not value


class DoubleToIntegerConverter(ValueConverter):
    """
    Bridges float-valued controls (sliders) and int-valued models.

    `convert_back` rounds half to even and rejects values outside the signed
    32-bit range.
    """

    def convert(self, value, target_type, parameter, culture):
        if value is None:
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConversionError(f"Cannot convert {value!r} to float") from e

    def convert_back(self, value, target_type, parameter, culture):
        if value is None:
            return 0
        try:
            if isinstance(value, str):
                result = int(value.strip())
            else:
                result = round(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise ConversionError(f"Cannot convert {value!r} to int") from e
        if not INT32_MIN <= result <= INT32_MAX:
            raise ConversionError(f"{value!r} is outside the 32-bit integer range")
        return result


class EnumToIntConverter(ValueConverter):
    """
    Maps enum members to their integer values and back.

    The converter parameter must be the Enum class; without it `convert`
    yields 0 and `convert_back` yields None.
    """

    def convert(self, value, target_type, parameter, culture):
        if not _is_enum_type(parameter):
            return 0
        try:
            member = value if isinstance(value, parameter) else parameter(value)
            return int(member.value)
        except (TypeError, ValueError) as e:
            raise ConversionError(f"{value!r} has no integer value in {parameter.__name__}") from e

    def convert_back(self, value, target_type, parameter, culture):
        if not _is_enum_type(parameter):
            return None
        if isinstance(value, parameter):
            return value
        text = str(value).strip()
        if text in parameter.__members__:
            return parameter[text]
        try:
            # Numeric strings resolve by value
            return parameter(int(text))
        except ValueError:
            pass
        raise ConversionError(f"{value!r} is not a member of {parameter.__name__}")


class FunctionConverter(ValueConverter):
    """
    Wraps one-argument callables as a converter.

    Example:
        FunctionConverter(lambda x: f"Count: {x}")
    """

    def __init__(self, convert: Optional[Callable[[Any], Any]] = None,
                 convert_back: Optional[Callable[[Any], Any]] = None):
        self._convert = convert
        self._convert_back = convert_back

    def convert(self, value, target_type, parameter, culture):
        return self._convert(value) if self._convert else value

    def convert_back(self, value, target_type, parameter, culture):
        return self._convert_back(value) if self._convert_back else value


def _is_enum_type(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, Enum)


def make_converter(spec: Any) -> ValueConverter:
    """
    Build the converter instance for one binding.

    Args:
        spec: None (identity), a ValueConverter instance (shared as-is),
              a ValueConverter subclass, or a zero-argument factory.

    Raises:
        ConfigurationError: If the value does not yield a ValueConverter.
    """
    if spec is None:
        return IdentityConverter()
    if isinstance(spec, ValueConverter):
        return spec
    if callable(spec):
        converter = spec()
        if isinstance(converter, ValueConverter):
            return converter
        raise ConfigurationError(
            f"Converter factory {spec!r} returned {type(converter).__name__}, not a ValueConverter"
        )
    raise ConfigurationError(f"Unusable converter spec: {spec!r}")
