"""Formatting helpers turning raw telemetry numbers into display strings."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Protocol

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal, get_group_symbol

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
_BYTE_FACTOR = 1024

DEFAULT_LOCALE = "en-US"

NAN_TEXT = "NaN"
INFINITY_TEXT = "∞"


class NumberFormatter(Protocol):
    """Capability rendering integers for display."""

    def format_integer(self, value: float) -> str:  # pragma: no cover - interface definition
        ...


def resolve_locale(tag: str | None) -> Locale:
    """Parse a BCP 47 or POSIX locale tag, falling back to the language and then ``en-US``."""

    text = (tag or DEFAULT_LOCALE).replace("-", "_")
    for candidate in (text, text.split("_", 1)[0], DEFAULT_LOCALE.replace("-", "_")):
        try:
            return Locale.parse(candidate)
        except (ValueError, UnknownLocaleError):
            continue
    raise LookupError(f"no usable locale for {tag!r}")  # pragma: no cover - en_US ships with Babel


def _round_half_up(value: float) -> int:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(value)) + 8)
        return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return NAN_TEXT
    return f"-{INFINITY_TEXT}" if value < 0 else INFINITY_TEXT


class LocaleNumberFormatter:
    """Integer formatter following the CLDR decimal pattern of ``locale``.

    Values are rounded to zero fractional digits, halves away from zero. NaN
    and infinities render as ``NaN`` and ``∞``.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale or DEFAULT_LOCALE
        self._locale = resolve_locale(self.locale)

    @property
    def separator(self) -> str:
        return get_group_symbol(self._locale)

    def format_integer(self, value: float) -> str:
        if isinstance(value, float) and not math.isfinite(value):
            return _non_finite_text(value)
        rounded = _round_half_up(value)
        # Babel quantizes under the active decimal context.
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(str(abs(rounded))) + 8)
            return format_decimal(rounded, locale=self._locale)

    def __repr__(self) -> str:
        return f"LocaleNumberFormatter({self.locale!r})"


def format_bytes(num_bytes: float, precision: int = 2) -> str:
    """Scale ``num_bytes`` to the largest whole binary unit.

    >>> format_bytes(1048576, 2)
    '1.00 MB'
    >>> format_bytes(0, 2)
    '0 B'
    """

    if isinstance(num_bytes, float) and math.isnan(num_bytes):
        return NAN_TEXT
    if num_bytes < 0:
        raise ValueError("byte count must be non-negative")
    if math.isinf(num_bytes):
        return f"{INFINITY_TEXT} {BYTE_UNITS[-1]}"
    digits = max(int(precision), 0)
    if num_bytes < _BYTE_FACTOR:
        return f"{int(num_bytes)} B"
    index = min(int(math.log(num_bytes, _BYTE_FACTOR)), len(BYTE_UNITS) - 1)
    # log() can land either side of an exact power of the factor
    if index + 1 < len(BYTE_UNITS) and num_bytes >= _BYTE_FACTOR ** (index + 1):
        index += 1
    elif num_bytes < _BYTE_FACTOR**index:
        index -= 1
    scaled = num_bytes / _BYTE_FACTOR**index
    return f"{scaled:.{digits}f} {BYTE_UNITS[index]}"


def format_integer(value: float, locale: str = DEFAULT_LOCALE) -> str:
    return LocaleNumberFormatter(locale).format_integer(value)


def round_to_millis(seconds: float) -> int:
    """Convert a duration in seconds to whole milliseconds, rounding up."""

    return math.ceil(seconds * 1000)


def ceil_millis(milliseconds: float) -> int:
    return math.ceil(milliseconds)


def plain_number(value: float) -> str:
    """Render a number without grouping; integral floats drop the ``.0``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "BYTE_UNITS",
    "DEFAULT_LOCALE",
    "INFINITY_TEXT",
    "LocaleNumberFormatter",
    "NAN_TEXT",
    "NumberFormatter",
    "ceil_millis",
    "format_bytes",
    "format_integer",
    "plain_number",
    "resolve_locale",
    "round_to_millis",
]
