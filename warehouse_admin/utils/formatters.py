"""
Display formatters for amounts and quantities

Pure functions that turn numeric values (or numeric strings coming back from
the data API) into display strings for tables and summary cards.

Grouping is US-style (comma thousands separator, dot decimal point).
Currency values carry the " VNĐ" suffix.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple, Union

Number = Union[int, float, Decimal, str, None]

CURRENCY_SUFFIX = " VNĐ"


# Leading number of a string; anything after it is ignored
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def _parse_number(value) -> Union[int, float, Decimal]:
    """
    Convert the raw input to a number.

    Strings are read up to the end of their leading number, so "12abc" is 12
    and "1,234" is 1. A string with no leading number yields NaN, which then
    flows into the output unguarded. Signaling NaN decimals count as NaN.
    """
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return math.nan
        return float(match.group(1))
    if isinstance(value, Decimal) and value.is_snan():
        return math.nan
    return value


def _is_integral(value) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return math.isfinite(value) and float(value).is_integer()


def _non_finite_text(value) -> Optional[str]:
    """Text for NaN/infinite values, None for regular numbers"""
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "-Infinity" if number < 0 else "Infinity"
    return None


def _decimal_text(value) -> str:
    """
    Default decimal string of the number, never in exponent notation.

    Floats use their shortest round-tripping representation, so 1234.5 gives
    "1234.5" and 0.1 gives "0.1".
    """
    text = str(value)
    if "e" in text.lower():
        text = format(Decimal(text), "f")
    return text


def _split_decimal(value) -> Tuple[str, int, str]:
    """Split a number into (sign, integer part, original fractional digits)"""
    text = _decimal_text(value)
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    integer_text, _, fraction = text.partition(".")
    return sign, int(integer_text or "0"), fraction


def _group(value: int) -> str:
    return f"{value:,}"


def _format_number(value, group_small_integers: bool = True) -> str:
    number = _parse_number(value)

    special = _non_finite_text(number)
    if special is not None:
        return special

    if _is_integral(number):
        integer = int(number)
        if not group_small_integers and integer < 1000:
            return str(integer)
        return _group(integer)

    sign, integer, fraction = _split_decimal(number)
    return f"{sign}{_group(integer)}.{fraction}"


def format_currency(amount: Number) -> str:
    """
    Format a monetary amount for display.

    Integers are grouped with no fractional digits; other values keep their
    fractional digits exactly as written, without rounding.

    Example:
        >>> format_currency(1234567)
        '1,234,567 VNĐ'
        >>> format_currency(1234.5)
        '1,234.5 VNĐ'
        >>> format_currency(None)
        '0 VNĐ'
    """
    if amount is None:
        return "0" + CURRENCY_SUFFIX
    return _format_number(amount) + CURRENCY_SUFFIX


def format_quantity(quantity: Number) -> str:
    """
    Format a stock quantity for display.

    Same rules as format_currency without the suffix, except that integers
    below 1000 are not grouped at all.

    Example:
        >>> format_quantity(999)
        '999'
        >>> format_quantity(1000)
        '1,000'
        >>> format_quantity(1234.25)
        '1,234.25'
    """
    if quantity is None:
        return "0"
    return _format_number(quantity, group_small_integers=False)


def _round_half_up(value, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(_decimal_text(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency_input(amount: Number) -> str:
    """Grouped integer amount for total-amount input boxes; empty for zero"""
    if amount is None:
        return ""
    number = _parse_number(amount)
    special = _non_finite_text(number)
    if special is not None:
        return special
    rounded = int(_round_half_up(number, 0))
    if rounded == 0:
        return ""
    return _group(rounded)


def format_price(price: Number) -> str:
    """Unit price rounded to exactly three decimals"""
    if price is None:
        return "0.000" + CURRENCY_SUFFIX
    number = _parse_number(price)
    special = _non_finite_text(number)
    if special is not None:
        return special + CURRENCY_SUFFIX
    return f"{_round_half_up(number, 3):,.3f}{CURRENCY_SUFFIX}"


# Jinja filter name -> formatter
TEMPLATE_FILTERS = {
    "currency": format_currency,
    "quantity": format_quantity,
    "currency_input": format_currency_input,
    "price": format_price,
}
