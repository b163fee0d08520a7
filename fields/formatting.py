"""Display formatting for resolved field values.

Two independent rule sets live here:

- `format_value` formats by the *widget title* (used when rendering widgets).
- `format_field_value` formats by the *field format* inferred from the field
  name when the catalog is built (used by field selection previews).

The two rule sets are evaluated separately and may disagree for the same
field; widgets render with the title rules.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from .dto import FieldDescriptor
from .nodes import is_number

CURRENCY_TITLE_KEYWORDS: Final[tuple[str, ...]] = ("revenue", "expense", "sales")
PERCENTAGE_TITLE_KEYWORDS: Final[tuple[str, ...]] = ("rate", "percentage")

_PLAIN_MAX_FRACTION_DIGITS: Final[int] = 3
_DECIMAL_FRACTION_DIGITS: Final[int] = 2


def format_value(value: object, *, widget_title: str) -> object:
    """Format a resolved value for display inside a widget.

    Numbers are formatted by keywords in the widget title, in priority order:
    revenue/expense/sales → whole-dollar currency, rate/percentage → one
    decimal percentage, otherwise a grouped plain number. Non-numeric values
    are returned unchanged.

    Args:
        value: Resolved value.
        widget_title: Title of the widget rendering the value.

    Returns:
        A display string for numbers, otherwise `value` itself.
    """

    if not is_number(value):
        return value
    number = float(value)  # type: ignore[arg-type]
    title = widget_title.lower()
    if any(keyword in title for keyword in CURRENCY_TITLE_KEYWORDS):
        return format_currency(number)
    if any(keyword in title for keyword in PERCENTAGE_TITLE_KEYWORDS):
        return format_percentage(number)
    return format_grouped(number)


def format_field_value(value: object, field: FieldDescriptor) -> object:
    """Format a value using the field's catalog format.

    Args:
        value: Resolved value.
        field: Descriptor whose `format` drives the output.

    Returns:
        A display string for numbers, otherwise `value` itself.
    """

    if not is_number(value):
        return value
    number = float(value)  # type: ignore[arg-type]
    if field.format == "currency":
        return format_currency(number)
    if field.format == "percentage":
        return format_percentage(number)
    if field.format == "integer":
        return format_grouped(number, max_fraction_digits=0)
    if field.format == "decimal":
        return format_grouped(number, max_fraction_digits=_DECIMAL_FRACTION_DIGITS, min_fraction_digits=2)
    return format_grouped(number)


def format_currency(number: float) -> str:
    """Format as US dollars without fraction digits (e.g. `$1,250,000`)."""

    if not math.isfinite(number):
        return _non_finite(number)
    rounded = _round(number, 0)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,f}"


def format_percentage(number: float) -> str:
    """Format with exactly one fraction digit and a percent sign (e.g. `12.5%`)."""

    if not math.isfinite(number):
        return f"{_non_finite(number)}%"
    return f"{_round(number, 1):f}%"


def format_grouped(
    number: float,
    *,
    max_fraction_digits: int = _PLAIN_MAX_FRACTION_DIGITS,
    min_fraction_digits: int = 0,
) -> str:
    """Format with thousands separators and a bounded number of fraction digits.

    Args:
        number: Value to format.
        max_fraction_digits: Maximum fraction digits kept after rounding.
        min_fraction_digits: Trailing zeros are kept up to this many digits.

    Returns:
        Grouped number string such as `5,800` or `215.5`.
    """

    if not math.isfinite(number):
        return _non_finite(number)
    text = f"{_round(number, max_fraction_digits):,f}"
    if "." not in text:
        return text
    whole, fraction = text.split(".", 1)
    fraction = fraction.rstrip("0").ljust(min_fraction_digits, "0")
    return f"{whole}.{fraction}" if fraction else whole


def _round(number: float, digits: int) -> Decimal:
    """Round half away from zero on the exact binary value."""

    exact = Decimal(number)
    exponent = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + digits + 2)
        rounded = exact.quantize(exponent, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return abs(rounded)
    return rounded


def _non_finite(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    return "∞" if number > 0 else "-∞"
