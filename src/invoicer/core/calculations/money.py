"""
Currency formatting for invoice amounts.
Amounts stay `Decimal` until this point; rounding is ROUND_HALF_UP to the currency exponent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from invoicer.core.errors import InvalidAmount
from invoicer.core.models.currency import Currency


@dataclass(frozen=True)
class MoneyFormat:
    symbol: str
    exponent: int = 2
    decimal_separator: str = ","
    thousand_separator: str = " "
    generic: str = "{v} {s}"
    positive: str = "{v} {s}"
    zero: str = "{v} {s}"
    negative: str = "-{v} {s}"


_PREFIXED = {
    "generic": "{s}{v}",
    "positive": "{s}{v}",
    "zero": "{s}{v}",
    "negative": "-{s}{v}",
}

_OVERRIDES: dict[Currency, dict[str, str]] = {
    Currency.EUR: {**_PREFIXED, "decimal_separator": ",", "thousand_separator": "."},
    Currency.USD: {**_PREFIXED, "decimal_separator": ".", "thousand_separator": ","},
}


def money_format(currency: Currency) -> MoneyFormat:
    base = MoneyFormat(symbol=currency.symbol, exponent=currency.exponent)
    override = _OVERRIDES.get(currency)
    if override:
        return replace(base, **override)
    return base


def round_amount(amount: Decimal, exponent: int) -> Decimal:
    if not isinstance(amount, Decimal):
        raise InvalidAmount(f"Amount must be Decimal, got {type(amount).__name__}")
    if not amount.is_finite():
        raise InvalidAmount(f"Amount is not finite: {amount}")
    try:
        return amount.quantize(Decimal(1).scaleb(-exponent), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Amount cannot be rounded to {exponent} places: {amount}") from exc


def _group_thousands(digits: str, separator: str) -> str:
    groups: list[str] = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_number(amount: Decimal, fmt: MoneyFormat) -> str:
    """Absolute value with separators, no symbol."""
    rounded = round_amount(amount, fmt.exponent)
    text = format(abs(rounded), "f")
    integer, _, fraction = text.partition(".")
    grouped = _group_thousands(integer, fmt.thousand_separator)
    if fmt.exponent > 0:
        return f"{grouped}{fmt.decimal_separator}{fraction}"
    return grouped


def format_money(amount: Decimal, currency: Currency) -> str:
    """
    Format `amount` in `currency`.
    The template is picked on the rounded value, so -0.001 CZK renders as "0,00 Kč".
    """
    fmt = money_format(currency)
    rounded = round_amount(amount, fmt.exponent)
    value = format_number(rounded, fmt)
    if rounded > 0:
        template = fmt.positive
    elif rounded < 0:
        template = fmt.negative
    else:
        template = fmt.zero
    return template.format(v=value, s=fmt.symbol)


def format_plain_amount(amount: Decimal, currency: Currency) -> str:
    """Machine form for payment payloads: dot separator, no grouping ("525.00")."""
    return format(round_amount(amount, currency.exponent), "f")
