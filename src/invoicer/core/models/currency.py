"""
ISO 4217 currencies. Any code known to CLDR is accepted; symbol and minor-unit
exponent come from Babel unless a short invoice symbol is listed below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from babel import numbers

from invoicer.core.errors import UnsupportedCurrency

SYMBOL_LOCALE = "cs_CZ"

# Symbols printed on invoices where the CLDR locale symbol differs or is the bare code
_SYMBOLS: dict[str, str] = {
    "CZK": "Kč",
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "PLN": "zł",
    "HUF": "Ft",
    "CHF": "CHF",
    "JPY": "¥",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
}


@dataclass(frozen=True)
class Currency:
    code: str

    CZK: ClassVar[Currency]
    EUR: ClassVar[Currency]
    USD: ClassVar[Currency]
    GBP: ClassVar[Currency]
    PLN: ClassVar[Currency]
    HUF: ClassVar[Currency]
    CHF: ClassVar[Currency]
    JPY: ClassVar[Currency]
    SEK: ClassVar[Currency]
    NOK: ClassVar[Currency]
    DKK: ClassVar[Currency]

    def __post_init__(self) -> None:
        code = str(self.code or "").strip().upper()
        if len(code) != 3 or not code.isalpha() or not numbers.is_currency(code):
            raise UnsupportedCurrency(f"Unsupported currency: {self.code!r}")
        object.__setattr__(self, "code", code)

    @property
    def symbol(self) -> str:
        return _SYMBOLS.get(self.code) or numbers.get_currency_symbol(self.code, locale=SYMBOL_LOCALE)

    @property
    def exponent(self) -> int:
        return numbers.get_currency_precision(self.code)

    @classmethod
    def parse(cls, code: str) -> Currency:
        """Shared instance for `code` (case and surrounding spaces ignored)."""
        key = str(code or "").strip().upper()
        if key not in _REGISTRY:
            _REGISTRY[key] = cls(key)
        return _REGISTRY[key]

    def __str__(self) -> str:
        return self.code


_REGISTRY: dict[str, Currency] = {}

for _code in _SYMBOLS:
    setattr(Currency, _code, Currency.parse(_code))
