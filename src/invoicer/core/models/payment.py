from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cash:
    label = "Hotově"


@dataclass(frozen=True)
class Card:
    reference: str
    label = "Kartou"


@dataclass(frozen=True)
class BankTransfer:
    variable_symbol: str
    label = "Převodem"


PaymentMethod = Cash | Card | BankTransfer
