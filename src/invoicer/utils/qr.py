"""
Payment QR helper: SPAYD ("Short Payment Descriptor") payload + QR matrix via `qrcode`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from invoicer.core.calculations.money import format_plain_amount
from invoicer.core.models.currency import Currency
from invoicer.core.models.iban import Iban

SPAYD_VERSION = "SPD*1.0"


@dataclass(frozen=True)
class PaymentQr:
    payload: str
    matrix: tuple[tuple[bool, ...], ...]


def _escape(value: str) -> str:
    return str(value).replace("%", "%25").replace("*", "%2A")


def build_spayd(iban: Iban, amount: Decimal, currency: Currency, variable_symbol: str | None = None) -> str:
    fields = [
        ("ACC", iban.electronic),
        ("AM", format_plain_amount(amount, currency)),
        ("CC", currency.code),
    ]
    if variable_symbol:
        fields.append(("X-VS", variable_symbol))
    return "*".join([SPAYD_VERSION] + [f"{key}:{_escape(value)}" for key, value in fields])


def make_qr_matrix(data: str) -> tuple[tuple[bool, ...], ...]:
    qr = qrcode.QRCode(border=0, box_size=1, error_correction=ERROR_CORRECT_M)
    qr.add_data(data)
    qr.make(fit=True)
    matrix: Sequence[Sequence[bool]] = qr.get_matrix()
    return tuple(tuple(bool(cell) for cell in row) for row in matrix)


def build_payment_qr(
    iban: Iban,
    amount: Decimal,
    currency: Currency,
    variable_symbol: str | None = None,
) -> PaymentQr:
    payload = build_spayd(iban, amount, currency, variable_symbol)
    return PaymentQr(payload=payload, matrix=make_qr_matrix(payload))
