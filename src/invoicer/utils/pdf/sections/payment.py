from __future__ import annotations

from invoicer.core.models.iban import Iban
from invoicer.core.models.payment import BankTransfer, Card, Cash, PaymentMethod
from invoicer.utils.pdf.core.layout_common import BODY_SIZE, LINE_HEIGHT
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.layout.blocks import LayoutBlock, TextRun


def build_payment_lines(iban: Iban, payment_method: PaymentMethod) -> list[tuple[str, str]]:
    match payment_method:
        case BankTransfer(variable_symbol=symbol):
            return [
                ("Bankovní účet", iban.bank_account_number()),
                ("Variabilní symbol", symbol),
                ("Způsob platby", payment_method.label),
            ]
        case Card(reference=reference):
            return [
                ("Reference", reference),
                ("Způsob platby", payment_method.label),
            ]
        case Cash():
            return [("Způsob platby", payment_method.label)]
    raise TypeError(f"Unknown payment method: {payment_method!r}")


def build_label_value_block(
    name: str,
    rows: list[tuple[str, str]],
    metrics: TextMetrics,
    x: float,
    y: float,
    max_x: float,
) -> tuple[LayoutBlock, float]:
    """Gray labels on the left, black values right-aligned to max_x, one line per row."""
    children: list[TextRun] = []
    for idx, (label, value) in enumerate(rows, start=1):
        row_y = y - LINE_HEIGHT * idx
        children.append(TextRun(label, x, row_y, size=BODY_SIZE, color="gray"))
        value_x = max_x - metrics.measure(value, "regular", BODY_SIZE)
        children.append(TextRun(value, value_x, row_y, size=BODY_SIZE, color="black"))
    height = LINE_HEIGHT * len(rows)
    return LayoutBlock(name, (x, y), (max_x - x, height), tuple(children)), height


def build_payment_block(
    iban: Iban,
    payment_method: PaymentMethod,
    metrics: TextMetrics,
    x: float,
    y: float,
    max_x: float,
) -> tuple[LayoutBlock, float]:
    return build_label_value_block("payment", build_payment_lines(iban, payment_method), metrics, x, y, max_x)
