from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable

from invoicer.core.errors import InvalidInvoice
from invoicer.core.models.entity import Entity
from invoicer.core.models.iban import Iban
from invoicer.core.models.invoice import Invoice
from invoicer.core.models.item import Hours, InvoiceItem, Other, Quantity, Time
from invoicer.core.models.payment import BankTransfer
from invoicer.core.services.settings import Settings


def _decimal(value: str) -> Decimal:
    try:
        result = Decimal(value.strip().replace(",", "."))
    except InvalidOperation:
        raise InvalidInvoice(f"Invalid price: {value!r}") from None
    if not result.is_finite():
        raise InvalidInvoice(f"Invalid price: {value!r}")
    return result


def parse_item_spec(spec: str) -> InvoiceItem:
    """
    Parse a command-line item:
    - hours:H:M:PRICE:DESCRIPTION
    - qty:N:PRICE:DESCRIPTION
    - other:UNIT:PRICE:DESCRIPTION
    Description may contain further colons.
    """
    kind, _, rest = spec.partition(":")
    kind = kind.strip().lower()
    try:
        if kind == "hours":
            hours, minutes, price, description = rest.split(":", 3)
            return InvoiceItem(Hours(Time(int(hours), int(minutes))), description, _decimal(price))
        if kind == "qty":
            count, price, description = rest.split(":", 2)
            return InvoiceItem(Quantity(int(count)), description, _decimal(price))
        if kind == "other":
            unit, price, description = rest.split(":", 2)
            return InvoiceItem(Other(unit), description, _decimal(price))
    except ValueError as exc:
        if isinstance(exc, InvalidInvoice):
            raise
        raise InvalidInvoice(f"Invalid item {spec!r}: {exc}") from exc
    raise InvalidInvoice(f"Unknown item kind in {spec!r} (expected hours, qty or other)")


def build_invoice(
    number: str,
    contractor: Entity,
    client: Entity,
    items: Iterable[InvoiceItem],
    settings: Settings,
    issue_date: date | None = None,
) -> Invoice:
    """Bank-transfer invoice; the variable symbol is the invoice number."""
    if not settings.iban:
        raise InvalidInvoice("IBAN is not configured")
    issued = issue_date or date.today()
    return Invoice(
        number=_decimal(number),
        contractor=contractor,
        client=client,
        iban=Iban.parse(settings.iban),
        payment_method=BankTransfer(variable_symbol=str(number).strip()),
        items=tuple(items),
        issue_date=issued,
        due_date=issued + timedelta(days=settings.due_days),
        currency=settings.currency,
        note=settings.note,
    )
