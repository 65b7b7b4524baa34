from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from invoicer.core.errors import InvalidInvoice
from invoicer.core.models.currency import Currency
from invoicer.core.models.entity import Entity
from invoicer.core.models.iban import Iban
from invoicer.core.models.item import InvoiceItem
from invoicer.core.models.payment import PaymentMethod


@dataclass(frozen=True)
class Invoice:
    number: Decimal
    contractor: Entity
    client: Entity
    iban: Iban
    payment_method: PaymentMethod
    items: tuple[InvoiceItem, ...]
    issue_date: date
    due_date: date
    currency: Currency = Currency.CZK
    note: str | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if not isinstance(self.number, Decimal):
            object.__setattr__(self, "number", Decimal(str(self.number)))
        if self.due_date < self.issue_date:
            raise InvalidInvoice(f"Due date {self.due_date} is before issue date {self.issue_date}")

    def total(self) -> Decimal:
        return sum((item.price() for item in self.items), Decimal("0"))
