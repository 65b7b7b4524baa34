from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoicer.core.errors import InvalidInvoice


@dataclass(frozen=True)
class Time:
    hours: int
    minutes: int = 0

    def __post_init__(self) -> None:
        if self.hours < 0 or not 0 <= self.minutes < 60:
            raise InvalidInvoice(f"Invalid duration {self.hours}:{self.minutes:02d}")

    def hour_multiplicator(self) -> float:
        return self.hours + self.minutes / 60.0

    def label(self) -> str:
        """Hours as a short decimal: 1:30 -> "1.5", 2:00 -> "2", 1:20 -> "1.33"."""
        value = Decimal(str(round(self.hour_multiplicator(), 2)))
        return format(value.normalize(), "f")


@dataclass(frozen=True)
class Hours:
    time: Time


@dataclass(frozen=True)
class Quantity:
    count: int


@dataclass(frozen=True)
class Other:
    unit: str


ItemKind = Hours | Quantity | Other


@dataclass(frozen=True)
class InvoiceItem:
    kind: ItemKind
    description: str
    price_per_unit: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.price_per_unit, Decimal):
            raise InvalidInvoice(f"price_per_unit must be Decimal, got {type(self.price_per_unit).__name__}")

    def multiplicator(self) -> Decimal:
        match self.kind:
            case Hours(time=time):
                # the float only scales the price, it goes through its shortest repr
                return Decimal(str(time.hour_multiplicator()))
            case Quantity(count=count):
                return Decimal(count)
            case Other():
                return Decimal(1)
        raise InvalidInvoice(f"Unknown item kind: {self.kind!r}")

    def price(self) -> Decimal:
        match self.kind:
            case Other():
                return self.price_per_unit
            case _:
                return self.multiplicator() * self.price_per_unit

    def count_label(self) -> str:
        match self.kind:
            case Hours(time=time):
                return time.label()
            case Quantity(count=count):
                return str(count)
            case Other(unit=unit):
                return unit
        return ""

    def unit_label(self) -> str:
        match self.kind:
            case Hours():
                return "hod"
            case Quantity():
                return "ks"
        return ""
