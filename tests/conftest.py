import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(scope="session")
def fonts():
    from invoicer.utils.pdf.core.fonts import load_fonts

    return load_fonts()


@pytest.fixture
def metrics(fonts):
    from invoicer.utils.pdf.core.metrics import TextMetrics

    return TextMetrics(fonts)


@pytest.fixture
def contractor():
    from invoicer.core.models.address import Address
    from invoicer.core.models.entity import Entity
    from invoicer.core.models.registration_number import RegistrationNumber

    return Entity(
        identifier=RegistrationNumber.parse("27082440"),
        name="Jan Novák",
        address=Address(city="Praha", street="Vinohradská", postal_code="12000", house_number=1896, orientation_number=12),
        vat_number=None,
    )


@pytest.fixture
def client_entity():
    from invoicer.core.models.address import Address
    from invoicer.core.models.entity import Entity
    from invoicer.core.models.registration_number import RegistrationNumber

    return Entity(
        identifier=RegistrationNumber.parse("29210372"),
        name="Klient s.r.o.",
        address=Address(city="Brno", street="Masarykova", postal_code="60200", house_number=5),
        vat_number="CZ29210372",
    )


@pytest.fixture
def make_invoice(contractor, client_entity):
    from invoicer.core.models.currency import Currency
    from invoicer.core.models.iban import Iban
    from invoicer.core.models.invoice import Invoice
    from invoicer.core.models.item import Hours, InvoiceItem, Time
    from invoicer.core.models.payment import BankTransfer

    def _make(items=None, payment_method=None, currency=Currency.CZK, note=None, number="202403"):
        if items is None:
            items = [InvoiceItem(Hours(Time(1, 30)), "Programování SmartEmailingu", Decimal("350"))]
        return Invoice(
            number=Decimal(number),
            contractor=contractor,
            client=client_entity,
            iban=Iban.parse("CZ6508000000192000145399"),
            payment_method=payment_method or BankTransfer(variable_symbol=number),
            items=tuple(items),
            issue_date=date(2024, 3, 1),
            due_date=date(2024, 3, 15),
            currency=currency,
            note=note,
        )

    return _make
