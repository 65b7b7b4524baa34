from datetime import date
from decimal import Decimal

import pytest

from invoicer.core.errors import InvalidIban, InvalidInvoice, InvalidRegistrationNumber, UnsupportedCurrency
from invoicer.core.models.address import Address, normalize_postal_code
from invoicer.core.models.currency import Currency
from invoicer.core.models.iban import Iban
from invoicer.core.models.item import Hours, InvoiceItem, Other, Quantity, Time
from invoicer.core.models.payment import BankTransfer, Card, Cash
from invoicer.core.models.registration_number import RegistrationNumber, is_valid_registration_number


@pytest.mark.parametrize("number", ["27082440", "29210372", " 27082440 "])
def test_valid_registration_numbers(number):
    assert is_valid_registration_number(number)
    assert str(RegistrationNumber.parse(number)) == number.strip()


@pytest.mark.parametrize("number", ["27082441", "2708244", "abcdefgh", "", None])
def test_invalid_registration_numbers(number):
    assert not is_valid_registration_number(number)
    with pytest.raises(InvalidRegistrationNumber):
        RegistrationNumber.parse(number)


def test_iban_parse_and_domestic_account():
    iban = Iban.parse("cz65 0800 0000 1920 0014 5399")
    assert iban.electronic == "CZ6508000000192000145399"
    assert iban.country == "CZ"
    assert iban.printed == "CZ65 0800 0000 1920 0014 5399"
    assert iban.bank_account_number() == "192000145399/0800"


def test_iban_foreign_account_uses_printed_form():
    iban = Iban.parse("DE89370400440532013000")
    assert iban.bank_account_number() == "DE89 3704 0044 0532 0130 00"


@pytest.mark.parametrize("value", ["CZ6508000000192000145398", "CZ65", "1234567890123456", "CZ65-0800-0000-1920-0014-5399"])
def test_iban_rejects_bad_input(value):
    with pytest.raises(InvalidIban):
        Iban.parse(value)


def test_address_lines():
    address = Address(city="Praha", street="Vinohradská", postal_code="12000", house_number=1896, orientation_number=12)
    assert address.first_line() == "Vinohradská 1896/12"
    assert address.second_line() == "120 00 Praha"


def test_address_without_orientation_number():
    address = Address(city="Brno", street="Masarykova", postal_code="602 00", house_number=5)
    assert address.first_line() == "Masarykova 5"
    assert address.second_line() == "602 00 Brno"


def test_postal_code_normalization():
    assert normalize_postal_code(1150) == "01150"
    with pytest.raises(InvalidInvoice):
        normalize_postal_code("1200A")
    with pytest.raises(InvalidInvoice):
        normalize_postal_code("1234567")


def test_currency_parse():
    assert Currency.parse(" eur ") is Currency.EUR
    assert Currency.JPY.exponent == 0
    assert Currency.CZK.symbol == "Kč"
    with pytest.raises(UnsupportedCurrency):
        Currency.parse("QQQ")


@pytest.mark.parametrize("code", ["RON", "bgn", " AUD ", "CAD"])
def test_currency_accepts_any_iso_code(code):
    currency = Currency.parse(code)
    assert currency.code == code.strip().upper()
    assert currency.symbol
    assert Currency.parse(code) is currency


@pytest.mark.parametrize("code", ["", "EURO", "12A", "QQQ"])
def test_currency_rejects_non_iso_strings(code):
    with pytest.raises(UnsupportedCurrency):
        Currency.parse(code)


def test_item_prices_per_kind():
    assert InvoiceItem(Hours(Time(1, 30)), "Work", Decimal("100")).price() == Decimal("150")
    assert InvoiceItem(Quantity(3), "Cables", Decimal("50")).price() == Decimal("150")
    assert InvoiceItem(Other("paušál"), "Support", Decimal("75")).price() == Decimal("75")


def test_item_labels():
    hours = InvoiceItem(Hours(Time(1, 30)), "Work", Decimal("100"))
    assert hours.count_label() == "1.5"
    assert hours.unit_label() == "hod"
    assert InvoiceItem(Hours(Time(2)), "Work", Decimal("1")).count_label() == "2"
    assert InvoiceItem(Hours(Time(1, 20)), "Work", Decimal("1")).count_label() == "1.33"
    quantity = InvoiceItem(Quantity(3), "Cables", Decimal("50"))
    assert (quantity.count_label(), quantity.unit_label()) == ("3", "ks")
    other = InvoiceItem(Other("paušál"), "Support", Decimal("75"))
    assert (other.count_label(), other.unit_label()) == ("paušál", "")


def test_item_requires_decimal_price():
    with pytest.raises(InvalidInvoice):
        InvoiceItem(Quantity(1), "Float", 1.5)  # type: ignore[arg-type]


@pytest.mark.parametrize("hours, minutes", [(-1, 0), (1, 60), (0, -5)])
def test_time_rejects_out_of_range(hours, minutes):
    with pytest.raises(InvalidInvoice):
        Time(hours, minutes)


def test_invoice_total_sums_items(make_invoice):
    invoice = make_invoice(
        items=[
            InvoiceItem(Hours(Time(1, 30)), "Work", Decimal("100")),
            InvoiceItem(Quantity(3), "Cables", Decimal("50")),
            InvoiceItem(Other("paušál"), "Support", Decimal("75")),
        ]
    )
    assert invoice.total() == Decimal("375")


def test_invoice_without_items_totals_zero(make_invoice):
    total = make_invoice(items=[]).total()
    assert total == Decimal("0")
    assert isinstance(total, Decimal)


def test_invoice_rejects_due_before_issue(make_invoice, contractor, client_entity):
    from invoicer.core.models.invoice import Invoice

    with pytest.raises(InvalidInvoice):
        Invoice(
            number=Decimal("1"),
            contractor=contractor,
            client=client_entity,
            iban=Iban.parse("CZ6508000000192000145399"),
            payment_method=Cash(),
            items=(),
            issue_date=date(2024, 3, 15),
            due_date=date(2024, 3, 1),
        )


def test_payment_method_labels():
    assert Cash().label == "Hotově"
    assert Card(reference="1234").label == "Kartou"
    assert BankTransfer(variable_symbol="202403").label == "Převodem"
