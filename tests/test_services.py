import json
from datetime import date
from decimal import Decimal

import pytest

from invoicer import app
from invoicer.core.errors import InvalidInvoice, UnsupportedCurrency
from invoicer.core.models.currency import Currency
from invoicer.core.models.item import Hours, Other, Quantity, Time
from invoicer.core.models.payment import BankTransfer
from invoicer.core.services.invoice import build_invoice, parse_item_spec
from invoicer.core.services.settings import Settings, load_settings
from invoicer.utils.variable_symbol import generate_invoice_number


def test_load_settings_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.json", environ={})
    assert settings == Settings()
    assert settings.due_days == 14
    assert settings.currency is Currency.CZK


def test_load_settings_from_json(tmp_path):
    path = tmp_path / "invoicer.json"
    data = {"iban": "CZ6508000000192000145399", "contractor": "27082440", "due_days": 30, "currency": "eur", "unknown": 1}
    path.write_text(json.dumps(data), encoding="utf-8")

    settings = load_settings(path, environ={})

    assert settings.iban == "CZ6508000000192000145399"
    assert settings.contractor == "27082440"
    assert settings.due_days == 30
    assert settings.currency is Currency.EUR


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "invoicer.json"
    path.write_text(json.dumps({"due_days": 30, "note": "file"}), encoding="utf-8")
    env = {"INVOICER_DUE_DAYS": "7", "INVOICER_NOTE": "env", "INVOICER_CURRENCY": ""}

    settings = load_settings(path, environ=env)

    assert settings.due_days == 7
    assert settings.note == "env"
    assert settings.currency is Currency.CZK


def test_malformed_settings_raise(tmp_path):
    path = tmp_path / "invoicer.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path, environ={})
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path, environ={})


def test_unknown_currency_in_settings(tmp_path):
    with pytest.raises(UnsupportedCurrency):
        load_settings(tmp_path / "missing.json", environ={"INVOICER_CURRENCY": "QQQ"})


def test_parse_item_specs():
    hours = parse_item_spec("hours:1:30:350:Programování: backend")
    assert hours.kind == Hours(Time(1, 30))
    assert hours.description == "Programování: backend"
    assert hours.price() == Decimal("525.0")

    qty = parse_item_spec("qty:3:49,90:Kabel")
    assert qty.kind == Quantity(3)
    assert qty.price_per_unit == Decimal("49.90")

    other = parse_item_spec("other:paušál:1500:Správa")
    assert other.kind == Other("paušál")
    assert other.price() == Decimal("1500")


@pytest.mark.parametrize("spec", ["days:1:100:X", "hours:1:100:X", "qty:x:10:X", "qty:1:abc:X", "hours:1:75:10:X", "other:ks:NaN:X"])
def test_invalid_item_specs(spec):
    with pytest.raises(InvalidInvoice):
        parse_item_spec(spec)


def test_build_invoice_from_settings(contractor, client_entity):
    settings = Settings(iban="CZ6508000000192000145399", due_days=10, note="Děkujeme")
    items = [parse_item_spec("hours:1:30:350:Programování")]

    invoice = build_invoice("202403", contractor, client_entity, items, settings, issue_date=date(2024, 3, 1))

    assert invoice.number == Decimal("202403")
    assert invoice.payment_method == BankTransfer(variable_symbol="202403")
    assert invoice.due_date == date(2024, 3, 11)
    assert invoice.note == "Děkujeme"
    assert invoice.total() == Decimal("525.0")


def test_build_invoice_requires_iban(contractor, client_entity):
    with pytest.raises(InvalidInvoice):
        build_invoice("1", contractor, client_entity, [], Settings(), issue_date=date(2024, 3, 1))


def test_generate_invoice_number():
    assert generate_invoice_number(date(2024, 3, 1)) == "20240301"


def test_cli_writes_pdf(tmp_path, monkeypatch, capsys, contractor, client_entity):
    config = tmp_path / "invoicer.json"
    config.write_text(json.dumps({"iban": "CZ6508000000192000145399", "contractor": "27082440"}), encoding="utf-8")
    resolved = {"27082440": contractor, "29210372": client_entity}
    monkeypatch.setattr(app, "resolve_entity", lambda number, **kwargs: resolved[str(number)])
    output = tmp_path / "faktura.pdf"

    code = app.main(
        [
            "--client", "29210372",
            "--number", "202403",
            "--item", "hours:1:30:350:Programování",
            "--issue-date", "2024-03-01",
            "--output", str(output),
            "--config", str(config),
        ]
    )

    assert code == 0
    assert output.read_bytes().startswith(b"%PDF")
    assert str(output) in capsys.readouterr().out


def test_cli_reports_invalid_input(tmp_path, monkeypatch):
    monkeypatch.setattr(app, "resolve_entity", lambda number, **kwargs: pytest.fail("no lookup expected"))
    code = app.main(["--client", "29210372", "--item", "bogus", "--config", str(tmp_path / "none.json")])
    assert code == 1
