from decimal import Decimal

from invoicer.core.models.currency import Currency
from invoicer.core.models.iban import Iban
from invoicer.utils import qr

IBAN = Iban.parse("CZ6508000000192000145399")


def test_spayd_payload_fields_in_order():
    payload = qr.build_spayd(IBAN, Decimal("525.0"), Currency.CZK, "202403")
    assert payload == "SPD*1.0*ACC:CZ6508000000192000145399*AM:525.00*CC:CZK*X-VS:202403"


def test_spayd_rounds_amount_half_up():
    payload = qr.build_spayd(IBAN, Decimal("10.005"), Currency.CZK)
    assert "*AM:10.01*" in payload
    assert "X-VS" not in payload


def test_spayd_escapes_field_separators():
    payload = qr.build_spayd(IBAN, Decimal("1"), Currency.CZK, "2024*03%")
    assert payload.endswith("*X-VS:2024%2A03%25")
    assert payload.count("*") == 5


def test_make_qr_matrix_is_square_boolean_grid():
    matrix = qr.make_qr_matrix("SPD*1.0*ACC:CZ6508000000192000145399*AM:525.00*CC:CZK")
    assert len(matrix) >= 21
    assert all(len(row) == len(matrix) for row in matrix)
    assert all(isinstance(cell, bool) for row in matrix for cell in row)
    # finder pattern in the top-left corner with no quiet zone
    assert all(matrix[0][:7])


def test_build_payment_qr_pairs_payload_and_matrix():
    payment = qr.build_payment_qr(IBAN, Decimal("525"), Currency.CZK, "202403")
    assert payment.payload.endswith("*X-VS:202403")
    assert payment.matrix == qr.make_qr_matrix(payment.payload)
