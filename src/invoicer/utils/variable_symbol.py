from datetime import date


def generate_invoice_number(today: date | None = None) -> str:
    """
    Default invoice number (and variable symbol) based on the issue date (yyyymmdd).
    """
    return (today or date.today()).strftime("%Y%m%d")
