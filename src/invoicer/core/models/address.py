from __future__ import annotations

from dataclasses import dataclass

from invoicer.core.errors import InvalidInvoice


def normalize_postal_code(value: str | int) -> str:
    digits = "".join(str(value).split())
    if not digits.isdigit() or len(digits) > 5:
        raise InvalidInvoice(f"Invalid postal code: {value!r}")
    return digits.zfill(5)


@dataclass(frozen=True)
class Address:
    city: str
    street: str
    postal_code: str
    house_number: int
    orientation_number: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "postal_code", normalize_postal_code(self.postal_code))

    def first_line(self) -> str:
        line = f"{self.street} {self.house_number}"
        if self.orientation_number is not None:
            line += f"/{self.orientation_number}"
        return line

    def second_line(self) -> str:
        """Postal code split after the third digit, then city: "120 00 Praha"."""
        return f"{self.postal_code[:3]} {self.postal_code[3:]} {self.city}"
