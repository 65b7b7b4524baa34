"""
Czech company registration number (ICO): 8 digits, last one is a mod-11 check digit.
"""

from __future__ import annotations

from dataclasses import dataclass

from invoicer.core.errors import InvalidRegistrationNumber


def is_valid_registration_number(number: str) -> bool:
    value = str(number or "").strip()
    if len(value) != 8 or not value.isdigit():
        return False
    # weights 8..2 from the left
    checksum = sum(int(digit) * weight for digit, weight in zip(value[:7], range(8, 1, -1)))
    control = (11 - checksum % 11) % 10
    return control == int(value[7])


@dataclass(frozen=True)
class RegistrationNumber:
    value: str

    @classmethod
    def parse(cls, number: str) -> "RegistrationNumber":
        value = str(number or "").strip()
        if not is_valid_registration_number(value):
            raise InvalidRegistrationNumber(f"Neplatné IČO: {number!r}")
        return cls(value)

    def __str__(self) -> str:
        return self.value
