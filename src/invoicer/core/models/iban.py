from __future__ import annotations

import string
from dataclasses import dataclass

from invoicer.core.errors import InvalidIban


def _mod97(value: str) -> int:
    rearranged = value[4:] + value[:4]
    digits = "".join(str(int(ch, 36)) for ch in rearranged)
    return int(digits) % 97


@dataclass(frozen=True)
class Iban:
    """IBAN stored in electronic form (upper case, no spaces)."""

    electronic: str

    @classmethod
    def parse(cls, value: str) -> "Iban":
        compact = "".join(str(value or "").split()).upper()
        if len(compact) < 15 or len(compact) > 34:
            raise InvalidIban(f"Invalid IBAN length: {value!r}")
        if not compact[:2].isalpha() or not compact[2:4].isdigit():
            raise InvalidIban(f"Invalid IBAN prefix: {value!r}")
        allowed = set(string.ascii_uppercase + string.digits)
        if any(ch not in allowed for ch in compact):
            raise InvalidIban(f"Invalid IBAN characters: {value!r}")
        if _mod97(compact) != 1:
            raise InvalidIban(f"Invalid IBAN checksum: {value!r}")
        return cls(compact)

    @property
    def country(self) -> str:
        return self.electronic[:2]

    @property
    def printed(self) -> str:
        return " ".join(self.electronic[i : i + 4] for i in range(0, len(self.electronic), 4))

    def bank_account_number(self) -> str:
        """
        Domestic form "account/bank" (CZ and SK layout: 4 digit bank code, then
        prefix + number). Leading zeros of the account part are dropped.
        Other countries get the printed IBAN.
        """
        if self.country not in ("CZ", "SK"):
            return self.printed
        bank_code = self.electronic[4:8]
        account = self.electronic[8:].lstrip("0") or "0"
        return f"{account}/{bank_code}"

    def __str__(self) -> str:
        return self.printed
