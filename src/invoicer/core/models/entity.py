from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from invoicer.core.models.address import Address
from invoicer.core.models.registration_number import RegistrationNumber


class EntityRole(Enum):
    CONTRACTOR = "DODAVATEL"
    CLIENT = "ODBĚRATEL"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Entity:
    """Business entity as shown on the invoice (contractor or client)."""

    identifier: RegistrationNumber
    name: str
    address: Address
    vat_number: str | None = None
