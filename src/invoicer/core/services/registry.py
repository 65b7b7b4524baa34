"""
ARES (Czech business registry) lookup.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import httpx

from invoicer.core.errors import BadResponse, EntityNotFound, RegistryNetworkError
from invoicer.core.models.address import Address
from invoicer.core.models.entity import Entity
from invoicer.core.models.registration_number import RegistrationNumber

logger = logging.getLogger(__name__)

ARES_URL = "https://ares.gov.cz/ekonomicke-subjekty-v-be/rest/ekonomicke-subjekty"


def _is_retryable(exc: Exception) -> bool:
    if isinstance(exc, httpx.RequestError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


def _get_json(client: httpx.Client, url: str, timeout: float, attempts: int, base_delay_seconds: float) -> Any:
    for attempt in range(1, attempts + 1):
        try:
            response = client.get(url, timeout=timeout, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()
        except (httpx.RequestError, httpx.HTTPStatusError) as exc:
            if attempt >= attempts or not _is_retryable(exc):
                raise
            logger.warning("ARES request %s failed (attempt %d/%d): %s", url, attempt, attempts, exc)
            time.sleep(base_delay_seconds * (2 ** (attempt - 1)))
    raise RegistryNetworkError(f"No attempts made for {url}")


def entity_from_ares(number: RegistrationNumber, data: Mapping[str, Any]) -> Entity:
    """Map an ARES "ekonomicky subjekt" document onto an Entity."""
    try:
        office = data["sidlo"]
        city_part = office.get("nazevMestskeCastiObvodu")
        if city_part:
            city = " - ".join(city_part.split("-"))
        else:
            city = office["nazevObce"]
        street = office.get("nazevUlice") or office["nazevCastiObce"]
        address = Address(
            city=city,
            street=street,
            postal_code=str(office["psc"]),
            house_number=int(office["cisloDomovni"]),
            orientation_number=int(office["cisloOrientacni"]) if office.get("cisloOrientacni") is not None else None,
        )
        return Entity(identifier=number, name=str(data["obchodniJmeno"]), address=address, vat_number=data.get("dic") or None)
    except (KeyError, TypeError, ValueError) as exc:
        raise BadResponse(f"Unexpected ARES document for {number}: {exc!r}") from exc


def resolve_entity(
    registration_number: str | RegistrationNumber,
    *,
    client: httpx.Client | None = None,
    base_url: str = ARES_URL,
    timeout: float = 10.0,
    attempts: int = 3,
    base_delay_seconds: float = 0.25,
) -> Entity:
    number = registration_number if isinstance(registration_number, RegistrationNumber) else RegistrationNumber.parse(registration_number)
    url = f"{base_url.rstrip('/')}/{number}"
    owns_client = client is None
    http = client or httpx.Client()
    try:
        data = _get_json(http, url, timeout, attempts, base_delay_seconds)
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 404:
            raise EntityNotFound(f"IČO {number} not found in ARES") from exc
        raise BadResponse(f"ARES returned {exc.response.status_code} for {number}") from exc
    except httpx.RequestError as exc:
        raise RegistryNetworkError(f"ARES request failed for {number}: {exc}") from exc
    except ValueError as exc:
        raise BadResponse(f"ARES returned invalid JSON for {number}") from exc
    finally:
        if owns_client:
            http.close()

    if not isinstance(data, Mapping):
        raise BadResponse(f"ARES returned {type(data).__name__} for {number}")
    entity = entity_from_ares(number, data)
    logger.info("Resolved %s -> %s", number, entity.name)
    return entity
