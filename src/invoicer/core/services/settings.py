from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping

from invoicer.core.models.currency import Currency
from invoicer.core.services.registry import ARES_URL

SETTINGS_PATH = Path("data") / "invoicer.json"

ENV_PREFIX = "INVOICER_"
ENV_KEYS = ("iban", "contractor", "due_days", "currency", "note")


@dataclass(frozen=True)
class Settings:
    iban: str = ""
    contractor: str = ""
    due_days: int = 14
    currency: Currency = Currency.CZK
    note: str | None = None
    ares_url: str = ARES_URL
    timeout: float = 10.0
    retries: int = 3


def _coerce(values: Mapping[str, object]) -> dict:
    known = {f.name for f in fields(Settings)}
    out: dict = {}
    for key, value in values.items():
        if key not in known or value is None:
            continue
        if key == "currency":
            out[key] = Currency.parse(str(value))
        elif key in ("due_days", "retries"):
            out[key] = int(value)
        elif key == "timeout":
            out[key] = float(value)
        else:
            out[key] = str(value)
    return out


def load_settings(path: Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Defaults <- JSON file (if present) <- INVOICER_* environment variables.
    A malformed file raises ValueError rather than being silently ignored.
    """
    target = path or SETTINGS_PATH
    settings = Settings()
    if target.exists():
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid settings file {target}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Invalid settings file {target}: expected an object")
        settings = replace(settings, **_coerce(data))

    env = os.environ if environ is None else environ
    overrides = {key: env[ENV_PREFIX + key.upper()] for key in ENV_KEYS if env.get(ENV_PREFIX + key.upper())}
    if overrides:
        settings = replace(settings, **_coerce(overrides))
    return settings
