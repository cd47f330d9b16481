"""Advisory endpoint settings: stored overrides over environment over fallbacks."""
import json
import logging
import os
from collections.abc import Mapping
from typing import Protocol

from pccs_tutor.db import get_connection
from pccs_tutor.models import Settings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "pccs_app_settings"

FALLBACK_BASE_URL = "https://models.inference.ai.azure.com"
FALLBACK_MODEL = "gpt-4o"
FALLBACK_API_KEY = ""

ENV_API_KEY = "PCCS_API_KEY"
ENV_BASE_URL = "PCCS_BASE_URL"
ENV_MODEL = "PCCS_MODEL"


class SettingsStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, blob: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqliteSettingsStore:
    """Key/value blobs kept in the user_settings table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def get(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row["value"] if row else None

    def set(self, key: str, blob: str) -> None:
        conn = get_connection(self.db_path)
        conn.execute(
            "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
            (key, blob, blob),
        )
        conn.commit()
        conn.close()

    def delete(self, key: str) -> None:
        conn = get_connection(self.db_path)
        conn.execute("DELETE FROM user_settings WHERE key = ?", (key,))
        conn.commit()
        conn.close()


def load_build_defaults(environ: Mapping[str, str] | None = None) -> Settings:
    """Deployment-time values; a missing variable comes back as ""."""
    environ = os.environ if environ is None else environ
    return Settings(
        base_url=environ.get(ENV_BASE_URL, ""),
        api_key=environ.get(ENV_API_KEY, ""),
        model=environ.get(ENV_MODEL, ""),
    )


def _load_override(store: SettingsStore) -> dict:
    blob = store.get(SETTINGS_KEY)
    if not blob:
        return {}
    try:
        record = json.loads(blob)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable settings record under %r", SETTINGS_KEY)
        return {}
    if not isinstance(record, dict):
        logger.warning("Ignoring settings record under %r: not an object", SETTINGS_KEY)
        return {}
    return record


def _first_present(*values) -> str:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def resolve_settings(store: SettingsStore, build: Settings | None = None) -> Settings:
    """Resolve each field independently: override, then build default, then fallback.

    Blank strings count as absent. Nothing is cached between calls.
    """
    build = load_build_defaults() if build is None else build
    override = _load_override(store)
    return Settings(
        base_url=_first_present(override.get("baseUrl"), build.base_url, FALLBACK_BASE_URL),
        api_key=_first_present(override.get("apiKey"), build.api_key, FALLBACK_API_KEY),
        model=_first_present(override.get("model"), build.model, FALLBACK_MODEL),
    )


def save_settings(store: SettingsStore, settings: Settings) -> None:
    store.set(SETTINGS_KEY, json.dumps(settings.to_record()))
    logger.info("Saved settings override (model=%s, base_url=%s)", settings.model, settings.base_url)


def reset_settings(store: SettingsStore) -> None:
    """Drop the stored override so environment and fallback values apply again."""
    store.delete(SETTINGS_KEY)
    logger.info("Cleared settings override")


def mask_key(api_key: str) -> str:
    if not api_key:
        return "(not set)"
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:3]}...{api_key[-4:]}"
