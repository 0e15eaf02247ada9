from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Final, Mapping

from dotenv import find_dotenv, load_dotenv

from ..infra.settings import SettingsLoader


# Ключ конфигурации с URL фида ЧНБ
RATES_URL: Final[str] = "currency/czech_central_bank/currency_rates_url"

SCOPE_DEFAULT: Final[str] = "default"
SCOPE_WEBSITE: Final[str] = "website"
SCOPE_STORE: Final[str] = "store"

DEFAULT_RATES_URL: Final[str] = (
    "https://www.cnb.cz/cs/financni-trhy/devizovy-trh/"
    "kurzy-devizoveho-trhu/kurzy-devizoveho-trhu/denni_kurz.txt"
)


def env_key(key: str) -> str:
    """Environment variable name for a config path (a/b/c -> A_B_C)."""
    return key.replace("/", "_").upper()


class BaseScopeConfig(ABC):
    @abstractmethod
    def get_value(self, key: str, scope: str = SCOPE_DEFAULT) -> Any:
        """Return the value of `key` at `scope`, or None if unset."""


class ScopeConfig(BaseScopeConfig):
    """Scoped key/value config.

    Lookup order: environment variable, then the requested scope table,
    then the website table (for store scope), then the default table.
    Empty strings count as unset.
    """

    _FALLBACK: Final[dict[str, tuple[str, ...]]] = {
        SCOPE_STORE: (SCOPE_STORE, SCOPE_WEBSITE, SCOPE_DEFAULT),
        SCOPE_WEBSITE: (SCOPE_WEBSITE, SCOPE_DEFAULT),
        SCOPE_DEFAULT: (SCOPE_DEFAULT,),
    }

    def __init__(
        self,
        scopes: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._scopes = {k: dict(v) for k, v in (scopes or {}).items()}
        self._environ = os.environ if environ is None else environ

    def get_value(self, key: str, scope: str = SCOPE_DEFAULT) -> Any:
        value = self._environ.get(env_key(key))
        if value:
            return value
        for name in self._FALLBACK.get(scope, (scope, SCOPE_DEFAULT)):
            value = self._scopes.get(name, {}).get(key)
            if value not in (None, ""):
                return value
        return None

    def with_value(self, key: str, value: Any, scope: str = SCOPE_STORE) -> "ScopeConfig":
        """Return a copy with `key` set at `scope` (used by CLI overrides)."""
        scopes = {k: dict(v) for k, v in self._scopes.items()}
        scopes.setdefault(scope, {})[key] = value
        environ = {k: v for k, v in self._environ.items() if k != env_key(key)}
        return ScopeConfig(scopes, environ=environ)


@dataclass(frozen=True)
class ImporterConfig:
    # Пути
    RATES_FILE_PATH: str

    # Сетевые параметры
    REQUEST_TIMEOUT: float
    FEED_ENCODING: str


def _load_dotenv() -> None:
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(dotenv_path=path, override=False)


def load_importer_config() -> ImporterConfig:
    """Load importer configuration from env/.env and project settings.

    Environment variables override .env; SettingsLoader provides defaults
    for the data directory and network timeout.
    """
    _load_dotenv()
    settings = SettingsLoader()
    data_dir = os.fspath(settings.get("data_dir"))
    return ImporterConfig(
        RATES_FILE_PATH=os.getenv(
            "CNB_RATES_FILE", os.path.join(data_dir, "currency_rates.json")
        ),
        REQUEST_TIMEOUT=float(
            os.getenv("CNB_HTTP_TIMEOUT", str(settings.get("request_timeout", 10)))
        ),
        FEED_ENCODING=str(settings.get("feed_encoding", "utf-8")),
    )


def load_scope_config() -> ScopeConfig:
    """Build the scoped config from [tool.cnb_import.config.<scope>] tables.

    The CNB feed URL is pre-filled at default scope so a bare checkout works.
    """
    _load_dotenv()
    settings = SettingsLoader()
    raw = settings.get_table("config")
    scopes: dict[str, dict[str, Any]] = {SCOPE_DEFAULT: {RATES_URL: DEFAULT_RATES_URL}}
    for scope, values in raw.items():
        if isinstance(values, dict):
            scopes.setdefault(str(scope), {}).update(values)
    return ScopeConfig(scopes)
