"""Shared pytest fixtures: feed samples and fakes for the importer collaborators."""

from __future__ import annotations

import pytest

from cnb_import.core.exceptions import PersistenceError, TransportError
from cnb_import.importer.config import RATES_URL, SCOPE_STORE, ScopeConfig
from cnb_import.importer.http_client import BaseHttpClient
from cnb_import.importer.storage import BaseRateStore

FEED_URL = "https://cnb.example/denni_kurz.txt"

SAMPLE_FEED = (
    "17.10.2026 #201\n"
    "země|měna|množství|kód|kurz\n"
    "Austrálie|dolar|1|AUD|15,216\n"
    "Německo|euro|1|EUR|25,300\n"
    "Maďarsko|forint|100|HUF|7,050\n"
    "Japonsko|jen|100|JPY|15,702\n"
)


class FakeHttpClient(BaseHttpClient):
    def __init__(self, body: str = "", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.requested: list[str] = []

    def get_body(self, url: str) -> str:
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        return self.body


class FakeRateStore(BaseRateStore):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.saved: list[dict] = []

    def save_rates(self, rates) -> None:
        self.saved.append(rates)
        if self.error is not None:
            raise self.error


@pytest.fixture
def scope_config() -> ScopeConfig:
    return ScopeConfig({SCOPE_STORE: {RATES_URL: FEED_URL}}, environ={})


@pytest.fixture
def empty_scope_config() -> ScopeConfig:
    return ScopeConfig({}, environ={})


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient(SAMPLE_FEED)


@pytest.fixture
def failing_http_client() -> FakeHttpClient:
    return FakeHttpClient(error=TransportError("Network error (CNB): timed out"))


@pytest.fixture
def rate_store() -> FakeRateStore:
    return FakeRateStore()


@pytest.fixture
def failing_rate_store() -> FakeRateStore:
    return FakeRateStore(error=PersistenceError("disk full"))
