from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import requests

from ..core.exceptions import TransportError
from ..logging_config import LOGGER_NAME
from .config import ImporterConfig

logger = logging.getLogger(LOGGER_NAME)


class BaseHttpClient(ABC):
    @abstractmethod
    def get_body(self, url: str) -> str:
        """Send one GET request and return the raw text body.

        Raises:
            TransportError: on network failure or non-200 response
        """


class RequestsHttpClient(BaseHttpClient):
    SOURCE = "CNB"

    def __init__(self, timeout: float = 10.0, encoding: str = "utf-8") -> None:
        self.timeout = timeout
        self.encoding = encoding

    @classmethod
    def from_config(cls, cfg: ImporterConfig) -> "RequestsHttpClient":
        return cls(timeout=cfg.REQUEST_TIMEOUT, encoding=cfg.FEED_ENCODING)

    def get_body(self, url: str) -> str:
        t0 = time.perf_counter()
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Network error ({self.SOURCE}): {exc}") from exc
        elapsed_ms = int((time.perf_counter() - t0) * 1000)

        status = resp.status_code
        if status != 200:
            raise TransportError(f"{self.SOURCE} HTTP {status}", status_code=status)

        logger.debug(
            "GET %s -> %d (%d bytes, %d ms)", url, status, len(resp.content), elapsed_ms
        )
        # Header labels carry diacritics; decode with the configured charset
        return resp.content.decode(self.encoding, errors="replace")
