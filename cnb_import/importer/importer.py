from __future__ import annotations

import logging

from ..core.exceptions import ConfigurationError, PersistenceError, TransportError
from ..core.models import ImportMessage, MessageKind, MessageLog, RateTable
from ..decorators import log_action
from ..logging_config import LOGGER_NAME
from .config import (
    RATES_URL,
    SCOPE_STORE,
    BaseScopeConfig,
    load_importer_config,
    load_scope_config,
)
from .http_client import BaseHttpClient, RequestsHttpClient
from .parser import parse_feed_header, parse_rates
from .storage import BaseRateStore, JsonRateStore

logger = logging.getLogger(LOGGER_NAME)

MSG_FETCH_ERROR = "Error fetching currency rates: "
MSG_HTTP_ERROR = "Error during HTTP request: "
MSG_NOTHING_TO_SAVE = "No currency rates to save."
MSG_SAVED = "Currency rates successfully saved."
MSG_SAVE_ERROR = "Error saving currency rates: "
MSG_URL_NOT_CONFIGURED = "Currency Rates URL is not configured."


class CzechCentralBankImporter:
    """Imports Czech National Bank daily rates into the currency table.

    - Reads the feed URL from scoped config (store scope)
    - Fetches the feed with one GET request
    - Parses it into {"CZK": {code: rate}} and hands it to the rate store

    Failures never escape `import_rates`; they end up in the message log.
    """

    SOURCE = "CNB"

    def __init__(
        self,
        scope_config: BaseScopeConfig,
        http_client: BaseHttpClient,
        rate_store: BaseRateStore,
    ) -> None:
        self.scope_config = scope_config
        self.http_client = http_client
        self.rate_store = rate_store
        self._log = MessageLog()

    @classmethod
    def from_settings(
        cls, scope_config: BaseScopeConfig | None = None
    ) -> "CzechCentralBankImporter":
        """Build an importer wired to project settings, requests and the JSON table."""
        cfg = load_importer_config()
        return cls(
            scope_config=scope_config or load_scope_config(),
            http_client=RequestsHttpClient.from_config(cfg),
            rate_store=JsonRateStore(cfg.RATES_FILE_PATH),
        )

    @log_action("IMPORT_RATES")
    def import_rates(self) -> "CzechCentralBankImporter":
        """Fetch, parse and save rates. Returns self."""
        self._log = MessageLog()
        logger.info("Starting currency rates import from %s...", self.SOURCE)
        rates = self._get_currency_rates()
        self._save_rates(rates)
        return self

    def fetch_rates(self) -> RateTable:
        """Fetch and parse rates without saving. Empty dict on any failure."""
        self._log = MessageLog()
        return self._get_currency_rates()

    def get_messages(self) -> list[str]:
        return self._log.texts()

    def get_log(self) -> tuple[ImportMessage, ...]:
        return tuple(self._log.entries)

    def _add_message(self, kind: MessageKind, text: str) -> None:
        self._log.add(kind, text)
        logger.log(kind.log_level, text)

    def _get_currency_rates(self) -> RateTable:
        try:
            url = self._rates_url()
        except ConfigurationError as exc:
            self._add_message(MessageKind.ERROR, MSG_FETCH_ERROR + str(exc))
            return {}

        body = self._get_service_response(url)

        header = parse_feed_header(body)
        if header is not None:
            logger.info("Feed issued %s (#%s)", header.issued, header.sequence)

        rates = parse_rates(body)
        logger.info("Parsed %d rates", sum(len(v) for v in rates.values()))
        return rates

    def _rates_url(self) -> str:
        url = self.scope_config.get_value(RATES_URL, SCOPE_STORE)
        if not url:
            raise ConfigurationError(MSG_URL_NOT_CONFIGURED)
        return str(url)

    def _get_service_response(self, url: str) -> str:
        """GET the feed; a transport failure yields an empty body."""
        try:
            return self.http_client.get_body(url)
        except TransportError as exc:
            self._add_message(MessageKind.ERROR, MSG_HTTP_ERROR + str(exc))
            return ""

    def _save_rates(self, rates: RateTable) -> None:
        if not rates:
            self._add_message(MessageKind.WARNING, MSG_NOTHING_TO_SAVE)
            return

        try:
            self.rate_store.save_rates(rates)
        except PersistenceError as exc:
            self._add_message(MessageKind.ERROR, MSG_SAVE_ERROR + str(exc))
            return
        self._add_message(MessageKind.SUCCESS, MSG_SAVED)
