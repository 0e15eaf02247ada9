from cnb_import.importer.config import (
    DEFAULT_RATES_URL,
    RATES_URL,
    SCOPE_DEFAULT,
    SCOPE_STORE,
    SCOPE_WEBSITE,
    ScopeConfig,
    env_key,
    load_importer_config,
    load_scope_config,
)


def test_env_key():
    assert env_key(RATES_URL) == "CURRENCY_CZECH_CENTRAL_BANK_CURRENCY_RATES_URL"


def test_store_scope_falls_back_to_website_and_default():
    cfg = ScopeConfig(
        {SCOPE_DEFAULT: {RATES_URL: "https://default"}, SCOPE_WEBSITE: {}},
        environ={},
    )
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://default"

    cfg = ScopeConfig(
        {
            SCOPE_DEFAULT: {RATES_URL: "https://default"},
            SCOPE_WEBSITE: {RATES_URL: "https://website"},
        },
        environ={},
    )
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://website"
    assert cfg.get_value(RATES_URL, SCOPE_DEFAULT) == "https://default"


def test_store_value_wins_and_empty_counts_as_unset():
    cfg = ScopeConfig(
        {SCOPE_DEFAULT: {RATES_URL: "https://default"}, SCOPE_STORE: {RATES_URL: ""}},
        environ={},
    )
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://default"

    cfg = ScopeConfig({SCOPE_STORE: {RATES_URL: "https://store"}}, environ={})
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://store"
    assert cfg.get_value(RATES_URL, SCOPE_DEFAULT) is None


def test_environment_overrides_tables():
    cfg = ScopeConfig(
        {SCOPE_STORE: {RATES_URL: "https://store"}},
        environ={env_key(RATES_URL): "https://env"},
    )
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://env"


def test_with_value_overrides_environment():
    cfg = ScopeConfig({}, environ={env_key(RATES_URL): "https://env"})
    override = cfg.with_value(RATES_URL, "https://cli")

    assert override.get_value(RATES_URL, SCOPE_STORE) == "https://cli"
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == "https://env"


def test_load_scope_config_has_default_feed_url(monkeypatch):
    monkeypatch.delenv(env_key(RATES_URL), raising=False)
    cfg = load_scope_config()
    assert cfg.get_value(RATES_URL, SCOPE_STORE) == DEFAULT_RATES_URL


def test_load_importer_config_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CNB_HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("CNB_RATES_FILE", str(tmp_path / "rates.json"))

    cfg = load_importer_config()

    assert cfg.REQUEST_TIMEOUT == 3.5
    assert cfg.RATES_FILE_PATH == str(tmp_path / "rates.json")
    assert cfg.FEED_ENCODING == "utf-8"
