import json

import pytest

from cnb_import.core.exceptions import PersistenceError
from cnb_import.importer.storage import JsonRateStore


def test_save_rates_writes_table(tmp_path):
    store = JsonRateStore(tmp_path / "data" / "currency_rates.json")

    store.save_rates({"CZK": {"EUR": 0.04, "USD": 0.045}})

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data["rates"] == {"CZK": {"EUR": 0.04, "USD": 0.045}}
    assert data["updated_at"].endswith("Z")
    assert not store.path.with_suffix(".json.tmp").exists()


def test_save_rates_merges_existing_pairs(tmp_path):
    store = JsonRateStore(tmp_path / "currency_rates.json")
    store.save_rates({"CZK": {"EUR": 0.04, "USD": 0.045}})

    store.save_rates({"CZK": {"EUR": 0.05, "HUF": 14.18}})

    assert store.read_rates() == {"CZK": {"EUR": 0.05, "USD": 0.045, "HUF": 14.18}}


def test_read_rates_missing_file(tmp_path):
    store = JsonRateStore(tmp_path / "missing.json")
    assert store.read_rates() == {}
    assert store.read_table() == {"rates": {}, "updated_at": None}


def test_corrupted_table_raises_persistence_error(tmp_path):
    path = tmp_path / "currency_rates.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonRateStore(path)

    with pytest.raises(PersistenceError):
        store.save_rates({"CZK": {"EUR": 0.04}})


def test_invalid_rate_value_raises_persistence_error(tmp_path):
    store = JsonRateStore(tmp_path / "currency_rates.json")

    with pytest.raises(PersistenceError):
        store.save_rates({"CZK": {"EUR": "n/a"}})
    assert not store.path.exists()


def test_unwritable_location_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonRateStore(blocker / "currency_rates.json")

    with pytest.raises(PersistenceError):
        store.save_rates({"CZK": {"EUR": 0.04}})


def test_non_utf8_table_raises_persistence_error(tmp_path):
    path = tmp_path / "currency_rates.json"
    path.write_bytes(b"\xff\xfe{}")
    store = JsonRateStore(path)

    with pytest.raises(PersistenceError):
        store.read_rates()
    with pytest.raises(PersistenceError):
        store.save_rates({"CZK": {"EUR": 0.04}})


def test_table_path_is_directory_raises_persistence_error(tmp_path):
    path = tmp_path / "currency_rates.json"
    path.mkdir()
    store = JsonRateStore(path)

    with pytest.raises(PersistenceError) as excinfo:
        store.save_rates({"CZK": {"EUR": 0.04}})
    assert "Cannot read" in str(excinfo.value)
