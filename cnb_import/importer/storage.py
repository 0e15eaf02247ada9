from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..core.exceptions import PersistenceError
from ..core.models import RateTable
from .config import load_importer_config


def _now_iso() -> str:
    return (
        datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    )


def _atomic_write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
    os.replace(tmp, path)


class BaseRateStore(ABC):
    @abstractmethod
    def save_rates(self, rates: RateTable) -> None:
        """Persist {base: {target: rate}}.

        Raises:
            PersistenceError: when the table cannot be written
        """


class JsonRateStore(BaseRateStore):
    """Currency rate table kept in a JSON file.

    Layout: {"rates": {"CZK": {"EUR": 0.0395}}, "updated_at": iso}.
    Saving inserts new pairs and updates existing ones; pairs absent from
    the saved table are kept.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    @classmethod
    def from_config(cls) -> "JsonRateStore":
        return cls(load_importer_config().RATES_FILE_PATH)

    def read_table(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"rates": {}, "updated_at": None}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Corrupted JSON at {self.path}: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Unexpected table layout at {self.path}")
        data.setdefault("rates", {})
        data.setdefault("updated_at", None)
        return data

    def read_rates(self) -> RateTable:
        table = self.read_table()
        try:
            return {
                str(base): {str(code): float(rate) for code, rate in targets.items()}
                for base, targets in dict(table["rates"]).items()
                if isinstance(targets, dict)
            }
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Corrupted rate table at {self.path}: {exc}") from exc

    def save_rates(self, rates: RateTable) -> None:
        current = self.read_rates()
        for base, targets in rates.items():
            row = current.setdefault(str(base).upper(), {})
            for code, rate in targets.items():
                try:
                    row[str(code).upper()] = float(rate)
                except (TypeError, ValueError) as exc:
                    raise PersistenceError(
                        f"Invalid rate for {base}/{code}: {rate!r}"
                    ) from exc
        try:
            _atomic_write_json(self.path, {"rates": current, "updated_at": _now_iso()})
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self.path}: {exc}") from exc
