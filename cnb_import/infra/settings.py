from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

SECTION = "cnb_import"


class SettingsLoader:
    """Singleton settings provider.

    Reads pyproject.toml [tool.cnb_import] from the project root, or from
    $CNB_IMPORT_HOME when set (data/ and logs/ then live there too).
    Provides defaults otherwise.
    """

    _instance: "SettingsLoader | None" = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):  # noqa: D401 - singleton boilerplate
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True
        home = os.getenv("CNB_IMPORT_HOME")
        self._root = Path(home) if home else Path(__file__).resolve().parents[2]
        self._config: dict[str, Any] = {}
        self.reload()

    def _defaults(self) -> dict[str, Any]:
        root = self._root
        return {
            "data_dir": str(root / "data"),
            "logs_dir": str(root / "logs"),
            "log_file": str(root / "logs" / "import.log"),
            "log_level": "INFO",
            "log_rotation_bytes": 1_048_576,  # 1MB
            "log_backup_count": 5,
            "request_timeout": 10.0,
            "feed_encoding": "utf-8",
            "config": {},
        }

    def _read_section(self) -> dict[str, Any]:
        pyproject = self._root / "pyproject.toml"
        if not pyproject.exists():
            return {}
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError:
            return {}
        section = data.get("tool", {}).get(SECTION, {})
        return section if isinstance(section, dict) else {}

    def reload(self) -> None:
        cfg = self._defaults()
        cfg.update(self._read_section())
        self._config = cfg
        Path(self._config["data_dir"]).mkdir(parents=True, exist_ok=True)
        Path(self._config["logs_dir"]).mkdir(parents=True, exist_ok=True)

    def get(self, key: str, default: Any | None = None) -> Any:
        return self._config.get(key, default)

    def get_table(self, key: str) -> dict[str, Any]:
        """Return a nested table (e.g. "config"), or {} when absent or not a table."""
        value = self._config.get(key)
        return dict(value) if isinstance(value, dict) else {}
