"""Czech National Bank rate importer.

Получение ежедневных курсов ЧНБ (текстовый фид с разделителем '|')
и сохранение их в таблицу валют.

Публичная точка входа:
- importer.CzechCentralBankImporter.import_rates(): единоразовый импорт
- используется CLI-командой: import-rates
"""

from __future__ import annotations

__all__ = [
    "config",
    "http_client",
    "importer",
    "parser",
    "scheduler",
    "storage",
]
