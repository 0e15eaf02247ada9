class RateImportError(Exception):
    """Базовая ошибка импорта курсов."""


class ConfigurationError(RateImportError):
    """Не задан обязательный параметр конфигурации."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class TransportError(RateImportError):
    """Ошибка при обращении к внешнему источнику курсов."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class PersistenceError(RateImportError):
    """Ошибка при сохранении курсов в таблицу валют."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
