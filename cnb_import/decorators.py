from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable

from .core.models import MessageKind
from .logging_config import LOGGER_NAME

_logger = logging.getLogger(LOGGER_NAME)


def log_action(action: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log importer runs at INFO level.

    Logs timestamp ISO, action, source, message count, and result
    (OK/WARN/ERROR). The wrapped method's owner must expose `get_log()`.
    Does not swallow exceptions.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            # Uniform ISO timestamp without microseconds, UTC 'Z' suffix
            ts = (
                datetime.now(timezone.utc)
                .replace(microsecond=0)
                .isoformat()
                .replace("+00:00", "Z")
            )
            source = getattr(self, "SOURCE", type(self).__name__)
            try:
                result = func(self, *args, **kwargs)
            except Exception as exc:
                _logger.info(
                    "%s %s source=%s result=ERROR error_type=%s error_message='%s'",
                    ts,
                    action,
                    source,
                    type(exc).__name__,
                    str(exc).replace("'", "\\'"),
                )
                raise
            entries = self.get_log()
            failed = any(e.kind is MessageKind.ERROR for e in entries)
            _logger.info(
                "%s %s source=%s messages=%d result=%s",
                ts,
                action,
                source,
                len(entries),
                "WARN" if failed else "OK",
            )
            return result

        return wrapper

    return decorator
