"""
Logging — Структурированное JSON-логирование decimath

Модуль содержит:
- StructuredFormatter: одна JSON-строка на запись (ts, level, logger, message + extra)
- get_logger: логгер в пространстве имён decimath
- configure_logging / reset_logging: подключение и сброс обработчика

По умолчанию библиотека молчит: на логгере decimath висит NullHandler.
Приложение включает вывод через configure_logging().

Горячие арифметические пути не логируют; события пишут только
декодирование, распределение и Money.
"""

__all__ = [
    "StructuredFormatter",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

# =============================================================================
# JSON FORMATTER
# =============================================================================

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """Сериализация Decimal и DecimalValue в полях записи."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if hasattr(obj, "units") and hasattr(obj, "scale"):
            return {"units": obj.units, "scale": obj.scale}
        return str(obj)


class StructuredFormatter(logging.Formatter):
    """Форматирование записи в одну JSON-строку."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Поля extra (служебные атрибуты LogRecord пропускаются)
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder)


# =============================================================================
# LOGGER FACTORY
# =============================================================================

_LOGGER_PREFIX = "decimath"

logging.getLogger(_LOGGER_PREFIX).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Логгер в пространстве имён decimath (имена модулей decimath.* сохраняются)."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# =============================================================================
# INITIALIZATION
# =============================================================================

_configured = False
_installed: list[logging.Handler] = []
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Настройка иерархии логгеров decimath (идемпотентно).

    Args:
        level: Уровень логгера decimath
        stream: Поток для StreamHandler (по умолчанию stderr)
        handler: Готовый обработчик вместо StreamHandler
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    root_logger.addHandler(h)
    _installed.append(h)


def reset_logging() -> None:
    """Сброс настройки логирования. ТОЛЬКО ДЛЯ ТЕСТОВ."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    for h in _installed:
        logger.removeHandler(h)
    _installed.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
