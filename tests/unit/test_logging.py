"""
Тесты для структурированного логирования (decimath/logging_config.py)

Проверяет:
1. JSON-формат записей и поля extra
2. События библиотеки: декодирование, выравнивание Money
3. Настройку и сброс логгера decimath
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from decimath.core.codec import decode_units_scale
from decimath.core.domain import DecimalValue, Money
from decimath.core.errors import DecimalDecodeError
from decimath.logging_config import (
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Сброс состояния логирования между тестами"""
    reset_logging()
    yield
    reset_logging()


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_all_logs(stream: StringIO) -> list[dict]:
    """Разбор всех JSON-строк из потока"""
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# =============================================================================
# STRUCTURED FORMATTER
# =============================================================================


class TestStructuredFormatter:
    """Тесты JSON-формата записей"""

    def test_basic_json_output(self):
        """Запись выводится одной JSON-строкой с базовыми полями"""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_all_logs(stream)[0]
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "decimath.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        """Поля extra попадают в JSON"""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("rescaled", extra={"from_scale": 3, "to_scale": 2})

        record = _parse_all_logs(stream)[0]
        assert record["from_scale"] == 3
        assert record["to_scale"] == 2

    def test_decimal_payloads_serialized(self):
        """Decimal и DecimalValue сериализуются в extra"""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info(
            "values",
            extra={"exact": Decimal("1.50"), "value": DecimalValue(units=150, scale=2)},
        )

        record = _parse_all_logs(stream)[0]
        assert record["exact"] == "1.50"
        assert record["value"] == {"units": 150, "scale": 2}

    def test_exception_fields(self):
        """Исключение добавляет тип, сообщение и traceback"""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            decode_units_scale("abc")
        except DecimalDecodeError:
            logger.error("failed", exc_info=True)

        records = _parse_all_logs(stream)
        record = records[-1]
        assert record["exc_type"] == "DecimalDecodeError"
        assert record["exc_message"].startswith("Expected decimal number")
        assert "traceback" in record


# =============================================================================
# LIBRARY EVENTS
# =============================================================================


class TestLibraryEvents:
    """Тесты событий модулей decimath"""

    def test_decode_failure_logged(self):
        """Неуспешное декодирование пишет попытки и итоговое событие"""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)

        with pytest.raises(DecimalDecodeError):
            decode_units_scale("abc")

        records = _parse_all_logs(stream)
        attempts = [r for r in records if r["message"] == "decode_attempt_failed"]
        assert [r["attempt"] for r in attempts] == ["exact_number", "google_decimal", "string"]
        failure = records[-1]
        assert failure["message"] == "decode_failed"
        assert failure["level"] == "WARNING"
        assert failure["input_type"] == "str"
        assert failure["logger"] == "decimath.core.codec.wire"

    def test_debug_hidden_at_info(self):
        """DEBUG-события скрыты на уровне INFO"""
        handler, stream = _make_handler()
        configure_logging(handler=handler)

        with pytest.raises(DecimalDecodeError):
            decode_units_scale("abc")

        messages = [r["message"] for r in _parse_all_logs(stream)]
        assert messages == ["decode_failed"]

    def test_money_rescale_logged(self):
        """Выравнивание суммы Money пишет money_rescaled"""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)

        Money(amount=DecimalValue(units=10125, scale=3), currency="usd")

        record = _parse_all_logs(stream)[0]
        assert record["message"] == "money_rescaled"
        assert record["currency"] == "USD"
        assert record["from_scale"] == 3
        assert record["to_scale"] == 2


# =============================================================================
# CONFIGURE LOGGING
# =============================================================================


class TestConfigureLogging:
    """Тесты настройки логирования"""

    def test_idempotent(self):
        """Повторная настройка не добавляет обработчик"""
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)  # повторный вызов игнорируется
        root = logging.getLogger("decimath")
        assert h1 in root.handlers
        assert h2 not in root.handlers

    def test_silent_by_default(self):
        """Без настройки на логгере только NullHandler"""
        root = logging.getLogger("decimath")
        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)
        assert root.propagate

    def test_reset_restores_propagation(self):
        """reset_logging возвращает propagate"""
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        assert not logging.getLogger("decimath").propagate
        reset_logging()
        root = logging.getLogger("decimath")
        assert root.propagate
        assert handler not in root.handlers

    def test_get_logger_returns_child(self):
        """Короткое имя получает префикс decimath"""
        assert get_logger("codec.wire").name == "decimath.codec.wire"

    def test_get_logger_keeps_module_names(self):
        """Имя модуля decimath.* не меняется"""
        assert get_logger("decimath.core.math.allocation").name == "decimath.core.math.allocation"
        assert get_logger("decimath").name == "decimath"
