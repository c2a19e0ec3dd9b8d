"""Настройка логирования приложения.

Логирует только прикладной слой (загрузка настроек, CLI);
конвейер вычисления выражений не логирует.
"""

import logging
import sys
import time
from typing import Optional, TextIO

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d %(message)s"

# Маркер обработчика, установленного setup_logging (для идемпотентности)
_HANDLER_NAME = "calculator-app"


class UTCFormatter(logging.Formatter):
    """Formatter с временем в UTC, RFC 3339."""

    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        if datefmt:
            return super().formatTime(record, datefmt)
        ct = self.converter(record.created)
        return time.strftime("%Y-%m-%dT%H:%M:%S", ct) + f".{int(record.msecs):03d}Z"


def setup_logging(
    level: str = "WARNING",
    fmt: str = DEFAULT_LOG_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Настройка root логгера.

    Повторный вызов заменяет ранее установленный обработчик, а не добавляет второй.

    Args:
        level: Имя уровня ('DEBUG', 'INFO', ...)
        fmt: Формат записи
        stream: Поток вывода (default: текущий sys.stderr)

    Returns:
        Установленный обработчик
    """
    root = logging.getLogger()

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(UTCFormatter(fmt))

    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler
