"""Настройка логирования.

Единый формат сообщений для всех модулей пакета. Модули получают логгер через
`get_logger(__name__)`, а точка входа вызывает `setup_logging` один раз.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Настраивает корневой логгер.

    Логи пишутся в stderr: stdout остаётся за выводом команд CLI.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR).
        format_string: Свой формат сообщений (по умолчанию `DEFAULT_FORMAT`).
        stream: Поток для логов (по умолчанию текущий `sys.stderr`).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер модуля (обычно `__name__`)."""
    return logging.getLogger(name)
