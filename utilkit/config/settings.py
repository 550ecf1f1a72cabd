"""Настройки, загружаемые из переменных окружения.

Все значения читаются из окружения (префикс ``UTILKIT_``). Значения по умолчанию
совпадают с константами библиотеки: точность сравнения матриц 0.001, вывод в PNG,
строка-маркер ``EOF`` в CSV.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatrixSettings(BaseSettings):
    """Параметры матричной арифметики."""

    model_config = SettingsConfigDict(env_prefix="UTILKIT_MATRIX_")

    epsilon: float = Field(default=0.001, gt=0.0)
    """Допуск поэлементного сравнения матриц."""


class ImageSettings(BaseSettings):
    """Параметры чтения/записи растров."""

    model_config = SettingsConfigDict(env_prefix="UTILKIT_IMAGE_")

    output_format: str = "PNG"
    default_recolor_mode: Literal["p", "d", "t"] = "p"


class CSVSettings(BaseSettings):
    """Формат CSV-файлов."""

    model_config = SettingsConfigDict(env_prefix="UTILKIT_CSV_")

    delimiter: str = Field(default=",", min_length=1)
    sentinel: str = "EOF"  # строка, прерывающая чтение
    encoding: str = "utf-8"


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="UTILKIT_LOG_")

    level: str = "INFO"


class Settings(BaseSettings):
    """Корневой объект настроек."""

    model_config = SettingsConfigDict(extra="ignore")

    matrix: MatrixSettings = Field(default_factory=MatrixSettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    csv: CSVSettings = Field(default_factory=CSVSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Возвращает общий (кэшированный) экземпляр настроек."""
    return Settings()
