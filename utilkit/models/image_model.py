"""Модели данных для растровых изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель загруженного изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Загруженное изображение PIL (всегда в режиме "RGBA").
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла до приведения к RGBA, например "P" или "RGB".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]


@dataclass(frozen=True)
class ColorSummary:
    """Сводка по цветам пиксмапа.

    Fields:
        width, height: Размеры, px.
        distinct: Число различных ARGB-значений.
        darkest, brightest: Цвета с минимальной и максимальной суммой каналов.
        dominant: Цвет с наибольшей площадью.
        channels: Для каждого канала (R, G, B) тройка (ненулевых цветов, минимум, максимум).
    """
    width: int
    height: int
    distinct: int
    darkest: int
    brightest: int
    dominant: int
    channels: tuple
