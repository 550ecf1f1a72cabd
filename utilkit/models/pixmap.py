"""Пиксмап: двумерная сетка пикселей.

Принципы:
- SRP: хранит сетку `Pixel`, считает статистику цветов и применяет фильтры;
  файловый ввод-вывод делегирован `ImageService`.
- Множество различных цветов кэшируется и сбрасывается при любом изменении
  пикселей (`set_pixel`, `filter`, `recolor_image`, `read_image`).
"""
from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

import numpy as np

from utilkit.config.settings import get_settings
from utilkit.infrastructure.logging import get_logger
from utilkit.models.matrix import Matrix
from utilkit.models.pixel import FilterLike, Pixel, read_only_table
from utilkit.services.image_service import ImageService

logger = get_logger(__name__)

# Копунктальные точки дальтонизма в пространстве CIE XYZ
PROTAN_COPUNCTAL = read_only_table([[0.747], [0.253], [0.0]])
DEUTAN_COPUNCTAL = read_only_table([[1.08], [-0.8], [0.0]])
TRITAN_COPUNCTAL = read_only_table([[0.171], [0.0], [0.0]])

# Матрицы симуляции дальтонизма (только для чтения; в фильтр идут через Matrix)
PROTAN = read_only_table([[0.567, 0.433, 0.000],
                          [0.558, 0.442, 0.000],
                          [0.000, 0.242, 0.478]])
DEUTAN = read_only_table([[0.625, 0.375, 0.000],
                          [0.700, 0.300, 0.000],
                          [0.000, 0.300, 0.700]])
TRITAN = read_only_table([[0.950, 0.050, 0.000],
                          [0.000, 0.433, 0.567],
                          [0.000, 0.475, 0.525]])

# p = протанопия, d = дейтеранопия, t = тританопия
RECOLOR_MODES = ("p", "d", "t")
_RECOLOR_FILTERS = dict(zip(RECOLOR_MODES, (PROTAN, DEUTAN, TRITAN)))


class Pixmap:
    """Сетка пикселей `height x width`.

    Новый пиксмап заполнен прозрачным чёрным (ARGB 0x00000000).
    """

    def __init__(self, height: int = 0, width: int = 0, image_service: Optional[ImageService] = None) -> None:
        self._height = max(int(height), 0)
        self._width = max(int(width), 0)
        self._grid: List[List[Optional[Pixel]]] = [
            [Pixel(0) for _ in range(self._width)] for _ in range(self._height)
        ]
        self._colors: Optional[FrozenSet[int]] = None
        self._service = image_service or ImageService()
        self.filename: Optional[Path] = None

    @classmethod
    def from_file(cls, file_path: str | Path, image_service: Optional[ImageService] = None) -> "Pixmap":
        """Читает изображение с диска. При ошибке возвращает пустой пиксмап 0 x 0."""
        pixmap = cls(0, 0, image_service)
        pixmap.read_image(file_path)
        return pixmap

    @classmethod
    def from_argb_array(cls, argb: np.ndarray, image_service: Optional[ImageService] = None) -> "Pixmap":
        pixmap = cls(0, 0, image_service)
        pixmap._load_argb(np.asarray(argb, dtype=np.uint32))
        return pixmap

    def _load_argb(self, argb: np.ndarray) -> None:
        self._height, self._width = (int(argb.shape[0]), int(argb.shape[1])) if argb.ndim == 2 else (0, 0)
        self._grid = [[Pixel(int(value)) for value in row] for row in argb.tolist()] if self._height else []
        self._colors = None

    # ---------- Ввод-вывод ----------
    def read_image(self, file_path: str | Path) -> bool:
        """Загружает пиксели из файла. Возвращает False, если файл не прочитан."""
        try:
            image_data = self._service.load_image(file_path)
        except (FileNotFoundError, ValueError, OSError) as exc:
            logger.error("Failed to read image %s: %s", file_path, exc)
            return False

        self.filename = image_data.path
        if image_data.mode != "RGBA":
            logger.debug("Pixels of %s not in ARGB format (%s), using ARGB instead", file_path, image_data.mode)
        self._load_argb(self._service.to_argb_array(image_data.pil_image))
        return True

    def write_image(self, file_path: str | Path) -> bool:
        """Записывает пиксмап в PNG.

        Пустая ячейка сетки (`None`) прерывает запись с ошибкой в логе.
        """
        argb = np.zeros((self._height, self._width), dtype=np.uint32)
        for i, row in enumerate(self._grid):
            for j, pixel in enumerate(row):
                if pixel is None:
                    logger.error("Pixmap location (%d, %d) is null, image %s not written", i, j, file_path)
                    return False
                argb[i, j] = pixel.get_rgb()

        try:
            self._service.save_argb(argb, file_path)
        except (OSError, ValueError) as exc:
            logger.error("Failed to write image %s: %s", file_path, exc)
            return False
        return True

    def to_argb_array(self) -> np.ndarray:
        """ARGB-значения всех пикселей; пустые ячейки дают 0."""
        argb = np.zeros((self._height, self._width), dtype=np.uint32)
        for i, row in enumerate(self._grid):
            for j, pixel in enumerate(row):
                if pixel is not None:
                    argb[i, j] = pixel.get_rgb()
        return argb

    # ---------- Доступ к пикселям ----------
    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    def _in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self._height and 0 <= j < self._width

    def get_pixel(self, i: int, j: int) -> Optional[Pixel]:
        if not self._in_bounds(i, j):
            return None
        return self._grid[i][j]

    def set_pixel(self, i: int, j: int, pixel: Optional[Pixel]) -> None:
        if not self._in_bounds(i, j):
            logger.debug("Pixmap location (%d, %d) out of bounds, ignoring", i, j)
            return
        self._grid[i][j] = pixel
        self._colors = None

    def _argb_values(self) -> Iterator[int]:
        for row in self._grid:
            for pixel in row:
                if pixel is not None:
                    yield pixel.get_rgb()

    # ---------- Статистика цветов ----------
    def get_colors(self) -> FrozenSet[int]:
        """Множество различных ARGB-значений (кэшируется)."""
        if self._colors is None:
            self._colors = frozenset(self._argb_values())
        return self._colors

    def get_color_count(self, color: int) -> int:
        return sum(1 for value in self._argb_values() if value == color)

    def get_color_area(self, color: int) -> Optional[Set[Tuple[int, int]]]:
        """Координаты (строка, столбец) пикселей цвета `color`; `None`, если цвета нет."""
        if color not in self.get_colors():
            return None
        return {
            (i, j)
            for i, row in enumerate(self._grid)
            for j, pixel in enumerate(row)
            if pixel is not None and pixel.get_rgb() == color
        }

    def get_max_color_count(self) -> int:
        """Цвет с наибольшей площадью (0 для пустого пиксмапа)."""
        counts = Counter(self._argb_values())
        if not counts:
            return 0
        return counts.most_common(1)[0][0]

    def count_colors(self, channel: Optional[int] = None) -> Tuple[int, int, int]:
        """Агрегаты по различным цветам за один проход.

        Args:
            channel: None — по цвету целиком; 1/2/3 — по красному/зелёному/синему каналу.

        Returns:
            Без канала: (число цветов, самый тёмный цвет, самый яркий цвет) по сумме каналов;
            оба цвета берутся из пиксмапа, для пустого пиксмапа (0, 0, 0).
            С каналом: (число цветов с ненулевым каналом, минимум канала, максимум канала).
        """
        colors = sorted(self.get_colors())

        if channel is None:
            if not colors:
                return 0, 0, 0
            darkest = brightest = colors[0]
            for color in colors:
                total = self._channel_sum(color)
                if total < self._channel_sum(darkest):
                    darkest = color
                if total > self._channel_sum(brightest):
                    brightest = color
            return len(colors), darkest, brightest

        nonzero, low, high = 0, 255, 0
        for color in colors:
            value = Pixel.channel_of(channel, color)
            if value > 0:
                nonzero += 1
            low = min(low, value)
            high = max(high, value)
        return nonzero, low, high

    @staticmethod
    def _channel_sum(color: int) -> int:
        return sum(Pixel.channel_of(mode, color) for mode in (1, 2, 3))

    # ---------- Фильтры ----------
    def filter(self, filter_matrix: FilterLike) -> None:
        """Перекрашивает каждый пиксель фильтром (см. `Pixel.recolor_pixel`)."""
        for row in self._grid:
            for pixel in row:
                if pixel is not None:
                    pixel.recolor_pixel(filter_matrix)
        self._colors = None

    def recolor_image(self, mode: Optional[str] = None) -> None:
        """Симуляция дальтонизма: "p" — протанопия, "d" — дейтеранопия, "t" — тританопия.

        `None` берёт режим из настроек; неизвестный режим заменяется протанопией.
        """
        if mode is None:
            mode = get_settings().image.default_recolor_mode
        table = _RECOLOR_FILTERS.get(mode)
        if table is None:
            logger.warning("Unknown recolor mode %r, using protanopia", mode)
            table = PROTAN
        self.filter(Matrix(table))

    def __repr__(self) -> str:
        return f"Pixmap(height={self._height}, width={self._width})"
