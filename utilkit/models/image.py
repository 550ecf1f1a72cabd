"""Изображение: обёртка над `Pixmap` для геометрических преобразований.

Аффинное преобразование задаётся однородной матрицей 3 x 3, которая переводит
координаты пикселя (x, y, 1) в новые координаты. Выборка обратным отображением
берёт ближайший пиксель отбрасыванием дробной части, без интерполяции.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Tuple

from utilkit.infrastructure.logging import get_logger
from utilkit.models.matrix import Matrix
from utilkit.models.pixel import FilterLike
from utilkit.models.pixmap import Pixmap
from utilkit.numeric.mathutils import array_max, array_min
from utilkit.services.image_service import ImageService

logger = get_logger(__name__)

# Округление перед отбрасыванием дробной части убирает погрешность вида 1.9999999999999998
_SNAP_DIGITS = 9


def rotation(theta: float) -> Matrix:
    """Поворот на угол `theta` (радианы) вокруг начала координат."""
    c, s = math.cos(theta), math.sin(theta)
    return Matrix([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def scaling(sx: float, sy: Optional[float] = None) -> Matrix:
    sy = sx if sy is None else sy
    return Matrix([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def translation(tx: float, ty: float) -> Matrix:
    return Matrix([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def _map_point(t: Matrix, x: float, y: float) -> Tuple[int, int]:
    q = t.cross(Matrix.from_vector([x, y, 1.0]))
    return (
        int(round(q.get_value(0, 0), _SNAP_DIGITS)),
        int(round(q.get_value(1, 0), _SNAP_DIGITS)),
    )


class Image:
    """Изображение, прочитанное из файла.

    Пиксмап принадлежит изображению; `transform` заменяет его новым.
    """

    def __init__(self, filename: str | Path, image_service: Optional[ImageService] = None) -> None:
        self._service = image_service or ImageService()
        self.filename = Path(filename)
        self.pixmap = Pixmap.from_file(self.filename, self._service)

    @property
    def height(self) -> int:
        return self.pixmap.height

    @property
    def width(self) -> int:
        return self.pixmap.width

    def write_image(self, filename: str | Path) -> bool:
        return self.pixmap.write_image(filename)

    def filter(self, filter_matrix: FilterLike) -> None:
        self.pixmap.filter(filter_matrix)

    def recolor(self, mode: Optional[str] = None) -> None:
        self.pixmap.recolor_image(mode)

    def transform(self, t: Matrix) -> Pixmap:
        """Применяет аффинное преобразование к координатам пикселей.

        1. Углы исходного изображения переводятся матрицей `t`, по ним считаются
           новые границы. Сдвиг считается по крайним пикселям (0 .. width - 1,
           0 .. height - 1), иначе при повороте теряется ряд.
        2. Каждый исходный пиксель переносится в новый пиксмап (прямое отображение).
        3. Каждая точка нового пиксмапа переводится обратной матрицей в исходное
           изображение, и оттуда берётся пиксель (обратное отображение). Точки,
           попавшие за пределы исходника, сохраняют результат шага 2.

        Новые координаты сдвигаются так, чтобы левый верхний угол границ
        оказался в (0, 0).

        Args:
            t: Однородная матрица 3 x 3.

        Returns:
            Новый пиксмап (он же становится `self.pixmap`). Для вырожденной
            матрицы — пустой пиксмап 0 x 0.
        """
        if t.shape != (3, 3):
            logger.error("Transform matrix must be 3x3, got %s", t.shape)
            self.pixmap = Pixmap(0, 0, self._service)
            return self.pixmap

        inverse = t.inverse()
        if inverse is None:
            logger.error("Transform matrix is singular, image %s cleared", self.filename)
            self.pixmap = Pixmap(0, 0, self._service)
            return self.pixmap

        source = self.pixmap
        height, width = source.height, source.width

        # размер берётся по внешним границам, сдвиг по крайним пикселям
        edges = [_map_point(t, x, y) for x, y in ((0, 0), (width, 0), (0, height), (width, height))]
        last_x, last_y = max(width - 1, 0), max(height - 1, 0)
        extremes = [_map_point(t, x, y) for x, y in ((0, 0), (last_x, 0), (0, last_y), (last_x, last_y))]
        xs = [x for x, _ in edges]
        ys = [y for _, y in edges]
        new_width = array_max(xs) - array_min(xs)
        new_height = array_max(ys) - array_min(ys)
        min_x = array_min([x for x, _ in extremes])
        min_y = array_min([y for _, y in extremes])

        logger.info("Old bounds: {w=%d, h=%d}", width, height)
        logger.info("New bounds: {w=%d, h=%d}", new_width, new_height)

        result = Pixmap(new_height, new_width, self._service)

        # прямое отображение
        for i in range(height):
            for j in range(width):
                x, y = _map_point(t, j, i)
                pixel = source.get_pixel(i, j)
                if pixel is not None:
                    result.set_pixel(y - min_y, x - min_x, pixel.copy())

        # обратное отображение
        for i in range(new_height):
            for j in range(new_width):
                x, y = _map_point(inverse, j + min_x, i + min_y)
                pixel = source.get_pixel(y, x)
                if pixel is not None:
                    result.set_pixel(i, j, pixel.copy())

        self.pixmap = result
        return result
