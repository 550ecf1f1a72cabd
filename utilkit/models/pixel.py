"""Пиксель и таблицы преобразования цветовых пространств.

Пиксель хранит значения каналов вектором-столбцом `Matrix` (3 x 1) и метку
текущего цветового пространства. Переходы между пространствами выполняются только
методами `to_rgb`/`to_xyz`; реализована лишь пара RGB <-> XYZ.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Sequence, Tuple, Union

import numpy as np

from utilkit.infrastructure.logging import get_logger
from utilkit.models.matrix import Matrix

logger = get_logger(__name__)


class Colorspace(Enum):
    RGB = "rgb"  # линейный RGB, [0, 1]
    SRGB = "srgb"  # гамма-корректированный RGB, [0, 1]
    XYZ = "xyz"  # CIE XYZ
    D65 = "d65"  # XYZ, нормированный так, что Y для D65 равен 1.0
    XYY = "xyy"  # CIE xyY
    LMS = "lms"  # пространство колбочек (Long, Medium, Short)
    HSV = "hsv"


def read_only_table(values: Sequence) -> np.ndarray:
    """Неизменяемый массив float64 для общих констант модуля."""
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


# sRGB (D65) -> CIE XYZ
RGB_TO_XYZ = read_only_table([[0.4124, 0.3576, 0.1805],
                              [0.2126, 0.7152, 0.0722],
                              [0.0193, 0.1192, 0.9505]])
# CIE XYZ -> sRGB (D65)
XYZ_TO_RGB = read_only_table([[3.2406, -1.5372, -0.4986],
                              [-0.9689, 1.8758, 0.0415],
                              [0.0557, -0.2040, 1.0570]])
# стандартная пара CIE 1931 RGB <-> XYZ
CIE_RGB_TO_XYZ = read_only_table([[0.49000, 0.31000, 0.200000],
                                  [0.17697, 0.81240, 0.010630],
                                  [0.00000, 0.01000, 0.990000]])
CIE_XYZ_TO_RGB = read_only_table([[0.41847000, -0.1586600, -0.082835],
                                  [-0.09116900, 0.2524300, 0.015708],
                                  [0.00092090, -0.0025498, 0.178600]])
# Hunt-Pointer-Estevez: XYZ -> LMS
XYZ_TO_LMS = read_only_table([[0.38971, 0.68898, -0.07868],
                              [-0.22981, 1.18340, 0.04641],
                              [0.00000, 0.00000, 1.00000]])
# Hunt-Pointer-Estevez, нормированная на D65
XYZ_TO_D65 = read_only_table([[0.4002, 0.7076, -0.0808],
                              [-0.2263, 1.1653, 0.0457],
                              [0.0000, 0.0000, 0.9182]])
# sRGB -> CIE xyY
SRGB_TO_XYY = read_only_table([[0.6400, 0.3000, 0.1500],
                               [0.3300, 0.6000, 0.0600],
                               [0.2126, 0.7152, 0.0722]])

TRANSFORMS: Dict[Tuple[Colorspace, Colorspace], np.ndarray] = {
    (Colorspace.RGB, Colorspace.XYZ): RGB_TO_XYZ,
    (Colorspace.XYZ, Colorspace.RGB): XYZ_TO_RGB,
    (Colorspace.XYZ, Colorspace.LMS): XYZ_TO_LMS,
    (Colorspace.XYZ, Colorspace.D65): XYZ_TO_D65,
    (Colorspace.SRGB, Colorspace.XYY): SRGB_TO_XYY,
}


def transform_matrix(source: Colorspace, target: Colorspace) -> Matrix:
    """Возвращает копию матрицы перехода `source -> target` из таблицы `TRANSFORMS`.

    Raises:
        KeyError: если переход не описан в таблице.
    """
    return Matrix(TRANSFORMS[(source, target)])


FilterLike = Union[Matrix, np.ndarray, Sequence[Sequence[float]]]


def _as_matrix(value: FilterLike) -> Matrix:
    return value if isinstance(value, Matrix) else Matrix(value)


def combine_filters(filters: Sequence[FilterLike]) -> Matrix:
    """Сворачивает цепочку `[F0, F1, ..., Fn]` в одну матрицу `Fn x ... x F1 x F0`.

    Первый фильтр цепочки применяется к пикселю первым.
    """
    if not filters:
        raise ValueError("Пустая цепочка фильтров")
    result = _as_matrix(filters[-1])
    for f in reversed(filters[:-1]):
        combined = result.cross(_as_matrix(f))
        if combined is None:
            raise ValueError("Несовместимые размеры матриц в цепочке фильтров")
        result = combined
    return result


class Pixel:
    """Один пиксель изображения.

    Создаётся из упакованного 32-битного ARGB. Альфа-канал исходного значения
    сохраняется при любых преобразованиях и возвращается в `get_rgb`.
    """

    def __init__(self, argb: int) -> None:
        self._argb = int(argb) & 0xFFFFFFFF
        self._colorspace = Colorspace.RGB
        self._channels = Matrix.from_vector(self.channel_of(i, self._argb) / 255.0 for i in (1, 2, 3))

    # ---------- Свойства ----------
    @property
    def colorspace(self) -> Colorspace:
        return self._colorspace

    @property
    def channels(self) -> Matrix:
        """Копия вектора значений каналов в текущем пространстве."""
        return self._channels.copy()

    @property
    def alpha(self) -> int:
        return (self._argb >> 24) & 0xFF

    @property
    def original_argb(self) -> int:
        return self._argb

    def copy(self) -> "Pixel":
        clone = Pixel.__new__(Pixel)
        clone._argb = self._argb
        clone._colorspace = self._colorspace
        clone._channels = self._channels.copy()
        return clone

    # ---------- Упаковка ----------
    @staticmethod
    def channel_of(mode: int, value: int) -> int:
        """Значение канала упакованного цвета (1 = красный, 2 = зелёный, 3 = синий)."""
        offset = 16 if mode == 1 else (8 if mode == 2 else 0)
        return (int(value) >> offset) & 0xFF

    def get_channel(self, mode: int) -> int:
        return self.channel_of(mode, self.get_rgb())

    def get_rgb(self) -> int:
        """Упаковывает текущие значения каналов в ARGB.

        Перед упаковкой пиксель переводится в RGB. Каналы округляются до целых и
        ограничиваются диапазоном [0, 255]; альфа берётся из исходного значения.
        """
        if self._colorspace is not Colorspace.RGB:
            self.to_rgb()

        argb = self._argb & 0xFF000000
        for row, offset in ((0, 16), (1, 8), (2, 0)):
            level = int(round(self._channels.get_value(row, 0) * 255.0))
            level = min(max(level, 0), 255)
            argb |= level << offset
        return argb

    # ---------- Цветовые пространства ----------
    def to_rgb(self) -> None:
        if self._colorspace is Colorspace.RGB:
            return
        if self._colorspace is Colorspace.XYZ:
            self._channels = Matrix(XYZ_TO_RGB).cross(self._channels)
            self._colorspace = Colorspace.RGB
            return
        # TODO: переходы из sRGB/D65/xyY/LMS/HSV в RGB не реализованы
        logger.warning("Conversion from %s to RGB is not implemented, pixel left unchanged", self._colorspace.name)

    def to_xyz(self) -> None:
        if self._colorspace is Colorspace.XYZ:
            return
        if self._colorspace is Colorspace.RGB:
            self._channels = Matrix(RGB_TO_XYZ).cross(self._channels)
            self._colorspace = Colorspace.XYZ
            return
        logger.warning("Conversion from %s to XYZ is not implemented, pixel left unchanged", self._colorspace.name)

    # ---------- Фильтры ----------
    def filter(self, matrix: Union[FilterLike, Sequence[FilterLike]]) -> None:
        """Применяет матрицу (или цепочку матриц) к значениям каналов как есть.

        Args:
            matrix: Матрица 3 x 3, вложенный список или список матриц-фильтров.
        """
        if isinstance(matrix, (list, tuple)) and matrix and isinstance(matrix[0], Matrix):
            transform = combine_filters(matrix)
        else:
            transform = _as_matrix(matrix)

        result = transform.cross(self._channels)
        if result is None:
            logger.warning("Filter of shape %s cannot be applied to a pixel", transform.shape)
            return
        self._channels = result

    def recolor_pixel(self, filter_matrix: FilterLike) -> None:
        """Перекрашивает пиксель фильтром, заданным в пространстве XYZ.

        Фильтр 3 x 3 оборачивается переходами RGB -> XYZ и XYZ -> RGB и
        применяется одной матрицей. Вектор копунктальной точки (не 3 столбца)
        не поддерживается: пиксель остаётся без изменений.
        """
        f = _as_matrix(filter_matrix)
        if f.cols != 3:
            logger.info("Recoloring based off copunctal points is not supported, pixel left unchanged")
            return
        transform = combine_filters([Matrix(RGB_TO_XYZ), f, Matrix(XYZ_TO_RGB)])
        self.filter(transform)

    def __repr__(self) -> str:
        values = [round(v[0], 4) for v in self._channels.data]
        return f"Pixel(argb=0x{self._argb:08X}, colorspace={self._colorspace.name}, channels={values})"
