"""Плотная матрица вещественных чисел и операции линейной алгебры.

Принципы:
- SRP: класс хранит двумерный массив float64 и выполняет над ним операции.
- Ошибки размерностей не бросают исключений: метод возвращает `None`/`False`
  и пишет предупреждение в лог.
- Определитель и обратная матрица считаются разложением по алгебраическим
  дополнениям (без исключения Гаусса).
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from utilkit.config.settings import get_settings
from utilkit.infrastructure.logging import get_logger

logger = get_logger(__name__)

MatrixLike = Union["Matrix", Sequence[Sequence[float]], Sequence[float], np.ndarray]


class Matrix:
    """Матрица `rows x cols`.

    Хранилище всегда копируется при создании, поэтому две матрицы никогда не
    разделяют данные. Скалярные операции (`add`, `multiply`, `divide`, `mod`),
    `transpose` и `invert` меняют матрицу на месте; остальные операции
    возвращают новую матрицу.
    """

    def __init__(self, values: Optional[MatrixLike] = None) -> None:
        if values is None:
            self._data = np.zeros((0, 0), dtype=np.float64)
            return
        if isinstance(values, Matrix):
            self._data = values._data.copy()
            return

        arr = np.array(values, dtype=np.float64)
        if arr.size == 0:
            arr = np.zeros((0, 0), dtype=np.float64)
        elif arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        elif arr.ndim != 2:
            raise ValueError(f"Ожидался двумерный массив, получено измерений: {arr.ndim}")
        self._data = arr

    # ---------- Конструкторы ----------
    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Нулевая матрица `rows x cols`."""
        m = cls()
        m._data = np.zeros((rows, cols), dtype=np.float64)
        return m

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """Единичная матрица `n x n`."""
        m = cls()
        m._data = np.eye(n, dtype=np.float64)
        return m

    @classmethod
    def from_vector(cls, vector: Iterable[float]) -> "Matrix":
        """Вектор-столбец `n x 1`."""
        m = cls()
        m._data = np.array(list(vector), dtype=np.float64).reshape(-1, 1)
        return m

    def copy(self) -> "Matrix":
        return Matrix(self)

    # ---------- Свойства ----------
    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @property
    def data(self) -> List[List[float]]:
        """Копия элементов в виде вложенных списков."""
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def is_empty(self) -> bool:
        return self._data.size == 0

    def is_square(self) -> bool:
        return self.rows == self.cols

    def _in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self.rows and 0 <= j < self.cols

    def get_value(self, i: int, j: int) -> float:
        """Возвращает элемент (i, j).

        Для пустой матрицы возвращает 0.0, для позиции вне границ возвращает
        элемент (0, 0). Оба случая пишутся в лог.
        """
        if self.is_empty():
            logger.warning("Matrix not set yet, returning 0.0")
            return 0.0
        if not self._in_bounds(i, j):
            logger.warning("Matrix position out of bounds: (i,j) = (%d, %d), returning value at (0,0)", i, j)
            return float(self._data[0, 0])
        return float(self._data[i, j])

    def set_value(self, i: int, j: int, value: float) -> None:
        # позиции вне границ молча игнорируются
        if self._in_bounds(i, j):
            self._data[i, j] = value

    # ---------- Скалярная алгебра (на месте) ----------
    def add(self, value: float) -> None:
        if value == 0.0:
            return
        self._data += value

    def multiply(self, value: float) -> None:
        if value == 1.0:
            return
        self._data *= value

    def divide(self, value: float) -> None:
        if value == 0.0:
            logger.error("Attempting to divide matrix by zero, ignoring")
            return
        if value == 1.0:
            return
        self._data /= value

    def mod(self, value: float) -> None:
        if value == 0.0:
            logger.error("Attempting matrix modulo by zero, ignoring")
            return
        self._data = np.fmod(self._data, value)

    # ---------- Сравнение ----------
    def equals(self, other: "Matrix", epsilon: Optional[float] = None) -> bool:
        """Поэлементное сравнение с допуском `epsilon` (по умолчанию из настроек)."""
        if self.shape != other.shape:
            return False
        eps = get_settings().matrix.epsilon if epsilon is None else epsilon
        return bool(np.all(np.abs(self._data - other._data) <= eps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # изменяемый объект

    # ---------- Статистика ----------
    def sum(self) -> float:
        return float(self._data.sum())

    def mag(self) -> float:
        """Сумма модулей элементов."""
        return float(np.abs(self._data).sum())

    def max(self) -> float:
        if self.is_empty():
            logger.warning("Max of an empty matrix, returning 0.0")
            return 0.0
        return float(self._data.max())

    def min(self) -> float:
        if self.is_empty():
            logger.warning("Min of an empty matrix, returning 0.0")
            return 0.0
        return float(self._data.min())

    def mean(self) -> float:
        if self.is_empty():
            logger.warning("Mean of an empty matrix, returning 0.0")
            return 0.0
        return self.sum() / self._data.size

    def mode(self) -> float:
        """Наиболее частый элемент.

        Частоты считаются попарным сравнением всех элементов; при равенстве
        частот побеждает первый элемент в порядке обхода по строкам.
        """
        if self.is_empty():
            logger.warning("Mode of an empty matrix, returning 0.0")
            return 0.0
        flat = self._data.ravel()
        counts = (flat[:, None] == flat[None, :]).sum(axis=1)
        return float(flat[int(np.argmax(counts))])

    # ---------- Матричные операции ----------
    def cross(self, other: "Matrix") -> Optional["Matrix"]:
        """Матричное произведение `self x other`; `None` при несовместимых размерах."""
        if self.cols != other.rows:
            logger.warning("Incompatible matrices for cross product: %s x %s", self.shape, other.shape)
            return None
        result = Matrix()
        result._data = self._data @ other._data
        return result

    def __matmul__(self, other: "Matrix") -> Optional["Matrix"]:
        return self.cross(other)

    def dot(self, other: "Matrix") -> Optional[float]:
        """Скалярное произведение векторов через `transposed().cross(other)`."""
        result = self.transposed().cross(other)
        if result is None:
            return None
        return result.get_value(0, 0)

    def cof(self, row: int, col: int) -> Optional["Matrix"]:
        """Минор элемента (row, col) с циклическим обходом индексов.

        Строки и столбцы берутся начиная со следующих за `row`/`col` с
        переходом через край: `data[(row + i) % rows][(col + j) % cols]`.
        Такой минор совпадает с классическим с точностью до знака
        (см. `cofactor`).
        """
        if not self._in_bounds(row, col):
            logger.warning("Cofactor position out of bounds: (%d, %d)", row, col)
            return None
        rows_idx = [(row + i) % self.rows for i in range(1, self.rows)]
        cols_idx = [(col + j) % self.cols for j in range(1, self.cols)]
        result = Matrix()
        result._data = self._data[np.ix_(rows_idx, cols_idx)].copy()
        if result._data.size == 0:
            result._data = np.zeros((0, 0), dtype=np.float64)
        return result

    def cofactor(self, row: int, col: int) -> float:
        """Алгебраическое дополнение элемента (row, col).

        Циклический минор `cof` отличается от классического перестановкой строк и
        столбцов со знаком `(-1) ** ((row + col) * (n - 2))`, отсюда множитель
        `(-1) ** ((row + col) * (n - 1))`. Для нечётного `n` он всегда равен 1.
        """
        minor = self.cof(row, col)
        if minor is None:
            return 0.0
        sign = -1.0 if ((row + col) * (self.rows - 1)) % 2 else 1.0
        return sign * minor.det()

    def det(self) -> float:
        """Определитель разложением по первой строке."""
        if not self.is_square():
            logger.warning("Determinant of a non-square matrix %s, returning 0.0", self.shape)
            return 0.0
        n = self.rows
        if n == 0:
            return 0.0
        if n == 1:
            return float(self._data[0, 0])
        if n == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return float(sum(self._data[0, j] * self.cofactor(0, j) for j in range(n)))

    def adj(self) -> "Matrix":
        """Присоединённая матрица (транспонированная матрица дополнений)."""
        result = Matrix.zeros(self.cols, self.rows)
        if self.rows == 1 and self.cols == 1:
            result._data[0, 0] = 1.0
            return result
        for i in range(self.rows):
            for j in range(self.cols):
                result._data[j, i] = self.cofactor(i, j)
        return result

    def inverse(self) -> Optional["Matrix"]:
        """Обратная матрица `adj / det`; `None` для неквадратной или вырожденной."""
        if not self.is_square() or self.is_empty():
            logger.warning("Cannot invert a non-square matrix %s", self.shape)
            return None
        determinant = self.det()
        if np.isclose(determinant, 0.0, rtol=0.0, atol=1e-12):
            logger.error("Cannot invert a singular matrix (det = 0)")
            return None
        result = self.adj()
        result.divide(determinant)
        return result

    def invert(self) -> bool:
        """Обращает матрицу на месте. Возвращает False, если это невозможно."""
        result = self.inverse()
        if result is None:
            return False
        self._data = result._data
        return True

    def transpose(self) -> None:
        self._data = self._data.T.copy()

    def transposed(self) -> "Matrix":
        result = Matrix()
        result._data = self._data.T.copy()
        return result

    # ---------- Печать ----------
    def __repr__(self) -> str:
        return f"Matrix({self.data!r})"

    def __str__(self) -> str:
        return "\n".join("\t".join(str(v) for v in row) for row in self._data.tolist())
