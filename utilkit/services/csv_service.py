"""Чтение CSV-таблиц построчно.

Принципы:
- Первая строка файла — заголовок: задаёт имена и число столбцов.
- Строки без разделителя пропускаются (в подробном режиме это ошибка формата).
- Строка, целиком равная маркеру (по умолчанию ``EOF``), завершает чтение.
- Строки хранятся как есть и разбиваются на поля при каждом обращении.
- Пустые поля в конце строки отбрасываются: `a,b,` даёт два поля.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from utilkit.config.settings import CSVSettings, get_settings
from utilkit.infrastructure.logging import get_logger

logger = get_logger(__name__)


class CSVFormatError(ValueError):
    """Файл не соответствует ожидаемому формату CSV."""


def split_fields(line: str, delimiter: str) -> List[str]:
    """Разбивает строку на поля, отбрасывая пустые поля в конце."""
    fields = line.split(delimiter)
    while len(fields) > 1 and not fields[-1]:
        fields.pop()
    return fields


class CSV:
    def __init__(self, filename: str | Path | None, settings: Optional[CSVSettings] = None) -> None:
        self._settings = settings or get_settings().csv
        self._lines: List[str] = []
        self.title: List[str] = []
        self.filename: Optional[Path] = None
        self.read_csv(filename)

    # ---- Reading ----
    def read_csv(self, filename: str | Path | None) -> None:
        """Читает файл и добавляет его строки к уже прочитанным.

        Raises:
            ValueError: если имя файла не задано.
            FileNotFoundError / OSError: если файл не удалось открыть.
            CSVFormatError: если строка заголовка пустая.
        """
        self._read(filename, verbose=False)

    def read_print_csv(self, filename: str | Path | None) -> None:
        """То же, что `read_csv`, но с журналированием каждой строки и итоговой сводкой.

        Raises:
            CSVFormatError: дополнительно, если встречена строка без разделителя.
        """
        self._read(filename, verbose=True)

    def _read(self, filename: str | Path | None, verbose: bool) -> None:
        if filename is None:
            logger.error("Null filename received")
            raise ValueError("Не задано имя CSV-файла")

        path = Path(filename)
        delimiter = self._settings.delimiter
        sentinel = self._settings.sentinel

        try:
            handle = path.open("r", encoding=self._settings.encoding, newline="")
        except OSError:
            logger.error("Unable to open csv file '%s' for reading", path)
            raise

        with handle:
            header = handle.readline().rstrip("\r\n")
            if verbose:
                logger.info("reading from csv file '%s'...", path)
            if not header:
                logger.error("Blank title line recognized in csv file '%s'", path)
                raise CSVFormatError(f"Пустая строка заголовка в файле {path}")

            self.filename = path
            self.title = split_fields(header, delimiter)

            if header != sentinel:
                for number, raw in enumerate(handle, start=2):
                    line = raw.rstrip("\r\n")
                    if line == sentinel:
                        break
                    if delimiter in line:
                        if verbose:
                            logger.info("line:\t%s", line)
                        self._lines.append(line)
                    elif verbose:
                        logger.error("Blank line recognized in csv file '%s' at line %d", path, number)
                        raise CSVFormatError(f"Строка {number} файла {path} не содержит разделителя")

        if verbose:
            logger.info("csv file read success")
            logger.info("size:\t%d x %d [rows x cols]", self.rows, self.cols)
            logger.info("fields:\t%s", ", ".join(self.title))

    # ---- Accessors ----
    @property
    def rows(self) -> int:
        return len(self._lines)

    @property
    def cols(self) -> int:
        return len(self.title)

    def _split(self, line: str) -> List[str]:
        return split_fields(line, self._settings.delimiter)

    def get_value(self, row: int, col: int) -> str:
        """Значение ячейки (row, col); пустая строка при отрицательном индексе."""
        if row >= 0 and col >= 0:
            return self._split(self._lines[row])[col]
        return ""

    def get_value_where(self, col1: int, col2: int, value: str) -> str:
        """Значение в столбце `col2` первой строки, где в столбце `col1` стоит `value`."""
        if col1 >= 0 and col2 >= 0:
            row = self.get_row_where(col1, value)
            if row is not None:
                return row[col2]
        return ""

    def get_row(self, row: int) -> Optional[List[str]]:
        if 0 <= row < self.rows:
            return self._split(self._lines[row])
        return None

    def get_row_where(self, col: int, value: str) -> Optional[List[str]]:
        """Первая строка, где в столбце `col` стоит `value`; `None`, если такой нет."""
        if col < 0:
            return None
        for line in self._lines:
            tokens = self._split(line)
            if tokens[col] == value:
                return tokens
            if tokens[0] == self._settings.sentinel:
                break
        return None
