"""utilkit CLI — точка входа на Typer.

Commands
--------
recolor     Симуляция дальтонизма для изображения.
rotate      Поворот изображения на угол в градусах.
scale       Масштабирование изображения.
colors      Сводка по цветам изображения.
csv-value   Значение ячейки CSV-файла.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Optional

import typer

from utilkit.config.settings import get_settings
from utilkit.controllers.image_controller import ImageController
from utilkit.infrastructure.logging import setup_logging
from utilkit.models.image import rotation, scaling
from utilkit.services.csv_service import CSV

app = typer.Typer(
    name="utilkit",
    help="Утилиты: матрицы, цвета изображений, CSV.",
    add_completion=False,
)


def _setup_logging(verbose: bool = False) -> None:
    setup_logging("DEBUG" if verbose else get_settings().logging.level)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def recolor(
    src: Path = typer.Argument(..., help="Исходное изображение."),
    dst: Path = typer.Argument(..., help="Куда записать результат."),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="p, d или t (по умолчанию из настроек)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Перекрашивает изображение так, как его видит человек с дальтонизмом."""
    _setup_logging(verbose)
    if not ImageController().recolor(src, dst, mode):
        typer.echo(f"Не удалось обработать {src}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Записано: {dst}")


@app.command()
def rotate(
    src: Path = typer.Argument(...),
    dst: Path = typer.Argument(...),
    degrees: float = typer.Option(90.0, "--degrees", "-d", help="Угол поворота, градусы."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Поворачивает изображение вокруг левого верхнего угла."""
    _setup_logging(verbose)
    if not ImageController().transform(src, dst, rotation(math.radians(degrees))):
        typer.echo(f"Не удалось обработать {src}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Записано: {dst}")


@app.command()
def scale(
    src: Path = typer.Argument(...),
    dst: Path = typer.Argument(...),
    factor: float = typer.Option(2.0, "--factor", "-f", help="Коэффициент по горизонтали."),
    factor_y: Optional[float] = typer.Option(None, "--factor-y", help="Коэффициент по вертикали (по умолчанию равен --factor)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Масштабирует изображение."""
    _setup_logging(verbose)
    if not ImageController().transform(src, dst, scaling(factor, factor_y)):
        typer.echo(f"Не удалось обработать {src}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Записано: {dst}")


@app.command()
def colors(
    src: Path = typer.Argument(...),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Печатает сводку по цветам изображения."""
    _setup_logging(verbose)
    summary = ImageController().describe(src)
    if summary is None:
        typer.echo(f"Не удалось прочитать {src}", err=True)
        raise typer.Exit(1)

    typer.echo(f"size:      {summary.width} x {summary.height}")
    typer.echo(f"colors:    {summary.distinct}")
    typer.echo(f"darkest:   #{summary.darkest:08X}")
    typer.echo(f"brightest: #{summary.brightest:08X}")
    typer.echo(f"dominant:  #{summary.dominant:08X}")
    for name, (nonzero, low, high) in zip("RGB", summary.channels):
        typer.echo(f"{name}: nonzero={nonzero} min={low} max={high}")


@app.command("csv-value")
def csv_value(
    file: Path = typer.Argument(..., help="CSV-файл."),
    row: int = typer.Argument(..., help="Номер строки данных (с 0)."),
    col: int = typer.Argument(..., help="Номер столбца (с 0)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Печатает значение ячейки CSV-файла."""
    _setup_logging(verbose)
    try:
        sheet = CSV(file)
        value = sheet.get_value(row, col)
    except (OSError, ValueError, IndexError) as exc:
        typer.echo(f"Ошибка: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(value)


if __name__ == "__main__":
    app()
