"""Shared test fixtures for utilkit.

Images and CSV files are generated into ``tmp_path`` so test modules never
depend on files in the repository.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from utilkit.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Image fixtures
# ---------------------------------------------------------------------------


def write_rgba(path: Path, rgba: np.ndarray) -> Path:
    Image.fromarray(rgba.astype(np.uint8)).save(path, format="PNG")
    return path


@pytest.fixture()
def rgba_pixels() -> np.ndarray:
    """2 x 3 RGBA: red, green, blue / white, white, semi-transparent red."""
    return np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 255], [0, 0, 255, 255]],
            [[255, 255, 255, 255], [255, 255, 255, 255], [255, 0, 0, 128]],
        ],
        dtype=np.uint8,
    )


@pytest.fixture()
def png_file(tmp_path: Path, rgba_pixels: np.ndarray) -> Path:
    return write_rgba(tmp_path / "sample.png", rgba_pixels)


@pytest.fixture()
def rgb_png_file(tmp_path: Path) -> Path:
    """A 2 x 2 file stored without an alpha channel."""
    path = tmp_path / "rgb.png"
    Image.new("RGB", (2, 2), (10, 20, 30)).save(path, format="PNG")
    return path


# ---------------------------------------------------------------------------
# CSV fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "sheet.csv"
    path.write_text("a,b,c\n1,2,3\n", encoding="utf-8")
    return path


@pytest.fixture()
def people_csv(tmp_path: Path) -> Path:
    path = tmp_path / "people.csv"
    path.write_text(
        "id,name,city\n"
        "1,alice,paris\n"
        "\n"
        "2,bob,berlin\n"
        "3,carol,rome\n"
        "EOF\n"
        "4,dave,oslo\n",
        encoding="utf-8",
    )
    return path
