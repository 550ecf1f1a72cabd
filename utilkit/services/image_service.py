"""Чтение и запись растровых изображений через Pillow.

Принципы:
- SRP: сервис отвечает только за файловый ввод-вывод и упаковку пикселей в ARGB.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from utilkit.config.settings import get_settings
from utilkit.infrastructure.logging import get_logger
from utilkit.models.image_model import ImageData

logger = get_logger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Любая кодировка пикселей исходного файла приводится к RGBA.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as source:
                source_mode = source.mode
                pil_image = source.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.debug("Loaded %s (%dx%d, mode %s)", path, width, height, source_mode)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=source_mode,
            size_bytes=size_bytes,
        )

    def to_argb_array(self, image: Image.Image) -> np.ndarray:
        """Упаковывает пиксели изображения в массив `uint32` формы (height, width) в порядке ARGB."""
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32)
        r, g, b, a = rgba[..., 0], rgba[..., 1], rgba[..., 2], rgba[..., 3]
        return (a << 24) | (r << 16) | (g << 8) | b

    def from_argb_array(self, argb: np.ndarray) -> Image.Image:
        """Обратное преобразование: массив ARGB -> изображение PIL в режиме RGBA."""
        packed = np.asarray(argb, dtype=np.uint32)
        rgba = np.stack(
            [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF, (packed >> 24) & 0xFF],
            axis=-1,
        ).astype(np.uint8)
        return Image.fromarray(rgba)

    def save_argb(self, argb: np.ndarray, file_path: str | Path, image_format: Optional[str] = None) -> Path:
        """Записывает массив ARGB на диск (по умолчанию в PNG).

        Raises:
            OSError: если файл не удалось записать.
            ValueError: если массив пустой.
        """
        packed = np.asarray(argb)
        if packed.ndim != 2 or packed.size == 0:
            raise ValueError("Нечего записывать: пустой массив пикселей")

        path = Path(file_path)
        fmt = image_format or get_settings().image.output_format
        self.from_argb_array(packed).save(path, format=fmt)
        logger.debug("Wrote %s (%dx%d, %s)", path, packed.shape[1], packed.shape[0], fmt)
        return path
