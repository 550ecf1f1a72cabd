"""Контроллер обработки изображений: оркестрация моделей и сервиса ввода-вывода.

SOLID:
- SRP: класс связывает файлы на диске с моделями `Image`/`Pixmap`, сам пиксели не обрабатывает.
- DIP: сервис ввода-вывода передаётся снаружи; по умолчанию используется `ImageService`.
Clean Code:
- Каждая операция — чтение, одно действие над моделью, запись.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from utilkit.infrastructure.logging import get_logger
from utilkit.models.image import Image
from utilkit.models.image_model import ColorSummary
from utilkit.models.matrix import Matrix
from utilkit.models.pixmap import Pixmap
from utilkit.services.image_service import ImageService

logger = get_logger(__name__)


@dataclass
class ImageController:
    """Сценарии работы с файлами изображений.

    Ответственности:
    - Чтение исходника и проверка, что в нём есть пиксели.
    - Применение перекраски или аффинного преобразования.
    - Запись результата и сбор сводки по цветам.
    """
    _image_service: ImageService = ImageService()

    def recolor(self, src: str | Path, dst: str | Path, mode: Optional[str] = None) -> bool:
        """Симулирует дальтонизм (`mode`: "p", "d" или "t") и записывает результат в `dst`."""
        image = self._open(src)
        if image is None:
            return False
        image.recolor(mode)
        return self._write(image.pixmap, dst)

    def transform(self, src: str | Path, dst: str | Path, matrix: Matrix) -> bool:
        """Применяет однородную матрицу 3 x 3 к изображению и записывает результат в `dst`."""
        image = self._open(src)
        if image is None:
            return False
        pixmap = image.transform(matrix)
        if pixmap.width == 0 or pixmap.height == 0:
            logger.error("Transform of %s produced an empty image, nothing written", src)
            return False
        return self._write(pixmap, dst)

    def describe(self, src: str | Path) -> Optional[ColorSummary]:
        """Сводка по цветам изображения; `None`, если файл не прочитан."""
        image = self._open(src)
        if image is None:
            return None
        pixmap = image.pixmap
        distinct, darkest, brightest = pixmap.count_colors()
        return ColorSummary(
            width=pixmap.width,
            height=pixmap.height,
            distinct=distinct,
            darkest=darkest,
            brightest=brightest,
            dominant=pixmap.get_max_color_count(),
            channels=tuple(pixmap.count_colors(channel) for channel in (1, 2, 3)),
        )

    # ---- Helpers ----
    def _open(self, src: str | Path) -> Optional[Image]:
        image = Image(src, self._image_service)
        if image.width == 0 or image.height == 0:
            logger.error("No pixels read from %s", src)
            return None
        return image

    def _write(self, pixmap: Pixmap, dst: str | Path) -> bool:
        ok = pixmap.write_image(dst)
        if ok:
            logger.info("Wrote %s (%dx%d)", dst, pixmap.width, pixmap.height)
        return ok
