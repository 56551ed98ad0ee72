"""Загрузка, декодирование и кодирование изображений.

Принципы:
- SRP: класс отвечает только за ввод/вывод растра и базовое извлечение свойств.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from blurframe.config import config
from blurframe.models.errors import DecodeError
from blurframe.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            DecodeError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            with Image.open(path) as src:
                pil_image, mode = self._prepare(src)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise DecodeError(f"Not an image: {path}") from exc

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.debug("Loaded %s (%sx%s, %s)", path, pil_image.width, pil_image.height, mode)
        return self._wrap(path, pil_image, mode, size_bytes)

    def decode(self, data: bytes) -> ImageData:
        """Декодирует изображение из байтов.

        Raises:
            DecodeError: если байты не являются поддерживаемым изображением.
        """
        try:
            with Image.open(io.BytesIO(data)) as src:
                pil_image, mode = self._prepare(src)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise DecodeError("Source bytes are not a supported image") from exc
        return self._wrap(None, pil_image, mode, len(data))

    def encode(self, image: Image.Image, fmt: str = config.OUTPUT_FORMAT, quality: int = config.OUTPUT_QUALITY) -> bytes:
        """Кодирует изображение в байты (JPEG по умолчанию; альфа-канал отбрасывается)."""
        if fmt.upper() in ("JPEG", "JPG") and image.mode != "RGB":
            image = image.convert("RGB")
        buf = io.BytesIO()
        image.save(buf, fmt, quality=quality)
        return buf.getvalue()

    def save_bytes(self, data: bytes, file_path: str | Path) -> Path:
        """Записывает закодированный результат на диск («скачивание»)."""
        path = Path(file_path)
        path.write_bytes(data)
        logger.info("Saved %d bytes to %s", len(data), path)
        return path

    # ---------- Вспомогательные функции ----------
    def _prepare(self, src: Image.Image) -> Tuple[Image.Image, str]:
        # load() forces a full decode so truncated files fail here, not later
        src.load()
        mode = src.mode
        oriented = ImageOps.exif_transpose(src)
        return oriented.convert("RGBA"), mode

    def _wrap(self, path: Optional[Path], pil_image: Image.Image, mode: str, size_bytes: Optional[int]) -> ImageData:
        width, height = pil_image.size
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=mode,
            size_bytes=size_bytes,
        )
