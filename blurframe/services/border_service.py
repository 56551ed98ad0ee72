"""Размытая рамка: оркестрация геометрии и растровых операций.

Принципы:
- SRP: сервис только связывает геометрию (`geometry`) с операциями над
  растром (`ProcessService`, `ImageService`); собственной пиксельной логики нет.
- DIP: сервисы растра передаются в конструктор и могут быть подменены.
- Граница ошибок: наружу не выходит ни одно исключение, только `ProcessResult`.
"""
from __future__ import annotations

import logging
import math
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from blurframe.config import config
from blurframe.models.errors import BlurframeError, ErrorKind, InvalidBlurRadius
from blurframe.models.image_model import (
    DEFAULT_BAND,
    PREVIEW,
    Dimension,
    ImageData,
    ProcessOptions,
    ProcessResult,
    RatioBand,
)
from blurframe.models.session import EditSession
from blurframe.services import geometry
from blurframe.services.image_service import ImageService
from blurframe.services.process_service import ProcessService

logger = logging.getLogger(__name__)

Source = Union[ImageData, Image.Image, bytes, str, Path]


def validate_blur_intensity(value: object, minimum: int = config.BLUR_MIN, maximum: int = config.BLUR_MAX) -> int:
    """Возвращает значение без изменений или бросает `InvalidBlurRadius` (без ограничения диапазоном)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBlurRadius(value, minimum, maximum)
    if value < minimum or maximum < value:
        raise InvalidBlurRadius(value, minimum, maximum)
    return value


class BorderService:
    """Добавляет к изображению размытую рамку до допустимого соотношения сторон."""

    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        process_service: Optional[ProcessService] = None,
        band: RatioBand = DEFAULT_BAND,
        working_width: int = config.WORKING_WIDTH,
        quality: int = config.OUTPUT_QUALITY,
    ) -> None:
        self._image_service = image_service or ImageService()
        self._process_service = process_service or ProcessService()
        self._band = band
        self._working_width = working_width
        self._quality = quality

    def process_image(
        self,
        source: Source,
        blur_intensity: int,
        options: Optional[ProcessOptions] = None,
        session: Optional[EditSession] = None,
    ) -> ProcessResult:
        """Строит изображение с размытой рамкой.

        Args:
            source: Декодированное изображение (`ImageData`, `PIL.Image`), путь или байты.
            blur_intensity: Сила размытия, целое в [1, 100].
            options: Превью (рабочая ширина, по умолчанию) или экспорт в полном разрешении;
                повторное использование декодированного источника из сессии.
            session: Сессия вызывающей стороны; допускает один вызов одновременно.

        Returns:
            `ProcessResult` с обрезанным изображением и JPEG-байтами либо с видом ошибки.
        """
        try:
            validate_blur_intensity(blur_intensity)
        except InvalidBlurRadius as exc:
            logger.error("%s", exc)
            return ProcessResult.failure(exc.kind, str(exc))

        try:
            with session.busy() if session is not None else nullcontext():
                foreground = self._obtain_foreground(source, options or PREVIEW, session)
                return self._compose(foreground, blur_intensity)
        except BlurframeError as exc:
            logger.error("Processing failed (%s): %s", exc.kind.value, exc)
            return ProcessResult.failure(exc.kind, str(exc))
        except Exception as exc:
            logger.exception("Processing failed")
            return ProcessResult.failure(ErrorKind.PROCESSING_FAILED, str(exc))

    # ---- Helpers ----
    def _obtain_foreground(self, source: Source, options: ProcessOptions, session: Optional[EditSession]) -> Image.Image:
        """Рабочая копия переднего плана; кэш сессии никогда не изменяется."""
        if options.reuse_source and session is not None:
            if not session.has_source:
                session.set_source(self._decode(source))
            base = session.source.pil_image
        else:
            base = self._decode(source).pil_image

        foreground = self._process_service.clone(base)
        if not options.full_resolution:
            foreground = self._process_service.fit_width(foreground, self._working_width)
        return foreground

    def _decode(self, source: Source) -> ImageData:
        if isinstance(source, ImageData):
            return source
        if isinstance(source, Image.Image):
            return ImageData(
                path=None,
                pil_image=source if source.mode == "RGBA" else source.convert("RGBA"),
                width=source.width,
                height=source.height,
                mode=source.mode,
                size_bytes=None,
            )
        if isinstance(source, (bytes, bytearray)):
            return self._image_service.decode(bytes(source))
        return self._image_service.load_image(source)

    def _compose(self, foreground: Image.Image, blur_intensity: int) -> ProcessResult:
        ps = self._process_service
        fg = Dimension.of(foreground)

        # Blur background copy
        background = ps.blur(ps.clone(foreground), blur_intensity)

        # Expand to minimum border requirement
        expanded = geometry.expand_to_min_border(fg.width, fg.height, self._band)
        background = ps.resize(background, *expanded.to_pixels())
        bg = Dimension.of(background)

        # Stack foreground in the center of background
        offset = geometry.get_center_offset(fg, bg)
        background = ps.composite(background, foreground, math.floor(offset.x), math.floor(offset.y))

        # Crop to the accepted ratio
        box = geometry.get_crop_box(fg, bg, offset)
        result = ps.crop(background, box)

        data = self._image_service.encode(result, quality=self._quality)
        logger.info(
            "Processed %sx%s -> background %sx%s -> %sx%s (blur=%s)",
            foreground.width, foreground.height, background.width, background.height,
            result.width, result.height, blur_intensity,
        )
        return ProcessResult.success(result, data)
