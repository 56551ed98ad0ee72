"""Растровые операции над рабочими копиями изображения.

Принципы:
- SRP: только пиксельные операции (клон, размытие, масштаб, вставка, обрезка).
- Чистый код: каждая операция возвращает новое изображение и не трогает входное,
  кроме `composite`, который по контракту рисует поверх фона.
"""
from __future__ import annotations

from PIL import Image, ImageFilter

from blurframe.models.image_model import CropBox


class ProcessService:
    def clone(self, image: Image.Image) -> Image.Image:
        """Независимая копия (без общих пиксельных буферов)."""
        return image.copy()

    def blur(self, image: Image.Image, intensity: int) -> Image.Image:
        """
        Гауссово размытие с радиусом `intensity` пикселей.
        """
        return image.filter(ImageFilter.GaussianBlur(radius=intensity))

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        """
        Растягивает изображение до (width, height) без сохранения пропорций.
        """
        if image.size == (width, height):
            return image.copy()
        return image.resize((width, height), Image.Resampling.LANCZOS)

    def fit_width(self, image: Image.Image, max_width: int) -> Image.Image:
        """
        Уменьшает изображение до ширины `max_width` с сохранением пропорций.
        Узкие изображения возвращаются копией без изменений.
        """
        w, h = image.size
        if w <= max_width:
            return image.copy()
        new_h = max(1, int(round(h * max_width / w)))
        return self.resize(image, max_width, new_h)

    def composite(self, background: Image.Image, foreground: Image.Image, x: int, y: int) -> Image.Image:
        """
        Вставляет foreground в background в точке (x, y).
        Пиксели переднего плана непрозрачно перекрывают фон (без альфа-смешивания).
        """
        background.paste(foreground, (x, y))
        return background

    def crop(self, image: Image.Image, box: CropBox) -> Image.Image:
        return image.crop(box.as_box())
