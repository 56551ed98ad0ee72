"""Модели данных для изображений и результатов обработки.

Принципы:
- SRP: только структуры данных, без логики обработки пикселей.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from blurframe.config import config
from blurframe.models.errors import ErrorKind


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель декодированного изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу (None, если декодировано из байтов).
        pil_image: Загруженное изображение PIL (RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла, например "RGB".
        size_bytes: Размер исходных данных, если доступен.
    """
    path: Optional[Path]
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]


@dataclass(frozen=True)
class Dimension:
    """Размер растра; дробные значения допустимы до округления к пикселям."""
    width: float
    height: float

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"Dimension must be positive, got {self.width}x{self.height}")

    @classmethod
    def of(cls, image: Image.Image) -> "Dimension":
        return cls(*image.size)

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    def to_pixels(self) -> Tuple[int, int]:
        """Округляет до целой сетки пикселей (не меньше 1x1)."""
        return max(1, int(round(self.width))), max(1, int(round(self.height)))


@dataclass(frozen=True)
class Offset:
    x: float
    y: float


@dataclass(frozen=True)
class CropBox:
    """Прямоугольник обрезки в пикселях (левый верхний угол + размер)."""
    x: int
    y: int
    width: int
    height: int

    def as_box(self) -> Tuple[int, int, int, int]:
        """Кортеж `(left, upper, right, lower)` в формате PIL."""
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass(frozen=True)
class RatioBand:
    """Допустимый диапазон высот для ширины `reference_width`.

    Для изображения шириной `reference_width * r` высота должна лежать
    в `[min_height * r, max_height * r]`.
    """
    reference_width: float = config.REFERENCE_WIDTH
    min_height: float = config.MIN_HEIGHT
    max_height: float = config.MAX_HEIGHT


DEFAULT_BAND = RatioBand()


@dataclass(frozen=True)
class ProcessOptions:
    """Параметры одного вызова обработки.

    Fields:
        full_resolution: экспорт без уменьшения до рабочей ширины.
        reuse_source: клонировать декодированный источник из сессии
            вместо повторного декодирования.
    """
    full_resolution: bool = False
    reuse_source: bool = True


PREVIEW = ProcessOptions()
EXPORT = ProcessOptions(full_resolution=True)


@dataclass(frozen=True)
class ProcessResult:
    """Результат обработки: либо изображение и байты, либо вид ошибки."""
    ok: bool
    image: Optional[Image.Image] = None
    data: Optional[bytes] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, image: Image.Image, data: bytes) -> "ProcessResult":
        return cls(ok=True, image=image, data=data)

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "") -> "ProcessResult":
        return cls(ok=False, error=error, message=message)
