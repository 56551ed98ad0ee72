"""Геометрия рамки: расширение под допустимое соотношение сторон, центрирование, обрезка.

Чистые функции без работы с пикселями.
"""
from __future__ import annotations

import math

from blurframe.models.image_model import DEFAULT_BAND, CropBox, Dimension, Offset, RatioBand


def expand_to_min_border(width: float, height: float, band: RatioBand = DEFAULT_BAND) -> Dimension:
    """Размер, до которого нужно растянуть фон, чтобы уложиться в диапазон `band`.

    Instagram принимает соотношения от 1.91:1 до 4:5: при ширине 1080 px
    высота должна быть в пределах [565.31, 1350] px, а при ширине 1080r px
    соответственно [565.31r, 1350r] px.

    Функция не возвращает итоговый размер. Приращение по ширине сохраняет
    исходное соотношение `width / height`; нужное соотношение получается уже
    после наложения и обрезки.

    Args:
        width: Ширина изображения, px.
        height: Высота изображения, px.
        band: Допустимый диапазон высот относительно `band.reference_width`.

    Returns:
        Расширенный `Dimension`; без изменений, если изображение уже в диапазоне
        (включая границы).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Dimension must be positive, got {width}x{height}")

    len_factor = width / band.reference_width
    height_min = band.min_height * len_factor
    height_max = band.max_height * len_factor

    if height < height_min:
        # Слишком широкое, нужна рамка по высоте не меньше (height_min - height)
        h_delta = height_min - height
    elif height > height_max:
        # Слишком высокое: лишняя высота сверх height_max
        h_delta = height - height_max
    else:
        return Dimension(width, height)

    w_delta = h_delta * (width / height)
    return Dimension(width + w_delta, height + h_delta)


def get_center_offset(fg: Dimension, bg: Dimension) -> Offset:
    """Смещение левого верхнего угла fg, при котором он стоит по центру bg."""
    return Offset(x=(bg.width - fg.width) / 2, y=(bg.height - fg.height) / 2)


def get_crop_box(fg: Dimension, bg: Dimension, offset: Offset) -> CropBox:
    """Область итоговой обрезки после наложения fg на bg со смещением `offset`.

    Горизонтальное фото сохраняет рамку сверху и снизу (ширина = fg),
    вертикальное и квадратное: слева и справа (высота = fg).
    """
    if fg.is_landscape:
        return CropBox(x=math.floor(offset.x), y=0, width=int(fg.width), height=int(bg.height))
    return CropBox(x=0, y=math.floor(offset.y), width=int(bg.width), height=int(fg.height))
