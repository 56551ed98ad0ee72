import io

import numpy as np
from PIL import Image


def noise_image(width, height, seed=0):
    """Random RGB image; blurring it always changes the pixels."""
    rng = np.random.default_rng(seed)
    return Image.fromarray(rng.integers(0, 256, (height, width, 3), dtype=np.uint8))


def jpeg_bytes(image, **kwargs):
    buf = io.BytesIO()
    image.save(buf, 'JPEG', **kwargs)
    return buf.getvalue()
