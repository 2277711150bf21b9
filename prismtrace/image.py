"""
Image output for packed RGBA pixel buffers.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image as PILImage

# Formats Pillow cannot store with an alpha channel
_OPAQUE_SUFFIXES = {'.jpg', '.jpeg', '.bmp', '.ppm', '.pgm'}


def to_pil(pixels: np.ndarray, width: int, height: int, bytes_per_row: int) -> PILImage.Image:
    """Wrap a row-major buffer of packed RGBA pixels as a Pillow image.

    Args:
        pixels: Buffer of width * height little-endian uint32 pixels
        width: Image width in pixels
        height: Image height in pixels
        bytes_per_row: Stride between rows in bytes

    Returns:
        An RGBA Pillow image
    """
    data = np.ascontiguousarray(pixels).tobytes()
    if len(data) < bytes_per_row * height:
        raise ValueError(f"Pixel buffer holds {len(data)} bytes, need {bytes_per_row * height}")
    return PILImage.frombuffer('RGBA', (width, height), data, 'raw', 'RGBA', bytes_per_row, 1)


def save_pixels(pixels: np.ndarray, width: int, height: int, bytes_per_row: int,
                filename: Union[str, Path]) -> Path:
    """Encode a packed RGBA buffer to an image file.

    The format follows the file extension. Alpha is dropped for formats
    that cannot store it. Parent directories are created as needed.

    Returns:
        The path written
    """
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)

    image = to_pil(pixels, width, height, bytes_per_row)
    if path.suffix.lower() in _OPAQUE_SUFFIXES:
        image = image.convert('RGB')
    image.save(path)
    return path
