"""
Image I/O Module

Decodes input images to 8-bit RGB and writes the composite as lossless PNG.
"""

import cv2
import numpy as np
from pathlib import Path
from typing import Union


class ImageIOError(IOError):
    """Raised when an image cannot be decoded or written."""


def decode_image(data: bytes, source: str = '<memory>') -> np.ndarray:
    """
    Decode an encoded image buffer to an RGB raster.

    Alpha channels are flattened and grayscale images expanded to three
    channels by IMREAD_COLOR.

    Args:
        data: Encoded image bytes (JPEG, PNG, ...)
        source: Name used in error messages

    Returns:
        RGB uint8 image of shape (H, W, 3)
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    if buffer.size == 0:
        raise ImageIOError(f"Empty image data: {source}")

    bgr = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if bgr is None:
        raise ImageIOError(f"Could not decode image: {source}")

    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Read and decode an image file to RGB."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageIOError(f"Could not read image: {path}") from exc
    return decode_image(data, str(path))


def write_png(path: Union[str, Path], image: np.ndarray) -> Path:
    """
    Write a BGR (or single-channel) raster as lossless PNG.

    Args:
        path: Destination file, the extension is forced to .png
        image: uint8 image

    Returns:
        The path that was written
    """
    path = Path(path)
    if path.suffix.lower() != '.png':
        path = path.with_suffix('.png')

    try:
        ok = cv2.imwrite(str(path), image)
    except cv2.error as exc:
        raise ImageIOError(f"Could not write image: {path}") from exc

    if not ok:
        raise ImageIOError(f"Could not write image: {path}")

    return path


def image_type_code(image: np.ndarray) -> int:
    """OpenCV matrix type code of an array (16 for CV_8UC3)."""
    depths = {
        np.dtype(np.uint8): cv2.CV_8U,
        np.dtype(np.int8): cv2.CV_8S,
        np.dtype(np.uint16): cv2.CV_16U,
        np.dtype(np.int16): cv2.CV_16S,
        np.dtype(np.int32): cv2.CV_32S,
        np.dtype(np.float32): cv2.CV_32F,
        np.dtype(np.float64): cv2.CV_64F,
    }
    if image.dtype not in depths:
        raise ValueError(f"Unsupported dtype: {image.dtype}")
    channels = 1 if image.ndim == 2 else image.shape[2]
    return depths[image.dtype] + ((channels - 1) << 3)
