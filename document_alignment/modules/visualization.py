"""
Visualization utilities for the document alignment pipeline.
Common drawing and display helpers shared by the pipeline and preview sinks.
"""

import cv2
import numpy as np
from typing import Tuple


def draw_bounding_rect(img: np.ndarray,
                       rect: Tuple[int, int, int, int],
                       color: Tuple[int, int, int],
                       thickness: int = 1) -> np.ndarray:
    """
    Draw an axis-aligned rectangle outline in place.

    Args:
        img: Image to draw on (modified)
        rect: (x, y, width, height)
        color: BGR line color
        thickness: Line thickness

    Returns:
        The same image
    """
    x, y, w, h = rect
    cv2.rectangle(img, (x, y), (x + w, y + h), color, thickness)
    return img


def to_display_bgr(img: np.ndarray) -> np.ndarray:
    """Expand single-channel images to 3 channels for display."""
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.ndim == 3 and img.shape[2] == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2BGR)
    return img


def to_display_rgb(img: np.ndarray) -> np.ndarray:
    """
    Convert a frame to RGB for matplotlib.

    Three-channel frames are shown the way an OpenCV window shows them,
    i.e. interpreted as BGR. HSV frames therefore appear false-colored.
    """
    return cv2.cvtColor(to_display_bgr(img), cv2.COLOR_BGR2RGB)

