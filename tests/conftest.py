import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from document_alignment.modules.preview import FrameRecorder

# Off-white page: V < 255, so it never matches the marker threshold
PAGE_RGB = (230, 230, 225)
RED_RGB = (255, 0, 0)
RED_BGR = (0, 0, 255)


def blank_page(width: int, height: int, color=PAGE_RGB) -> np.ndarray:
    return np.full((height, width, 3), color, dtype=np.uint8)


def fill_rect(image: np.ndarray, x: int, y: int, w: int, h: int, color=RED_RGB) -> np.ndarray:
    image[y:y + h, x:x + w] = color
    return image


def fill_rotated_rect(image: np.ndarray, center, size, angle: float, color=RED_RGB) -> np.ndarray:
    box = cv2.boxPoints((center, size, angle))
    cv2.fillConvexPoly(image, np.round(box).astype(np.int32), color)
    return image


@pytest.fixture
def axis_aligned_marker():
    """2000x2000 photo, red 1280x1120 block -> 320x280 at quarter scale."""
    image = blank_page(2000, 2000)
    return fill_rect(image, 360, 440, 1280, 1120)


@pytest.fixture
def tilted_marker():
    """Same block as axis_aligned_marker, rotated 15 degrees about its center."""
    image = blank_page(2000, 2000)
    return fill_rotated_rect(image, (1000.0, 1000.0), (1280.0, 1120.0), 15.0)


@pytest.fixture
def recorder():
    return FrameRecorder()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside an empty temporary directory so result.png lands there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
