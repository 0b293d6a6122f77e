"""
Sample Image

Loads the bundled A4 sample photo, or renders a synthetic one when the
package was installed without it.

Usage:
    python -m document_alignment.sample [output.png]
"""

import sys
from importlib import resources

import cv2
import numpy as np
from typing import Tuple

from .modules.image_io import decode_image, write_png

SAMPLE_RESOURCE = ('images', 'A4.jpg')

# Pure red (RGB) gives H=0, S=255, V=255 after conversion to HSV
MARKER_RGB = (255, 0, 0)


def sample_resource():
    """Traversable pointing at the bundled sample image."""
    ref = resources.files(__package__)
    for part in SAMPLE_RESOURCE:
        ref = ref.joinpath(part)
    return ref


def render_sample(size: Tuple[int, int] = (1800, 2400),
                  document_size: Tuple[int, int] = (1400, 990),
                  tilt_deg: float = 4.0,
                  frame_px: int = 16) -> np.ndarray:
    """
    Render a photo-like RGB image of an A5 sheet on an A4 sheet.

    The A5 sheet is framed by a pure red marker line. With the default
    sizes the marker lands inside the candidate area band after the
    quarter downscale.

    Args:
        size: (width, height) of the photo
        document_size: (width, height) of the framed A5 sheet
        tilt_deg: Rotation of the A5 sheet in degrees
        frame_px: Marker line thickness

    Returns:
        RGB uint8 image
    """
    width, height = size
    image = np.full((height, width, 3), (96, 88, 80), dtype=np.uint8)

    # A4 page, slightly off-white
    margin_x, margin_y = width // 18, height // 24
    cv2.rectangle(image, (margin_x, margin_y), (width - margin_x, height - margin_y),
                  (236, 236, 232), -1)

    center = (width / 2.0, height / 2.0)
    box = cv2.boxPoints((center, document_size, tilt_deg)).astype(np.int32)
    cv2.fillConvexPoly(image, box, (250, 250, 250))

    # Text lines on the A5 sheet, in the sheet's own frame
    matrix = cv2.getRotationMatrix2D(center, -tilt_deg, 1.0)
    doc_w, doc_h = document_size
    left = center[0] - doc_w / 2.0 + 80
    top = center[1] - doc_h / 2.0 + 90
    for row in range(12):
        y = top + row * 64
        length = doc_w - 160 - (row % 3) * 140
        pts = np.array([[left, y, 1.0], [left + length, y, 1.0]]) @ matrix.T
        cv2.line(image, tuple(int(v) for v in pts[0]), tuple(int(v) for v in pts[1]),
                 (40, 40, 48), 6)

    cv2.polylines(image, [box], True, MARKER_RGB, frame_px, cv2.LINE_8)

    return image


def load_sample() -> np.ndarray:
    """Decode the bundled sample to RGB, rendering one if it is not shipped."""
    ref = sample_resource()
    if ref.is_file():
        return decode_image(ref.read_bytes(), '/'.join(SAMPLE_RESOURCE))

    print("Bundled sample not found, rendering a synthetic one")
    return render_sample()


def main() -> int:
    out = sys.argv[1] if len(sys.argv) > 1 else 'A4.png'
    rgb = render_sample()
    path = write_png(out, cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
