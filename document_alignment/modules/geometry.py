"""
Geometry Module

Fits the polygon approximation, the axis-aligned bounding box and the
minimum-area rotated rectangle of a candidate contour, and normalizes the
rotated rectangle to landscape orientation.
"""

import cv2
import numpy as np
from dataclasses import dataclass
from typing import Tuple

from ..config import PipelineConfig


class DegenerateCandidateError(ValueError):
    """Raised when a candidate has no usable geometry."""


@dataclass
class RotatedRect:
    """Minimum-area rectangle, angle in degrees within (-90, 0]."""
    center: Tuple[float, float]
    size: Tuple[float, float]
    angle: float

    @classmethod
    def from_cv(cls, rect) -> 'RotatedRect':
        """
        Convert a cv2.minAreaRect result to the (-90, 0] angle convention.

        OpenCV >= 4.5.1 reports angles in (0, 90], older releases in
        [-90, 0). Both describe the same rectangle once the side lengths are
        swapped with the 90 degree shift.
        """
        (cx, cy), (w, h), angle = rect
        angle = float(angle)
        w, h = float(w), float(h)

        if angle > 0.0:
            angle -= 90.0
            w, h = h, w
        if angle <= -90.0:
            angle += 90.0
            w, h = h, w

        return cls(center=(float(cx), float(cy)), size=(w, h), angle=angle)

    def box_points(self) -> np.ndarray:
        """Corner points (4, 2) float32."""
        return cv2.boxPoints((self.center, self.size, self.angle))


@dataclass
class Candidate:
    """Geometry of one contour that passed the area filter."""
    index: int
    contour: np.ndarray
    area: float
    polygon: np.ndarray
    bounding_rect: Tuple[int, int, int, int]
    rotated_rect: RotatedRect
    angle: float
    target_size: Tuple[int, int]


def normalize_landscape(width: float, height: float, angle: float) -> Tuple[float, float, float]:
    """
    Make the longer side the width.

    If width < height, the sides are swapped and 90 degrees added to the
    angle. Applying it twice is the same as applying it once.

    Returns:
        Tuple of (width, height, angle)
    """
    if width < height:
        return height, width, angle + 90.0
    return width, height, angle


class GeometryFitter:
    """Fits candidate geometry on approximated polygons."""

    def __init__(self, config: dict = None):
        """
        Initialize geometry fitter.

        Args:
            config: Optional config dict, uses PipelineConfig.POLYGON if None
        """
        self.config = config or PipelineConfig.POLYGON
        self.epsilon_factor = float(self.config['APPROX_EPSILON'])

    def approximate_polygon(self, contour: np.ndarray) -> np.ndarray:
        """Douglas-Peucker approximation, tolerance relative to the closed arc length."""
        epsilon = self.epsilon_factor * cv2.arcLength(contour, True)
        return cv2.approxPolyDP(contour, epsilon, True)

    def fit(self, index: int, contour: np.ndarray, area: float) -> Candidate:
        """
        Fit all geometry for a candidate contour.

        Args:
            index: Index of the contour in the extractor output
            contour: Contour points (N, 1, 2)
            area: Contour area

        Returns:
            Candidate with landscape-normalized angle and integer target size

        Raises:
            DegenerateCandidateError: if the polygon or rectangle is empty
        """
        if contour is None or len(contour) == 0:
            raise DegenerateCandidateError("empty contour")

        polygon = self.approximate_polygon(contour)
        if polygon is None or len(polygon) == 0:
            raise DegenerateCandidateError("empty polygon approximation")

        x, y, w, h = cv2.boundingRect(polygon)
        rotated = RotatedRect.from_cv(cv2.minAreaRect(polygon))

        rw, rh = rotated.size
        if rw <= 0.0 or rh <= 0.0:
            raise DegenerateCandidateError(f"zero-area rotated rectangle {rw:.1f}x{rh:.1f}")

        width, height, angle = normalize_landscape(rw, rh, rotated.angle)
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise DegenerateCandidateError(f"empty target size {width}x{height}")

        return Candidate(
            index=index,
            contour=contour,
            area=float(area),
            polygon=polygon,
            bounding_rect=(int(x), int(y), int(w), int(h)),
            rotated_rect=rotated,
            angle=float(angle),
            target_size=(width, height),
        )
