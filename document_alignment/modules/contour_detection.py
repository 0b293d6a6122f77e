"""
Contour Detection Module

Traces contours on the marker mask and keeps those whose area lies in the
configured band.
"""

import cv2
import numpy as np
from typing import List, Optional, Tuple

from ..config import PipelineConfig


class ContourDetector:
    """Extracts contours from a binary mask and filters them by area."""

    def __init__(self, config: dict = None):
        """
        Initialize contour detector.

        Args:
            config: Optional config dict, uses PipelineConfig.CANDIDATE_FILTER if None
        """
        self.config = config or PipelineConfig.CANDIDATE_FILTER
        self.min_area = float(self.config['MIN_AREA'])
        self.max_area = float(self.config['MAX_AREA'])
        self.relative = bool(self.config.get('RELATIVE', False))
        self.min_fraction = float(self.config.get('MIN_FRACTION', 0.0))
        self.max_fraction = float(self.config.get('MAX_FRACTION', 1.0))

    def find_contours(self, mask: np.ndarray) -> Tuple[List[np.ndarray], Optional[np.ndarray]]:
        """
        Trace all contours, nested ones included.

        Returns:
            Tuple of (contours, hierarchy); hierarchy is None when empty
        """
        if mask.ndim != 2:
            raise ValueError("Expected a single-channel mask")

        contours, hierarchy = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
        return list(contours), hierarchy

    def area_bounds(self, image_shape: Tuple[int, ...]) -> Tuple[float, float]:
        """(lower, upper) exclusive area bounds for an image of the given shape."""
        if not self.relative:
            return self.min_area, self.max_area

        h, w = image_shape[:2]
        total = float(h * w)
        return self.min_fraction * total, self.max_fraction * total

    def filter_candidates(self,
                          contours: List[np.ndarray],
                          image_shape: Tuple[int, ...]) -> List[Tuple[int, np.ndarray, float]]:
        """
        Keep contours whose absolute area lies strictly inside the band.

        Args:
            contours: Contours from find_contours
            image_shape: Shape of the mask they were traced on

        Returns:
            List of (contour_index, contour, area), in contour order
        """
        lower, upper = self.area_bounds(image_shape)

        candidates = []
        for idx, cnt in enumerate(contours):
            area = abs(float(cv2.contourArea(cnt)))
            if lower < area < upper:
                candidates.append((idx, cnt, area))

        return candidates

    def detect(self, mask: np.ndarray) -> Tuple[List[np.ndarray], List[Tuple[int, np.ndarray, float]]]:
        """
        Main detection method.

        Args:
            mask: Binary marker mask

        Returns:
            Tuple of (all_contours, candidates)
        """
        contours, _ = self.find_contours(mask)
        candidates = self.filter_candidates(contours, mask.shape)
        return contours, candidates
