"""
Deskew Module

Rotates the working image about a candidate's center so its rectangle
becomes axis-aligned, then samples the rectangle with sub-pixel accuracy.
"""

import cv2
import numpy as np
from typing import Tuple

from .geometry import Candidate


class Deskewer:
    """Rotates and crops candidates out of the working image."""
    
    @staticmethod
    def rotation_matrix(center: Tuple[float, float], angle: float) -> np.ndarray:
        """2x3 rotation about center by angle degrees, unit scale."""
        return cv2.getRotationMatrix2D((float(center[0]), float(center[1])), float(angle), 1.0)
    
    @staticmethod
    def rotate(image: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        """Warp the whole image, same size, bilinear, zero border."""
        h, w = image.shape[:2]
        return cv2.warpAffine(image, matrix, (w, h),
                              flags=cv2.INTER_LINEAR,
                              borderMode=cv2.BORDER_CONSTANT,
                              borderValue=0)
    
    @staticmethod
    def extract_patch(image: np.ndarray,
                      size: Tuple[int, int],
                      center: Tuple[float, float]) -> np.ndarray:
        """Bilinear sub-pixel patch of (width, height) centered at center."""
        return cv2.getRectSubPix(image, (int(size[0]), int(size[1])),
                                 (float(center[0]), float(center[1])))
    
    def deskew(self, image: np.ndarray, candidate: Candidate) -> Tuple[np.ndarray, np.ndarray]:
        """
        Deskew one candidate.
        
        Args:
            image: Working image
            candidate: Fitted candidate
            
        Returns:
            Tuple of (rotated_image, patch)
        """
        center = candidate.rotated_rect.center
        matrix = self.rotation_matrix(center, candidate.angle)
        rotated = self.rotate(image, matrix)
        patch = self.extract_patch(rotated, candidate.target_size, center)
        return rotated, patch
