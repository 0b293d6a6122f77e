"""
Segmentation Module

Selects marker-colored pixels with a fixed HSV threshold.
"""

import cv2
import numpy as np

from ..config import PipelineConfig


class ColorSegmenter:
    """Thresholds an HSV image into a binary marker mask."""
    
    def __init__(self, config: dict = None):
        self.config = config or PipelineConfig.SEGMENTATION
        self.lower = np.asarray(self.config['LOWER'], dtype=np.uint8)
        self.upper = np.asarray(self.config['UPPER'], dtype=np.uint8)
    
    def segment(self, hsv_image: np.ndarray) -> np.ndarray:
        """
        Build the marker mask.
        
        Args:
            hsv_image: 3-channel HSV image
            
        Returns:
            Single-channel mask, 255 where all channels lie within the
            inclusive bounds and 0 elsewhere
        """
        if hsv_image.ndim != 3 or hsv_image.shape[2] != 3:
            raise ValueError("Expected a 3-channel HSV image")
        return cv2.inRange(hsv_image, self.lower, self.upper)
