"""
Preprocessing Module

Downscales the decoded RGB photo and produces the BGR working image
and the HSV segmentation input.
"""

import cv2
import numpy as np
from typing import Tuple

from ..config import PipelineConfig


class Preprocessor:
    """Builds the working image and its HSV counterpart."""
    
    def __init__(self, config: dict = None):
        """
        Initialize preprocessor.
        
        Args:
            config: Optional config dict, uses PipelineConfig.PREPROCESSING if None
        """
        self.config = config or PipelineConfig.PREPROCESSING
        self.factor = int(self.config['DOWNSCALE_FACTOR'])
        if self.factor < 1:
            raise ValueError(f"Downscale factor must be >= 1, got {self.factor}")
    
    def working_size(self, image: np.ndarray) -> Tuple[int, int]:
        """(width, height) of the working image for a given input."""
        h, w = image.shape[:2]
        return w // self.factor, h // self.factor
    
    def downscale(self, image: np.ndarray) -> np.ndarray:
        """Resize to 1/factor of the input width and height (integer division)."""
        width, height = self.working_size(image)
        if width == 0 or height == 0:
            raise ValueError(
                f"Image {image.shape[1]}x{image.shape[0]} is too small "
                f"for downscale factor {self.factor}")
        return cv2.resize(image, (width, height), interpolation=cv2.INTER_LINEAR)
    
    def process(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Run preprocessing.
        
        Args:
            image: RGB uint8 input image
            
        Returns:
            Tuple of (bgr_working_image, hsv_image)
        """
        if image is None or image.ndim != 3 or image.shape[2] != 3:
            raise ValueError("Expected a 3-channel RGB image")
        if image.dtype != np.uint8:
            raise ValueError(f"Expected uint8 image, got {image.dtype}")
        
        small = self.downscale(image)
        bgr = cv2.cvtColor(small, cv2.COLOR_RGB2BGR)
        hsv = cv2.cvtColor(bgr, cv2.COLOR_BGR2HSV)
        
        return bgr, hsv
