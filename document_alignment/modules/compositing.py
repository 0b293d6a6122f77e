"""
Compositing Module

Pastes a rectified patch onto the working image at a fixed offset.
"""

import numpy as np
from typing import Tuple

from ..config import PipelineConfig


def clip_destination(offset: Tuple[int, int],
                     size: Tuple[int, int],
                     image_shape: Tuple[int, ...],
                     patch_shape: Tuple[int, ...]) -> Tuple[int, int, int, int]:
    """
    Clip a destination rectangle to the image and the patch.
    
    Args:
        offset: (x, y) top-left of the destination
        size: (width, height) of the requested destination
        image_shape: Shape of the target image
        patch_shape: Shape of the patch being pasted
        
    Returns:
        (x, y, width, height) of the region that is actually written; width
        or height is 0 when nothing overlaps
    """
    img_h, img_w = image_shape[:2]
    patch_h, patch_w = patch_shape[:2]
    x, y = int(offset[0]), int(offset[1])
    
    x0, y0 = max(x, 0), max(y, 0)
    x1 = min(x + int(size[0]), x + patch_w, img_w)
    y1 = min(y + int(size[1]), y + patch_h, img_h)
    
    return x0, y0, max(0, x1 - x0), max(0, y1 - y0)


class Compositor:
    """Pastes patches onto the working image in place."""
    
    def __init__(self, config: dict = None):
        self.config = config or PipelineConfig.COMPOSITING
        self.offset = tuple(self.config['OFFSET'])
    
    def composite(self, image: np.ndarray, patch: np.ndarray) -> np.ndarray:
        """
        Copy patch into image at the configured offset.
        
        The destination spans the full image size from the offset, so it
        overruns the image; only the in-bounds part of the patch is copied.
        
        Args:
            image: Working image, modified in place
            patch: Patch with the same channel count as image
            
        Returns:
            The same image object
        """
        if image.ndim != patch.ndim or image.shape[2:] != patch.shape[2:]:
            raise ValueError(
                f"Patch shape {patch.shape} does not match image shape {image.shape}")
        
        img_h, img_w = image.shape[:2]
        x, y, w, h = clip_destination(self.offset, (img_w, img_h), image.shape, patch.shape)
        if w == 0 or h == 0:
            return image
        
        # Source starts where the clipped destination starts relative to the offset
        sx, sy = x - int(self.offset[0]), y - int(self.offset[1])
        image[y:y + h, x:x + w] = patch[sy:sy + h, sx:sx + w]
        return image
