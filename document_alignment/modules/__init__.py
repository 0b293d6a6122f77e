"""
Document Alignment Modules

This package contains modular components for marker-based document alignment:
- preprocessing: Downscales and converts the photo to BGR and HSV
- segmentation: Selects marker-colored pixels
- contour_detection: Traces contours and filters them by area
- geometry: Fits polygons and rotated rectangles
- deskew: Rotates and crops candidates
- compositing: Pastes the crop back onto the working image
"""

from .preprocessing import Preprocessor
from .segmentation import ColorSegmenter
from .contour_detection import ContourDetector
from .geometry import GeometryFitter
from .deskew import Deskewer
from .compositing import Compositor

__all__ = [
    'Preprocessor',
    'ColorSegmenter',
    'ContourDetector',
    'GeometryFitter',
    'Deskewer',
    'Compositor'
]
