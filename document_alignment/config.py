"""
Configuration settings for the document alignment pipeline.
Centralized configuration for all modules.
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class MarkerColors:
    """HSV color range of the marker frame drawn around the document."""
    
    RED = {
        'name': 'red',
        'lower': np.array([0, 0, 255]),
        'upper': np.array([10, 255, 255])
    }


class PipelineConfig:
    """Configuration for the entire document alignment pipeline."""
    
    # Preprocessing
    PREPROCESSING = {
        'DOWNSCALE_FACTOR': 4
    }
    
    # Segmentation (inclusive HSV bounds, H in [0, 180))
    SEGMENTATION = {
        'LOWER': MarkerColors.RED['lower'],
        'UPPER': MarkerColors.RED['upper']
    }
    
    # Candidate filter (pixel area on the working image, strict bounds)
    CANDIDATE_FILTER = {
        'MIN_AREA': 65536,
        'MAX_AREA': 131072,
        'RELATIVE': False,
        'MIN_FRACTION': 0.25,
        'MAX_FRACTION': 0.5
    }
    
    # Polygon approximation
    POLYGON = {
        'APPROX_EPSILON': 0.02
    }
    
    # Compositing
    COMPOSITING = {
        'OFFSET': (10, 10),
        'OUTPUT_NAME': 'result.png'
    }
    
    # Visualization Colors (BGR)
    VIZ_COLORS = {
        'BOUNDING_BOX': (255, 0, 255)
    }
    
    # Preview window titles, in emission order
    PREVIEW_TITLES = {
        'ORIGINAL': 'Original',
        'HSV': 'HSV color space',
        'MASK': 'Selected color',
        'ROTATED': 'Rotated',
        'CROPPED': 'Cropped',
        'RESULT': 'Result',
        'CONTOURS': 'Contours'
    }


def with_overrides(section: dict, **overrides) -> dict:
    """Return a copy of a config section with non-None overrides applied."""
    merged = dict(section)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged
