"""
Document Alignment Pipeline

Main script that orchestrates all modules to deskew and crop a marked document.
Process: Preprocessing -> Segmentation -> Contour Detection -> Geometry -> Deskew -> Compositing

Usage:
    python -m document_alignment [image] [--output result.png] [--preview window|montage|none]
"""

import argparse
import sys
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import cv2
import numpy as np

from .config import PipelineConfig, with_overrides
from .modules import (ColorSegmenter, Compositor, ContourDetector, Deskewer,
                      GeometryFitter, Preprocessor)
from .modules.geometry import Candidate, DegenerateCandidateError
from .modules.image_io import ImageIOError, image_type_code, load_image, write_png
from .modules.preview import MontagePreview, NullPreview, PreviewSink, WindowPreview
from .modules.visualization import draw_bounding_rect
from .sample import load_sample


@dataclass
class AlignmentResult:
    """Everything produced while processing one image."""
    working: np.ndarray
    hsv: np.ndarray
    mask: np.ndarray
    contours: List[np.ndarray] = field(default_factory=list)
    candidates: List[Candidate] = field(default_factory=list)
    patches: List[np.ndarray] = field(default_factory=list)
    output_path: Optional[Path] = None

    @property
    def composite(self) -> Optional[np.ndarray]:
        """The working image once at least one patch was pasted, else None."""
        return self.working if self.patches else None


class DocumentAlignmentPipeline:
    """Main pipeline for marker-based document alignment."""

    def __init__(self, config: Dict[str, dict] = None, output_path=None):
        """
        Initialize all module stages.

        Args:
            config: Optional mapping of section name (e.g. 'CANDIDATE_FILTER')
                to a config dict replacing the PipelineConfig section
            output_path: Composite destination, defaults to
                COMPOSITING['OUTPUT_NAME'] in the current directory
        """
        config = config or {}

        self.preprocessor = Preprocessor(config.get('PREPROCESSING'))
        self.segmenter = ColorSegmenter(config.get('SEGMENTATION'))
        self.contour_detector = ContourDetector(config.get('CANDIDATE_FILTER'))
        self.geometry = GeometryFitter(config.get('POLYGON'))
        self.deskewer = Deskewer()
        self.compositor = Compositor(config.get('COMPOSITING'))

        if output_path is None:
            output_path = self.compositor.config['OUTPUT_NAME']
        self.output_path = Path(output_path)

        self.viz_colors = PipelineConfig.VIZ_COLORS
        self.titles = PipelineConfig.PREVIEW_TITLES

    def process_candidate(self,
                          result: AlignmentResult,
                          index: int,
                          contour: np.ndarray,
                          area: float,
                          preview: PreviewSink) -> bool:
        """
        Fit, deskew and composite one candidate.

        Returns:
            True if the candidate was composited, False if it was skipped
        """
        working = result.working

        try:
            candidate = self.geometry.fit(index, contour, area)
            draw_bounding_rect(working, candidate.bounding_rect, self.viz_colors['BOUNDING_BOX'])
            rotated, patch = self.deskewer.deskew(working, candidate)
        except (DegenerateCandidateError, cv2.error) as exc:
            print(f"Skipping candidate {index}: {exc}")
            return False

        preview.show(self.titles['ROTATED'], rotated)
        preview.show(self.titles['CROPPED'], patch)

        self.compositor.composite(working, patch)
        result.candidates.append(candidate)
        result.patches.append(patch)

        result.output_path = write_png(self.output_path, working)
        print(f"Saved: {result.output_path}")
        preview.show(self.titles['RESULT'], working)

        return True

    def process_image(self, image: np.ndarray, preview: PreviewSink = None) -> AlignmentResult:
        """
        Run full pipeline on an image.

        Args:
            image: RGB input image
            preview: Sink for intermediate frames, frames are dropped if None

        Returns:
            AlignmentResult with all intermediate products
        """
        preview = preview or NullPreview()

        # Step 1: Preprocessing
        working, hsv = self.preprocessor.process(image)
        preview.show(self.titles['ORIGINAL'], working)
        preview.show(self.titles['HSV'], hsv)

        # Step 2: Segmentation
        mask = self.segmenter.segment(hsv)
        preview.show(self.titles['MASK'], mask)

        result = AlignmentResult(working=working, hsv=hsv, mask=mask)

        # Step 3: Contours and area filter
        contours, candidates = self.contour_detector.detect(mask)
        result.contours = contours
        print(f"Contour count {len(contours)}")

        # Step 4: Geometry, deskew and composite, one candidate at a time
        for index, contour, area in candidates:
            self.process_candidate(result, index, contour, area, preview)

        preview.show(self.titles['CONTOURS'], working)

        return result


def build_config(args: argparse.Namespace) -> Dict[str, dict]:
    """Config sections with command line overrides applied."""
    config = {
        'PREPROCESSING': with_overrides(PipelineConfig.PREPROCESSING,
                                        DOWNSCALE_FACTOR=args.downscale),
        'CANDIDATE_FILTER': with_overrides(PipelineConfig.CANDIDATE_FILTER,
                                           MIN_AREA=args.min_area,
                                           MAX_AREA=args.max_area),
    }

    if args.relative_area is not None:
        min_fraction, max_fraction = args.relative_area
        config['CANDIDATE_FILTER'] = with_overrides(config['CANDIDATE_FILTER'],
                                                    RELATIVE=True,
                                                    MIN_FRACTION=min_fraction,
                                                    MAX_FRACTION=max_fraction)

    return config


def build_preview(args: argparse.Namespace) -> PreviewSink:
    if args.preview == 'window':
        return WindowPreview()
    if args.preview == 'montage':
        return MontagePreview(args.montage_path)
    return NullPreview()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='document-alignment',
        description='Deskew and crop a red-framed document from a photo')
    parser.add_argument('input', nargs='?', type=str,
                        help='Input image (default: bundled A4 sample)')
    parser.add_argument('--output', '-o', type=str,
                        default=PipelineConfig.COMPOSITING['OUTPUT_NAME'],
                        help='Composite PNG path (default: result.png)')
    parser.add_argument('--preview', '-p', choices=['window', 'montage', 'none'],
                        default='window', help='Where to show intermediate stages')
    parser.add_argument('--montage-path', type=str, default='stages.png',
                        help='Summary figure path for --preview montage')
    parser.add_argument('--downscale', type=int, help='Downscale factor (default: 4)')
    parser.add_argument('--min-area', type=float, help='Minimum candidate area, exclusive')
    parser.add_argument('--max-area', type=float, help='Maximum candidate area, exclusive')
    parser.add_argument('--relative-area', type=float, nargs=2, metavar=('MIN', 'MAX'),
                        help='Area band as fractions of the working image area')
    return parser


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        image = load_image(args.input) if args.input else load_sample()
    except ImageIOError as exc:
        traceback.print_exc()
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Image type: {image_type_code(image)}")

    try:
        pipeline = DocumentAlignmentPipeline(build_config(args), output_path=args.output)
        with build_preview(args) as preview:
            pipeline.process_image(image, preview)
    except (ImageIOError, ValueError) as exc:
        traceback.print_exc()
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
