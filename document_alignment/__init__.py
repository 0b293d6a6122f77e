"""Deskew and crop a red-framed A5 document photographed on an A4 sheet."""

from .pipeline import AlignmentResult, DocumentAlignmentPipeline, main

__version__ = '0.1.0'

__all__ = ['AlignmentResult', 'DocumentAlignmentPipeline', 'main']
