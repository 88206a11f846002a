"""Heuristic detectors for presentation metadata."""

from adpreview.detectors.cascade import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    infer_dimensions,
    infer_dimensions_and_name,
)
from adpreview.detectors.dimensions import DIMENSION_DETECTORS
from adpreview.detectors.naming import infer_name

__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "DIMENSION_DETECTORS",
    "infer_dimensions",
    "infer_dimensions_and_name",
    "infer_name",
]
