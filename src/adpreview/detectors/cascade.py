"""Fold the detectors into width, height and a display name."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from adpreview.detectors.dimensions import DIMENSION_DETECTORS
from adpreview.detectors.naming import infer_name
from adpreview.models import FormatInfo
from adpreview.protocols import DimensionDetector

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


@dataclass
class SizeAccumulator:
    """Width and height found so far; zero means not found."""

    width: int = 0
    height: int = 0

    @property
    def complete(self) -> bool:
        return bool(self.width and self.height)

    def apply(self, width: Optional[int], height: Optional[int]) -> None:
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height


def infer_dimensions(
    html: str,
    filename: str,
    detectors: Iterable[DimensionDetector] = DIMENSION_DETECTORS,
) -> tuple[int, int]:
    """Run the detector cascade until both width and height are known.

    A detector that only finds one side leaves the cascade running, and
    later detectors overwrite whatever they report. If the cascade ends
    incomplete, both sides fall back to 800x600.

    Args:
        html: Original document text (before references are inlined)
        filename: Name of the document entry
        detectors: Ordered detectors, highest priority first

    Returns:
        (width, height), both positive
    """
    size = SizeAccumulator()
    for detector in detectors:
        if size.complete:
            break
        found = detector(html, filename)
        if found is None:
            continue
        size.apply(*found)
        if size.complete:
            source = getattr(detector, "__name__", detector)
            logger.debug(f"{filename}: {size.width}x{size.height} from {source}")

    if not size.complete:
        return DEFAULT_WIDTH, DEFAULT_HEIGHT
    return size.width, size.height


def infer_dimensions_and_name(html: str, filename: str) -> FormatInfo:
    """Infer display width, height and name for a document."""
    width, height = infer_dimensions(html, filename)
    name = infer_name(html, filename, width, height)
    return FormatInfo(width=width, height=height, name=name)
