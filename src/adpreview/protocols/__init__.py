"""Protocol definitions for extensible components."""

from adpreview.protocols.detector import DimensionDetector, PartialSize
from adpreview.protocols.ingester import Ingester

__all__ = ["Ingester", "DimensionDetector", "PartialSize"]
