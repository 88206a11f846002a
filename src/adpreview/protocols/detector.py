"""Protocol for dimension detectors."""

from typing import Optional, Protocol

# (width, height); either side may be missing
PartialSize = tuple[Optional[int], Optional[int]]


class DimensionDetector(Protocol):
    """One heuristic rule in the dimension cascade.

    Returns None when the rule finds nothing, otherwise whichever of
    width and height it could read.
    """

    def __call__(self, html: str, filename: str) -> Optional[PartialSize]:
        ...
