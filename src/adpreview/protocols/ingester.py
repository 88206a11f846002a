"""Protocol for archive handlers."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from adpreview.models import ExtractedArchive


@runtime_checkable
class Ingester(Protocol):
    """Protocol for archive handlers.

    Implementations split a container into one document and its assets.
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this container type (e.g., 'zip')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this ingester recognizes the given container name."""
        ...

    def extract(self, data: bytes, source: str = "<memory>") -> ExtractedArchive:
        """Split raw container bytes into document text and assets."""
        ...
