"""Turn archives into self-contained bundles."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Container, Iterable, Optional

from adpreview.detectors import infer_dimensions_and_name
from adpreview.errors import AdPreviewError, InvalidContainerError
from adpreview.ingesters import ZipIngester
from adpreview.models import Bundle
from adpreview.protocols import Ingester
from adpreview.rewriters import ReferenceRewriter

logger = logging.getLogger(__name__)


def make_bundle_id(name: str, timestamp_ms: int, taken: Container[str] = ()) -> str:
    """Build ``<name>_<timestamp>``, suffixed until it is not in ``taken``."""
    bundle_id = f"{name}_{timestamp_ms}"
    suffix = 1
    while bundle_id in taken:
        suffix += 1
        bundle_id = f"{name}_{timestamp_ms}-{suffix}"
    return bundle_id


@dataclass
class LoadResult:
    """Outcome of one submitted archive."""

    source: str
    bundle: Optional[Bundle] = None
    error: Optional[AdPreviewError] = None

    @property
    def ok(self) -> bool:
        return self.bundle is not None


class BundleLoader:
    """Extract, infer, then inline: one archive at a time.

    Metadata is always inferred from the document as it was in the
    archive, before any reference is rewritten.
    """

    def __init__(
        self,
        ingester: Optional[Ingester] = None,
        rewriter: Optional[ReferenceRewriter] = None,
    ):
        self.ingester = ingester or ZipIngester()
        self.rewriter = rewriter or ReferenceRewriter()

    def load(
        self,
        data: bytes,
        filename: Optional[str] = None,
        taken_ids: Container[str] = (),
        timestamp_ms: Optional[int] = None,
    ) -> Bundle:
        """Build a bundle from raw archive bytes.

        Args:
            data: Archive bytes
            filename: Name of the submitted file; checked for a .zip extension
            taken_ids: Bundle ids already in use in the session
            timestamp_ms: Ingestion time, defaults to now

        Returns:
            The finished, immutable Bundle

        Raises:
            InvalidContainerError: Wrong extension or unreadable archive
            NoDocumentFoundError: Archive holds no HTML document
        """
        source = filename or "<memory>"
        if filename is not None and not self.ingester.can_handle(Path(filename)):
            raise InvalidContainerError(source, "Please upload a ZIP file")

        archive = self.ingester.extract(data, source=source)
        info = infer_dimensions_and_name(archive.document_text, archive.document_path)

        asset_map = archive.asset_map
        html = self.rewriter.rewrite(archive.document_text, asset_map)

        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)

        return Bundle(
            id=make_bundle_id(info.name, timestamp_ms, taken_ids),
            html=html,
            assets=asset_map,
            width=info.width,
            height=info.height,
            name=info.name,
        )

    def load_path(self, path: Path | str, taken_ids: Container[str] = ()) -> Bundle:
        """Read an archive from disk and build a bundle from it."""
        path = Path(path)
        if not self.ingester.can_handle(path):
            raise InvalidContainerError(str(path), "Please upload a ZIP file")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise InvalidContainerError(str(path), exc.strerror or str(exc)) from exc
        return self.load(data, filename=path.name, taken_ids=taken_ids)

    def load_many(
        self, paths: Iterable[Path | str], taken_ids: Iterable[str] = ()
    ) -> list[LoadResult]:
        """Load archives strictly one after another.

        A failing archive is logged and reported in its LoadResult; it never
        stops the remaining archives from loading.
        """
        taken = set(taken_ids)
        results = []
        for path in paths:
            try:
                bundle = self.load_path(path, taken_ids=taken)
            except AdPreviewError as exc:
                logger.error(f"Failed to process {path}: {exc}")
                results.append(LoadResult(source=str(path), error=exc))
                continue

            taken.add(bundle.id)
            logger.info(f"{bundle.name} loaded with {bundle.asset_count} assets!")
            results.append(LoadResult(source=str(path), bundle=bundle))
        return results
