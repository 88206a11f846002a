"""Ingester for ZIP archives of HTML creatives."""

import io
import logging
import zipfile
import zlib
from pathlib import Path

from adpreview.errors import AssetReadError, InvalidContainerError, NoDocumentFoundError
from adpreview.models import AssetEntry, ExtractedArchive
from adpreview.utils.mime import guess_mime_type, is_metadata_entry

logger = logging.getLogger(__name__)

# Errors zipfile surfaces for a corrupt, encrypted or unsupported member
_READ_ERRORS = (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError)


class ZipIngester:
    """Ingester for ZIP archives holding one HTML document plus assets."""

    source_type = "zip"

    ARCHIVE_EXTENSION = ".zip"
    DOCUMENT_EXTENSION = ".html"

    def can_handle(self, source: Path) -> bool:
        """Check for a ".zip" name; the extension is case-sensitive."""
        return source.name.endswith(self.ARCHIVE_EXTENSION)

    def extract(self, data: bytes, source: str = "<memory>") -> ExtractedArchive:
        """Split a ZIP archive into its document and assets.

        The first entry ending in ``.html`` is the document; any later ones
        are kept as ordinary assets. Hidden files and ``__MACOSX`` entries
        are skipped, and assets that fail to decompress are left out.

        Args:
            data: Raw archive bytes
            source: Name used in log and error messages

        Returns:
            ExtractedArchive with assets keyed by basename

        Raises:
            InvalidContainerError: If the bytes are not a readable zip
            NoDocumentFoundError: If no entry ends in ``.html``
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data), "r")
        except zipfile.BadZipFile as exc:
            raise InvalidContainerError(source, str(exc)) from exc

        document_path: str | None = None
        document_text = ""
        assets: dict[str, AssetEntry] = {}

        with archive:
            for info in archive.infolist():
                # Skip directories
                if info.is_dir():
                    continue

                if document_path is None and info.filename.endswith(self.DOCUMENT_EXTENSION):
                    try:
                        raw = self._read(archive, info)
                    except AssetReadError as exc:
                        raise InvalidContainerError(source, exc.reason) from exc
                    document_path = info.filename
                    document_text = raw.decode("utf-8", errors="replace")
                    continue

                basename = info.filename.split("/")[-1]
                if is_metadata_entry(basename):
                    continue

                try:
                    raw = self._read(archive, info)
                except AssetReadError as exc:
                    logger.warning(f"Skipping asset: {exc}")
                    continue

                entry = AssetEntry(
                    basename=basename,
                    content=raw,
                    mime_type=guess_mime_type(basename),
                )
                # Same basename in two folders: the later entry wins
                assets[basename] = entry
                logger.debug(f'✓ Loaded asset: "{basename}" ({entry.mime_type})')

        if document_path is None:
            raise NoDocumentFoundError(source)

        return ExtractedArchive(
            document_path=document_path,
            document_text=document_text,
            assets=assets,
        )

    @staticmethod
    def _read(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> bytes:
        try:
            return archive.read(info)
        except _READ_ERRORS as exc:
            raise AssetReadError(info.filename, str(exc) or type(exc).__name__) from exc
