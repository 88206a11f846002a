"""Exception types raised while ingesting and exporting bundles."""


class AdPreviewError(Exception):
    """Base class for all adpreview failures."""


class InvalidContainerError(AdPreviewError):
    """Raised when the input is not a zip archive."""

    def __init__(self, source: str, reason: str = "") -> None:
        message = f"Not a ZIP archive: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.source = source
        self.reason = reason


class NoDocumentFoundError(AdPreviewError):
    """Raised when an archive holds no HTML document entry."""

    def __init__(self, source: str) -> None:
        super().__init__(f"No HTML file found in the ZIP: {source}")
        self.source = source


class AssetReadError(AdPreviewError):
    """Raised when a single asset entry cannot be decompressed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read asset {path}: {reason}")
        self.path = path
        self.reason = reason


class ExportError(AdPreviewError):
    """Raised when a bundle cannot be written out or shared."""


class BundleNotFoundError(AdPreviewError, KeyError):
    """Raised when a bundle id is not part of the session."""

    def __init__(self, bundle_id: str) -> None:
        super().__init__(f"Bundle not found: {bundle_id}")
        self.bundle_id = bundle_id

    def __str__(self) -> str:
        return self.args[0]
