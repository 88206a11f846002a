"""Core data models for archives, assets and bundles."""

import base64
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class AssetEntry:
    """A non-document file from an archive, keyed by basename."""

    basename: str
    content: bytes
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def data_uri(self) -> str:
        """Inline representation usable in place of a file reference."""
        payload = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"


@dataclass
class ExtractedArchive:
    """The document and assets pulled out of one archive."""

    document_path: str
    document_text: str
    assets: dict[str, AssetEntry] = field(default_factory=dict)

    @property
    def asset_map(self) -> dict[str, str]:
        """Basename -> data URI, in archive order."""
        return {name: entry.data_uri for name, entry in self.assets.items()}


@dataclass(frozen=True)
class FormatInfo:
    """Presentation metadata inferred from a document."""

    width: int
    height: int
    name: str


@dataclass(frozen=True)
class Bundle:
    """A self-contained document with its presentation metadata."""

    id: str
    html: str
    assets: Mapping[str, str]
    width: int
    height: int
    name: str

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))

    @property
    def asset_count(self) -> int:
        return len(self.assets)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "html": self.html,
            "assets": dict(self.assets),
            "width": self.width,
            "height": self.height,
            "name": self.name,
        }
