"""Data models for adpreview."""

from adpreview.models.bundle import AssetEntry, Bundle, ExtractedArchive, FormatInfo

__all__ = ["AssetEntry", "Bundle", "ExtractedArchive", "FormatInfo"]
