"""Utility functions for adpreview."""

from adpreview.utils.mime import guess_mime_type, is_metadata_entry

__all__ = ["guess_mime_type", "is_metadata_entry"]
