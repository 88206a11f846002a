"""Session persistence."""

from adpreview.storage.store import SessionStore

__all__ = ["SessionStore"]
