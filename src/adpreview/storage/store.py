"""SQLite-backed storage for preview sessions."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from adpreview.models import Bundle
from adpreview.session import ActiveCollection
from adpreview.storage.schema import SCHEMA

SELECTED_KEY = "selected"


class SessionStore:
    """SQLite-backed storage for the active collection.

    Every mutation runs in a single transaction together with the new
    selection, so a reader never sees half a bundle.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def add_bundle(self, bundle: Bundle, selected_id: Optional[str]) -> None:
        """Store a bundle with its assets and record the selection."""
        with self.connection() as conn:
            row = conn.execute("SELECT COALESCE(MAX(position), -1) + 1 AS next FROM bundles").fetchone()
            conn.execute(
                """INSERT INTO bundles (id, position, name, width, height, html)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (bundle.id, row["next"], bundle.name, bundle.width, bundle.height, bundle.html),
            )
            conn.executemany(
                """INSERT INTO assets (bundle_id, position, basename, data_uri)
                   VALUES (?, ?, ?, ?)""",
                [
                    (bundle.id, index, basename, data_uri)
                    for index, (basename, data_uri) in enumerate(bundle.assets.items())
                ],
            )
            self._write_selected(conn, selected_id)

    def remove_bundle(self, bundle_id: str, selected_id: Optional[str]) -> None:
        """Delete a bundle and its assets and record the new selection."""
        with self.connection() as conn:
            conn.execute("DELETE FROM assets WHERE bundle_id = ?", (bundle_id,))
            conn.execute("DELETE FROM bundles WHERE id = ?", (bundle_id,))
            self._write_selected(conn, selected_id)

    def clear(self) -> None:
        """Delete every bundle."""
        with self.connection() as conn:
            conn.execute("DELETE FROM assets")
            conn.execute("DELETE FROM bundles")
            self._write_selected(conn, None)

    def set_selected(self, selected_id: Optional[str]) -> None:
        with self.connection() as conn:
            self._write_selected(conn, selected_id)

    def load_collection(self) -> ActiveCollection:
        """Rebuild the active collection in load order."""
        collection = ActiveCollection()
        with self.connection() as conn:
            bundle_rows = conn.execute(
                "SELECT id, name, width, height, html FROM bundles ORDER BY position"
            ).fetchall()
            for row in bundle_rows:
                asset_rows = conn.execute(
                    """SELECT basename, data_uri FROM assets
                       WHERE bundle_id = ? ORDER BY position""",
                    (row["id"],),
                )
                collection.add(
                    Bundle(
                        id=row["id"],
                        html=row["html"],
                        assets={a["basename"]: a["data_uri"] for a in asset_rows},
                        width=row["width"],
                        height=row["height"],
                        name=row["name"],
                    )
                )
            selected = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (SELECTED_KEY,)
            ).fetchone()

        if selected and selected["value"] in collection:
            collection.select(selected["value"])
        return collection

    @staticmethod
    def _write_selected(conn: sqlite3.Connection, selected_id: Optional[str]) -> None:
        conn.execute(
            "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
            (SELECTED_KEY, selected_id),
        )
