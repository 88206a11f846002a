"""FastMCP server implementation for adpreview."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from adpreview.errors import AdPreviewError
from adpreview.pipeline import BundleLoader
from adpreview.storage import SessionStore


def create_mcp_server(session_path: Path) -> FastMCP:
    """Create an MCP server for a preview session.

    The session database is re-read on every call, so bundles added
    from the CLI show up without a restart.

    Args:
        session_path: Path to the session database

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="adpreview",
    )

    store = SessionStore(session_path)
    store.initialize()
    loader = BundleLoader()

    @mcp.tool()
    def ls() -> str:
        """List loaded bundles.

        Returns:
            One line per bundle with id, size and asset count; the selected
            bundle is marked with '*'
        """
        collection = store.load_collection()
        if not len(collection):
            return "No formats uploaded"

        lines = []
        for bundle in collection:
            marker = "*" if bundle.id == collection.selected_id else " "
            size = f"{bundle.width}×{bundle.height}"
            lines.append(f"{marker} {bundle.id:<50} {size:>10} {bundle.asset_count} assets")
        return "\n".join(lines)

    @mcp.tool()
    def read(bundle_id: str) -> str:
        """Read a bundle's self-contained HTML.

        Args:
            bundle_id: Bundle id (as shown in ls output)

        Returns:
            The resolved HTML document
        """
        collection = store.load_collection()
        if bundle_id not in collection:
            return f"Error: Bundle not found: {bundle_id}"
        return collection.get(bundle_id).html

    @mcp.tool()
    def add(path: str) -> str:
        """Load a ZIP archive of an HTML creative into the session.

        Args:
            path: Filesystem path to the .zip file

        Returns:
            Summary of the loaded bundle, or the reason it was rejected
        """
        collection = store.load_collection()
        try:
            bundle = loader.load_path(path, taken_ids=collection.ids())
        except AdPreviewError as exc:
            return f"Error: {exc}"

        collection.add(bundle)
        store.add_bundle(bundle, collection.selected_id)
        return (
            f"{bundle.name} loaded with {bundle.asset_count} assets!\n"
            f"  Id: {bundle.id}\n"
            f"  Size: {bundle.width}×{bundle.height}"
        )

    @mcp.tool()
    def remove(bundle_id: str) -> str:
        """Remove a bundle from the session.

        Args:
            bundle_id: Bundle id (as shown in ls output)
        """
        collection = store.load_collection()
        if bundle_id not in collection:
            return f"Error: Bundle not found: {bundle_id}"
        collection.remove(bundle_id)
        store.remove_bundle(bundle_id, collection.selected_id)
        return "Format removed"

    return mcp
