"""CLI entry point for adpreview."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from adpreview.detectors import infer_dimensions_and_name
from adpreview.errors import AdPreviewError, BundleNotFoundError, ExportError
from adpreview.export import device_label, download, render_preview_page, share_reference
from adpreview.ingesters import ZipIngester
from adpreview.models import Bundle
from adpreview.pipeline import BundleLoader
from adpreview.session import ActiveCollection
from adpreview.storage import SessionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

SESSION_ENV = "ADPREVIEW_SESSION"


def default_session_path() -> Path:
    """Session database: $ADPREVIEW_SESSION, else ~/.adpreview/session.db."""
    override = os.environ.get(SESSION_ENV)
    if override:
        return Path(override)
    return Path.home() / ".adpreview" / "session.db"


def open_session(session: Path) -> tuple[SessionStore, ActiveCollection]:
    store = SessionStore(session)
    store.initialize()
    return store, store.load_collection()


def add(sources: list[str], session: Path) -> None:
    """Load ZIP archives into the session, one after another.

    Args:
        sources: Paths to .zip files
        session: Path to the session database
    """
    store, collection = open_session(session)
    loader = BundleLoader()

    results = loader.load_many(sources, taken_ids=collection.ids())
    for result in results:
        if result.bundle is None:
            continue
        collection.add(result.bundle)
        store.add_bundle(result.bundle, collection.selected_id)

    loaded = sum(1 for r in results if r.ok)
    logger.info(f"")
    logger.info(f"Loaded {loaded} of {len(results)} archives -> {session}")
    if results and not loaded:
        sys.exit(1)


def ls(session: Path) -> None:
    """List the bundles in the session."""
    _, collection = open_session(session)
    if not len(collection):
        print("No formats uploaded")
        return

    print(f"Loaded Formats ({len(collection)})")
    for bundle in collection:
        marker = "*" if bundle.id == collection.selected_id else " "
        print(f"{marker} {bundle.id}")
        print(f"    {bundle.name}")
        print(
            f"    {bundle.width}×{bundle.height} • {bundle.asset_count} assets"
            f" • {device_label(bundle.width)}"
        )


def select(bundle_id: str, session: Path) -> None:
    store, collection = open_session(session)
    try:
        collection.select(bundle_id)
    except BundleNotFoundError as exc:
        logger.error(str(exc))
        sys.exit(1)
    store.set_selected(collection.selected_id)
    logger.info(f"Selected {bundle_id}")


def remove(bundle_id: str, session: Path) -> None:
    store, collection = open_session(session)
    try:
        collection.remove(bundle_id)
    except BundleNotFoundError as exc:
        logger.error(str(exc))
        sys.exit(1)
    store.remove_bundle(bundle_id, collection.selected_id)
    logger.info("Format removed")


def clear(session: Path) -> None:
    store, collection = open_session(session)
    collection.clear()
    store.clear()
    logger.info("All formats cleared")


def inspect(source: str) -> None:
    """Show what a ZIP archive would load as, without saving it.

    Args:
        source: Path to a .zip file
    """
    path = Path(source)
    ingester = ZipIngester()
    try:
        if not ingester.can_handle(path):
            logger.error("Please upload a ZIP file")
            sys.exit(1)
        archive = ingester.extract(path.read_bytes(), source=str(path))
    except OSError as exc:
        logger.error(f"Cannot read {source}: {exc}")
        sys.exit(1)
    except AdPreviewError as exc:
        logger.error(str(exc))
        sys.exit(1)

    info = infer_dimensions_and_name(archive.document_text, archive.document_path)
    print(f"Archive: {path.name}")
    print(f"  Document: {archive.document_path}")
    print(f"  Name: {info.name}")
    print(f"  Size: {info.width}×{info.height} ({device_label(info.width)})")
    print(f"")
    print(f"Assets ({len(archive.assets)}):")
    for entry in archive.assets.values():
        print(f"  {entry.basename:<40} {entry.mime_type:<28} {entry.size_bytes} B")


def _resolve(collection: ActiveCollection, bundle_id: Optional[str], empty_message: str) -> Bundle:
    try:
        bundle = collection.current(bundle_id)
    except BundleNotFoundError as exc:
        logger.error(str(exc))
        sys.exit(1)
    if bundle is None:
        logger.error(empty_message)
        sys.exit(1)
    return bundle


def export(bundle_id: Optional[str], output: str, session: Path) -> None:
    """Write a bundle's HTML to <output>/<name>.html."""
    _, collection = open_session(session)
    bundle = _resolve(collection, bundle_id, "No content to download")
    try:
        target = download(bundle, output)
    except ExportError as exc:
        logger.error(str(exc))
        sys.exit(1)
    print(target)


def share(bundle_id: Optional[str], session: Path) -> None:
    """Print a transient reference to a bundle's HTML."""
    _, collection = open_session(session)
    bundle = _resolve(collection, bundle_id, "No content to share")
    try:
        reference = share_reference(bundle)
    except ExportError as exc:
        logger.error(f"Failed to copy URL: {exc}")
        sys.exit(1)
    print(reference)


def preview(output: str, selected_only: bool, session: Path) -> None:
    """Write a page showing bundles in sandboxed, exactly sized frames."""
    _, collection = open_session(session)
    if not len(collection):
        logger.error("No formats uploaded")
        sys.exit(1)

    bundles = [collection.current()] if selected_only else list(collection)
    target = Path(output)
    try:
        target.write_text(render_preview_page(bundles), encoding="utf-8")
    except OSError as exc:
        logger.error(f"Failed to write {target}: {exc}")
        sys.exit(1)
    logger.info(f"Preview of {len(bundles)} formats -> {target}")


def serve(session: Path, transport: str = "stdio") -> None:
    """Start MCP server for a session.

    Args:
        session: Path to the session database
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from adpreview.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving {session} via {transport}")
    mcp = create_mcp_server(session)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="adpreview",
        description="adpreview - Self-contained previews of HTML display formats",
    )
    parser.add_argument(
        "--session",
        type=Path,
        default=None,
        help=f"Session database path (default: ${SESSION_ENV} or ~/.adpreview/session.db)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every loaded asset",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # add command
    add_parser = subparsers.add_parser(
        "add",
        help="Load ZIP files containing HTML and assets",
    )
    add_parser.add_argument("sources", nargs="+", help="Input .zip file paths")

    # ls command
    subparsers.add_parser("ls", help="List loaded formats")

    # select command
    select_parser = subparsers.add_parser("select", help="Select a loaded format")
    select_parser.add_argument("bundle_id", help="Bundle id (as shown by ls)")

    # rm command
    rm_parser = subparsers.add_parser("rm", help="Remove a loaded format")
    rm_parser.add_argument("bundle_id", help="Bundle id (as shown by ls)")

    # clear command
    subparsers.add_parser("clear", help="Remove all loaded formats")

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show detected size, name and assets of a ZIP without loading it",
    )
    inspect_parser.add_argument("source", help="Input .zip file path")

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Write a format's self-contained HTML to <name>.html",
    )
    export_parser.add_argument("bundle_id", nargs="?", help="Bundle id (default: selected)")
    export_parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Output directory (default: current directory)",
    )

    # share command
    share_parser = subparsers.add_parser(
        "share",
        help="Print a temporary file URI for a format's HTML",
    )
    share_parser.add_argument("bundle_id", nargs="?", help="Bundle id (default: selected)")

    # preview command
    preview_parser = subparsers.add_parser(
        "preview",
        help="Write a page previewing formats in sandboxed frames",
    )
    preview_parser.add_argument(
        "-o",
        "--output",
        default="preview.html",
        help="Output page path (default: preview.html)",
    )
    preview_parser.add_argument(
        "--selected",
        action="store_true",
        help="Only the selected format (default: all formats)",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for the session",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("adpreview").setLevel(logging.DEBUG)

    session = args.session or default_session_path()

    if args.command == "add":
        add(args.sources, session)
    elif args.command == "ls":
        ls(session)
    elif args.command == "select":
        select(args.bundle_id, session)
    elif args.command == "rm":
        remove(args.bundle_id, session)
    elif args.command == "clear":
        clear(session)
    elif args.command == "inspect":
        inspect(args.source)
    elif args.command == "export":
        export(args.bundle_id, args.output, session)
    elif args.command == "share":
        share(args.bundle_id, session)
    elif args.command == "preview":
        preview(args.output, args.selected, session)
    elif args.command == "serve":
        serve(session, args.transport)


if __name__ == "__main__":
    main()
