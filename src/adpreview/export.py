"""Hand resolved bundles to the outside world."""

import html
import logging
import re
import tempfile
from pathlib import Path
from typing import Iterable

from adpreview.errors import ExportError
from adpreview.models import Bundle

logger = logging.getLogger(__name__)

# Scripts run, but the frame never shares an origin with the host page
SANDBOX_POLICY = "allow-scripts"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 24px; background: #f8fafc; color: #0f172a; }}
.format {{ margin-bottom: 24px; }}
.label {{ margin-bottom: 8px; }}
.count {{ font-size: 12px; background: #e2e8f0; padding: 2px 8px; border-radius: 4px; }}
.frame {{ display: inline-block; border: 1px solid #cbd5e1; }}
iframe {{ display: block; border: none; }}
</style>
</head>
<body>
{sections}
</body>
</html>
"""

SECTION_TEMPLATE = """<div class="format">
  <div class="label">[{device}] {name} <span class="count">{count} assets</span></div>
  <div class="frame" style="width: {width}px; height: {height}px;">
    <iframe srcdoc="{srcdoc}" title="Preview {name}" sandbox="{sandbox}" width="{width}" height="{height}" style="width: {width}px; height: {height}px;"></iframe>
  </div>
</div>"""


def device_label(width: int) -> str:
    """Rough device class for a creative width."""
    if width <= 480:
        return "Smartphone"
    if width <= 1024:
        return "Tablet"
    return "Desktop"


def download_filename(name: str) -> str:
    """File name for a bundle: path separators become "_", leading dots go.

    ``summer/index (800×600)`` becomes ``summer_index (800×600).html``.
    """
    stem = re.sub(r"[/\\]", "_", name).lstrip(".")
    return f"{stem or 'bundle'}.html"


def download(bundle: Bundle, directory: Path | str) -> Path:
    """Write the document verbatim to ``<directory>/<name>.html``.

    The file always lands directly in ``directory``, whatever the name holds.

    Raises:
        ExportError: If the file cannot be written
    """
    target = Path(directory) / download_filename(bundle.name)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(bundle.html, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write {target}: {exc}") from exc
    logger.info(f"HTML file downloaded: {target}")
    return target


def share_reference(bundle: Bundle) -> str:
    """Write the document to a temporary file and return its URI.

    The file outlives the process; the caller decides when to delete it.

    Raises:
        ExportError: If the temporary file cannot be written
    """
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".html", encoding="utf-8", delete=False
        ) as f:
            f.write(bundle.html)
    except OSError as exc:
        raise ExportError(f"Failed to create share reference: {exc}") from exc
    return Path(f.name).as_uri()


def render_preview_page(bundles: Iterable[Bundle], title: str = "HTML Display Preview") -> str:
    """Build a host page showing each bundle in a sandboxed iframe.

    Every frame is sized exactly to the bundle's inferred dimensions.
    """
    sections = [
        SECTION_TEMPLATE.format(
            device=device_label(bundle.width),
            name=html.escape(bundle.name),
            count=bundle.asset_count,
            width=bundle.width,
            height=bundle.height,
            srcdoc=html.escape(bundle.html, quote=True),
            sandbox=SANDBOX_POLICY,
        )
        for bundle in bundles
    ]
    return PAGE_TEMPLATE.format(title=html.escape(title), sections="\n".join(sections))
