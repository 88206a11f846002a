import io
import zipfile
from pathlib import Path
from typing import Callable, Union

import pytest

Entries = dict[str, Union[str, bytes]]

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"></svg>'

CREATIVE_HTML = """<!DOCTYPE html>
<html>
<head>
<meta name="ad.size" content="width=300,height=250">
<title>Summer Sale</title>
<link rel="stylesheet" href="css/style.css">
</head>
<body>
<img src="images/logo.png" alt="logo">
<img src='badge.svg'>
<script src="./js/app.js"></script>
</body>
</html>
"""


def build_zip(entries: Entries) -> bytes:
    """Zip ``entries`` in order; names ending in '/' become directories."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as zf:
        for name, content in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
                continue
            data = content.encode("utf-8") if isinstance(content, str) else content
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def make_zip() -> Callable[[Entries], bytes]:
    return build_zip


@pytest.fixture
def write_zip(tmp_path: Path) -> Callable[[str, Entries], Path]:
    def _write(filename: str, entries: Entries) -> Path:
        path = tmp_path / filename
        path.write_bytes(build_zip(entries))
        return path

    return _write


@pytest.fixture
def creative_entries() -> Entries:
    return {
        "summer/": b"",
        "summer/index.html": CREATIVE_HTML,
        "summer/images/": b"",
        "summer/images/logo.png": PNG_BYTES,
        "summer/css/style.css": "body { margin: 0; }",
        "summer/js/app.js": "console.log('hi');",
        "summer/badge.svg": SVG_BYTES,
        "__MACOSX/summer/._logo.png": b"resource fork",
        "summer/.DS_Store": b"finder",
    }


def make_bundle(bundle_id: str, width: int = 300, height: int = 250, **overrides) -> "Bundle":
    from adpreview.models import Bundle

    fields = {
        "id": bundle_id,
        "html": f"<html><body>{bundle_id}</body></html>",
        "assets": {"logo.png": "data:image/png;base64,AAAA"},
        "width": width,
        "height": height,
        "name": f"{bundle_id} ({width}×{height})",
    }
    fields.update(overrides)
    return Bundle(**fields)
