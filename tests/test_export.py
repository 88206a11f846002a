from pathlib import Path
from urllib.request import url2pathname
from urllib.parse import urlparse

import pytest

from adpreview.errors import ExportError
from adpreview.export import (
    device_label,
    download,
    download_filename,
    render_preview_page,
    share_reference,
)

from conftest import make_bundle


def test_download_writes_name_dot_html(tmp_path: Path) -> None:
    bundle = make_bundle("promo", html="<html><body>é ✓</body></html>")

    target = download(bundle, tmp_path / "out")

    assert target == tmp_path / "out" / "promo (300×250).html"
    assert target.read_text(encoding="utf-8") == bundle.html


def test_download_keeps_untitled_name_in_target_directory(tmp_path: Path) -> None:
    out = tmp_path / "out"

    target = download(make_bundle("x", name="summer/index (800×600)"), out)

    assert target.parent == out
    assert target.name == "summer_index (800×600).html"


def test_download_cannot_escape_target_directory(tmp_path: Path) -> None:
    out = tmp_path / "out"

    target = download(make_bundle("x", name="../../escaped"), out)

    assert target.parent == out
    assert not (tmp_path / "escaped.html").exists()
    assert target.read_text(encoding="utf-8") == make_bundle("x").html


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Summer Sale (300×250)", "Summer Sale (300×250).html"),
        ("a\\b/c", "a_b_c.html"),
        ("../x", "_x.html"),
        ("..", "bundle.html"),
    ],
)
def test_download_filename(name: str, expected: str) -> None:
    assert download_filename(name) == expected


def test_download_failure_raises_export_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(ExportError):
        download(make_bundle("promo"), blocker)


def test_share_reference_points_at_document_copy() -> None:
    bundle = make_bundle("promo")

    uri = share_reference(bundle)

    assert uri.startswith("file://")
    path = Path(url2pathname(urlparse(uri).path))
    try:
        assert path.suffix == ".html"
        assert path.read_text(encoding="utf-8") == bundle.html
    finally:
        path.unlink()


@pytest.mark.parametrize(
    "width, label",
    [(320, "Smartphone"), (480, "Smartphone"), (481, "Tablet"), (1024, "Tablet"), (1280, "Desktop")],
)
def test_device_label(width: int, label: str) -> None:
    assert device_label(width) == label


def test_preview_page_sandboxes_each_bundle() -> None:
    bundles = [
        make_bundle("mobile", width=320, height=480, html='<p class="x">hi & bye</p>'),
        make_bundle("billboard", width=1280, height=250),
    ]

    page = render_preview_page(bundles)

    assert page.count("<iframe") == 2
    assert page.count('sandbox="allow-scripts"') == 2
    assert "allow-same-origin" not in page
    assert 'srcdoc="&lt;p class=&quot;x&quot;&gt;hi &amp; bye&lt;/p&gt;"' in page
    assert "width: 320px; height: 480px;" in page
    assert "width: 1280px; height: 250px;" in page
    assert "[Smartphone] mobile (320×480)" in page
    assert "[Desktop] billboard (1280×250)" in page
    assert "1 assets" in page


def test_preview_page_escapes_names() -> None:
    page = render_preview_page([make_bundle("x", name="<b>Ad</b>")])

    assert "&lt;b&gt;Ad&lt;/b&gt;" in page
    assert "<b>Ad</b>" not in page
