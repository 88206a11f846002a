import pytest

from adpreview.detectors import infer_dimensions_and_name, infer_name
from adpreview.detectors.naming import name_from_filename
from adpreview.models import FormatInfo


def test_title_is_trimmed_and_sized() -> None:
    html = "<head><title>  Summer Sale  </title></head>"

    assert infer_name(html, "index.html", 300, 250) == "Summer Sale (300×250)"


def test_title_that_already_has_size_is_kept() -> None:
    html = "<title>Leaderboard 728 x 90</title>"

    assert infer_name(html, "index.html", 728, 90) == "Leaderboard 728 x 90"


def test_uppercase_x_is_not_a_size_in_names() -> None:
    html = "<title>Leaderboard 728X90</title>"

    assert infer_name(html, "index.html", 728, 90) == "Leaderboard 728X90 (728×90)"


def test_meta_display_name_used_without_title() -> None:
    html = '<meta name="display-name" content="Half Page">'

    assert infer_name(html, "index.html", 300, 600) == "Half Page (300×600)"


def test_meta_format_name_used_when_title_is_blank() -> None:
    html = '<title>   </title><meta name="format-name" content="Skyscraper">'

    assert infer_name(html, "index.html", 160, 600) == "Skyscraper (160×600)"


def test_title_beats_meta_name() -> None:
    html = '<title>Title</title><meta name="format-name" content="Meta">'

    assert infer_name(html, "index.html", 1, 2) == "Title (1×2)"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("mobile-portrait-ad.html", "Mobile Portrait"),
        ("Mobile_Landscape.html", "Mobile Landscape"),
        ("tablet-portrait.html", "Tablet Portrait"),
        ("tablet_landscape_v2.html", "Tablet Landscape"),
        ("Desktop-Hero.html", "Desktop"),
        ("summer_sale-final.html", "summer sale final"),
        ("creative/index.html", "creative/index"),
        ("page.htm", "page.htm"),
    ],
)
def test_name_from_filename(filename: str, expected: str) -> None:
    assert name_from_filename(filename) == expected


def test_filename_keyword_name_gets_size() -> None:
    assert infer_name("<html></html>", "mobile-portrait-ad.html", 320, 480) == (
        "Mobile Portrait (320×480)"
    )


def test_filename_with_size_is_not_suffixed_twice() -> None:
    assert infer_name("", "banner_320x480.html", 320, 480) == "banner 320x480"


def test_empty_name_becomes_size() -> None:
    assert infer_name("", ".html", 800, 600) == "800×600"


def test_infer_dimensions_and_name_without_any_signal() -> None:
    assert infer_dimensions_and_name("<html><body></body></html>", ".html") == FormatInfo(
        width=800, height=600, name="800×600"
    )


def test_infer_dimensions_and_name_from_markup() -> None:
    html = (
        '<head><meta name="viewport" content="width=320,height=480">'
        "<title>Launch</title></head>"
    )

    assert infer_dimensions_and_name(html, "mobile-portrait.html") == FormatInfo(
        width=320, height=480, name="Launch (320×480)"
    )
