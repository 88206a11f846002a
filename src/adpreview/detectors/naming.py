"""Display-name inference."""

import re

_I = re.IGNORECASE

TITLE_TAG = re.compile(r"<title>([^<]+)</title>", _I)
NAME_META = re.compile(
    r"""<meta\s+name=["'](?:format-name|display-name)["']\s+content=["']([^"']+)["']""", _I
)
# Case-sensitive: "300X250" in a name does not count as a size
SIZE_IN_NAME = re.compile(r"\d+\s*[x×]\s*\d+")

# Checked in order; every keyword must appear
FILENAME_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("mobile", "portrait"), "Mobile Portrait"),
    (("mobile", "landscape"), "Mobile Landscape"),
    (("tablet", "portrait"), "Tablet Portrait"),
    (("tablet", "landscape"), "Tablet Landscape"),
    (("desktop",), "Desktop"),
]


def name_from_title(html: str) -> str:
    match = TITLE_TAG.search(html)
    return match.group(1).strip() if match else ""


def name_from_meta(html: str) -> str:
    match = NAME_META.search(html)
    return match.group(1).strip() if match else ""


def name_from_filename(filename: str) -> str:
    """Clean a document filename into a name, preferring device keywords.

    ``mobile-portrait-ad.html`` becomes ``Mobile Portrait``, while
    ``summer_sale.html`` becomes ``summer sale``.
    """
    cleaned = re.sub(r"\.html$", "", filename)
    cleaned = re.sub(r"[_-]", " ", cleaned)
    lowered = cleaned.lower()
    for keywords, label in FILENAME_KEYWORDS:
        if all(keyword in lowered for keyword in keywords):
            return label
    return cleaned


def infer_name(html: str, filename: str, width: int, height: int) -> str:
    """Pick a display name and make sure it mentions the size.

    Args:
        html: Original document text
        filename: Name of the document entry
        width: Inferred width in pixels
        height: Inferred height in pixels

    Returns:
        Non-empty display name, e.g. ``Mobile Portrait (320×480)``
    """
    name = name_from_title(html) or name_from_meta(html) or name_from_filename(filename)

    if not name:
        return f"{width}×{height}"
    if not SIZE_IN_NAME.search(name):
        return f"{name} ({width}×{height})"
    return name
