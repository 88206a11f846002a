"""Dimension detectors, in cascade order.

Each detector is a pure function ``(html, filename) -> (width, height)``
returning None when its signal is absent. Inline-style rules only count
pixel values.
"""

import re
from typing import Optional

from adpreview.protocols import DimensionDetector, PartialSize

_I = re.IGNORECASE

AD_SIZE_META = re.compile(r"""<meta\s+name=["']ad\.size["']\s+content=["']([^"']+)["']""", _I)
VIEWPORT_META = re.compile(r"""<meta\s+name=["']viewport["']\s+content=["']([^"']+)["']""", _I)
CONTENT_WIDTH = re.compile(r"width=(\d+)", _I)
CONTENT_HEIGHT = re.compile(r"height=(\d+)", _I)

BODY_STYLE_WH = re.compile(
    r"""<body[^>]*style=["']([^"']*width:\s*(\d+)px[^"']*height:\s*(\d+)px[^"']*)["']""", _I
)
BODY_STYLE_HW = re.compile(
    r"""<body[^>]*style=["']([^"']*height:\s*(\d+)px[^"']*width:\s*(\d+)px[^"']*)["']""", _I
)
HTML_STYLE_WH = re.compile(
    r"""<html[^>]*style=["']([^"']*width:\s*(\d+)px[^"']*height:\s*(\d+)px[^"']*)["']""", _I
)
DIV_STYLE_WH = re.compile(
    r"""<div[^>]*style=["']([^"']*width:\s*(\d+)px[^"']*height:\s*(\d+)px[^"']*)["']""", _I
)

STYLE_BLOCK = re.compile(r"<style[^>]*>([\s\S]*?)</style>", _I)
CSS_BODY_WIDTH = re.compile(r"body\s*\{[^}]*width:\s*(\d+)px", _I)
CSS_BODY_HEIGHT = re.compile(r"body\s*\{[^}]*height:\s*(\d+)px", _I)
CSS_HTML_WIDTH = re.compile(r"html\s*\{[^}]*width:\s*(\d+)px", _I)
CSS_HTML_HEIGHT = re.compile(r"html\s*\{[^}]*height:\s*(\d+)px", _I)

SIZE_COMMENT = re.compile(r"<!--\s*(?:size|dimensions|format):\s*(\d+)\s*[x×]\s*(\d+)\s*-->", _I)
DATA_FORMAT_ATTR = re.compile(r"""data-format=["']([^"']+)["']""", _I)
SIZE_PAIR = re.compile(r"(\d+)\s*[x×]\s*(\d+)", _I)
FILENAME_SIZE = re.compile(r"(\d+)[x×_-](\d+)", _I)


def _meta_content_size(pattern: re.Pattern[str], html: str) -> Optional[PartialSize]:
    match = pattern.search(html)
    if not match:
        return None
    content = match.group(1)
    width = CONTENT_WIDTH.search(content)
    height = CONTENT_HEIGHT.search(content)
    if width and height:
        return int(width.group(1)), int(height.group(1))
    return None


def _style_pair(pattern: re.Pattern[str], text: str) -> Optional[PartialSize]:
    match = pattern.search(text)
    if match:
        return int(match.group(2)), int(match.group(3))
    return None


def detect_ad_size_meta(html: str, filename: str) -> Optional[PartialSize]:
    """``<meta name="ad.size" content="width=300,height=250">``"""
    return _meta_content_size(AD_SIZE_META, html)


def detect_viewport_meta(html: str, filename: str) -> Optional[PartialSize]:
    """``<meta name="viewport" content="width=320,height=480">``"""
    return _meta_content_size(VIEWPORT_META, html)


def detect_body_inline_style(html: str, filename: str) -> Optional[PartialSize]:
    """Inline style on <body>, accepting width and height in either order."""
    found = _style_pair(BODY_STYLE_WH, html)
    if found:
        return found
    match = BODY_STYLE_HW.search(html)
    if match:
        return int(match.group(3)), int(match.group(2))
    return None


def detect_html_inline_style(html: str, filename: str) -> Optional[PartialSize]:
    """Inline style on <html>, width before height only."""
    return _style_pair(HTML_STYLE_WH, html)


def _first_style_block(html: str) -> Optional[str]:
    block = STYLE_BLOCK.search(html)
    return block.group(1) if block else None


def _css_rule_size(
    css: Optional[str], width_rule: re.Pattern[str], height_rule: re.Pattern[str]
) -> Optional[PartialSize]:
    if css is None:
        return None
    width = _first_int(width_rule, css)
    height = _first_int(height_rule, css)
    if width is None and height is None:
        return None
    return width, height


def detect_style_body_rule(html: str, filename: str) -> Optional[PartialSize]:
    """``body { width: 300px; height: 250px }`` in the first <style> block.

    Width and height are read independently, so this tier can yield only
    one of them.
    """
    return _css_rule_size(_first_style_block(html), CSS_BODY_WIDTH, CSS_BODY_HEIGHT)


def detect_style_html_rule(html: str, filename: str) -> Optional[PartialSize]:
    """``html { ... }`` in the first <style> block.

    Runs right after the body rule, so it only gets a say while the size
    is still incomplete, and then overrides whichever sides it finds.
    """
    return _css_rule_size(_first_style_block(html), CSS_HTML_WIDTH, CSS_HTML_HEIGHT)


def detect_container_inline_style(html: str, filename: str) -> Optional[PartialSize]:
    """Inline style on the first <div> carrying both pixel dimensions."""
    return _style_pair(DIV_STYLE_WH, html)


def detect_size_comment(html: str, filename: str) -> Optional[PartialSize]:
    """``<!-- size: 300x250 -->`` (also ``dimensions:`` / ``format:``)."""
    match = SIZE_COMMENT.search(html)
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


def detect_data_format_attribute(html: str, filename: str) -> Optional[PartialSize]:
    """``data-format="leaderboard 728x90"``"""
    attribute = DATA_FORMAT_ATTR.search(html)
    if not attribute:
        return None
    match = SIZE_PAIR.search(attribute.group(1))
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


def detect_filename(html: str, filename: str) -> Optional[PartialSize]:
    """``banner_320x480.html``, ``300-250.html``, ``728×90.html``"""
    match = FILENAME_SIZE.search(filename)
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


def _first_int(pattern: re.Pattern[str], text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


# Highest priority first
DIMENSION_DETECTORS: list[DimensionDetector] = [
    detect_ad_size_meta,
    detect_viewport_meta,
    detect_body_inline_style,
    detect_html_inline_style,
    detect_style_body_rule,
    detect_style_html_rule,
    detect_container_inline_style,
    detect_size_comment,
    detect_data_format_attribute,
    detect_filename,
]
