"""Replace asset file references with inline data URIs."""

import logging
import re
from typing import Mapping

logger = logging.getLogger(__name__)


class ReferenceRewriter:
    """Point src/href attributes at embedded assets instead of files.

    A reference matches an asset when its value is exactly the asset's
    basename, or some leading path (absolute, relative or nested, with
    either slash style) directly followed by the basename:

    - ``src="logo.png"``
    - ``href='./css/style.css'``
    - ``src="/static/img/logo.png"``

    Basenames match literally and case-sensitively. The rewritten
    attribute keeps its name and is always double-quoted.
    """

    ATTRIBUTES = ("src", "href")

    def rewrite(self, text: str, asset_map: Mapping[str, str]) -> str:
        """Rewrite every reference to a known asset.

        Args:
            text: Document text with external references
            asset_map: Basename -> data URI, applied in iteration order

        Returns:
            Document text with matched references inlined
        """
        for basename, data_uri in asset_map.items():
            pattern = self._pattern_for(basename)
            text, count = pattern.subn(self._replacement(data_uri), text)
            if count:
                logger.debug(f"Inlined {count} reference(s) to {basename}")
        return text

    def _pattern_for(self, basename: str) -> re.Pattern[str]:
        attributes = "|".join(self.ATTRIBUTES)
        return re.compile(
            rf"""((?i:{attributes}))=["'](?:[^"']*[/\\])?{re.escape(basename)}["']"""
        )

    @staticmethod
    def _replacement(data_uri: str):
        return lambda match: f'{match.group(1)}="{data_uri}"'


def inline_references(text: str, asset_map: Mapping[str, str]) -> str:
    """Rewrite asset references in ``text`` using the default rewriter."""
    return ReferenceRewriter().rewrite(text, asset_map)
