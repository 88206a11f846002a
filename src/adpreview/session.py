"""The set of currently loaded bundles and the selection pointer."""

from typing import Iterator, Optional

from adpreview.errors import BundleNotFoundError
from adpreview.models import Bundle


class ActiveCollection:
    """Ordered bundles plus the id of the selected one.

    The selection always names a bundle in the collection, or is None.
    Every mutation adds, removes or clears whole bundles.
    """

    def __init__(self) -> None:
        self._bundles: dict[str, Bundle] = {}
        self._selected: Optional[str] = None

    def __len__(self) -> int:
        return len(self._bundles)

    def __iter__(self) -> Iterator[Bundle]:
        return iter(list(self._bundles.values()))

    def __contains__(self, bundle_id: object) -> bool:
        return bundle_id in self._bundles

    def ids(self) -> list[str]:
        return list(self._bundles)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected

    @property
    def selected(self) -> Optional[Bundle]:
        if self._selected is None:
            return None
        return self._bundles[self._selected]

    def get(self, bundle_id: str) -> Bundle:
        try:
            return self._bundles[bundle_id]
        except KeyError:
            raise BundleNotFoundError(bundle_id) from None

    def add(self, bundle: Bundle) -> None:
        """Insert a bundle; it becomes selected if nothing else is."""
        self._bundles = {**self._bundles, bundle.id: bundle}
        if self._selected is None:
            self._selected = bundle.id

    def select(self, bundle_id: str) -> None:
        if bundle_id not in self._bundles:
            raise BundleNotFoundError(bundle_id)
        self._selected = bundle_id

    def remove(self, bundle_id: str) -> Bundle:
        """Drop a bundle, moving the selection to the first one left."""
        if bundle_id not in self._bundles:
            raise BundleNotFoundError(bundle_id)
        remaining = {key: value for key, value in self._bundles.items() if key != bundle_id}
        removed = self._bundles[bundle_id]
        self._bundles = remaining
        if self._selected == bundle_id:
            self._selected = next(iter(remaining), None)
        return removed

    def clear(self) -> None:
        self._bundles = {}
        self._selected = None

    def current(self, bundle_id: Optional[str] = None) -> Optional[Bundle]:
        """Resolve the bundle an export acts on.

        An explicit id wins; otherwise the selected bundle, otherwise the
        first loaded one. Returns None for an empty collection.
        """
        if bundle_id is not None:
            return self.get(bundle_id)
        if self.selected is not None:
            return self.selected
        return next(iter(self._bundles.values()), None)
