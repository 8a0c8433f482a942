"""In-memory catalog of launchable items and its atomic swap holder."""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import overload

from blink.models import Item

logger = logging.getLogger(__name__)


def sort_key(item: Item) -> str:
    """Catalog order: case-insensitive display name."""
    return item.display_name.lower()


class Catalog(Sequence[Item]):
    """Sorted, read-only sequence of items.

    Items are ordered by case-insensitive display name and no two items
    share a ``target_path``. A catalog is never edited; a rescan builds a
    new one.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Item] = ()) -> None:
        """Build a catalog from raw records.

        When several records share a path the first one wins. Ties in the
        sort key keep their input order.
        """
        seen: set[str] = set()
        unique: list[Item] = []
        for item in items:
            if item.target_path in seen:
                logger.debug("Dropping duplicate path %s (%s)", item.target_path, item.display_name)
                continue
            seen.add(item.target_path)
            unique.append(item)
        self._items: tuple[Item, ...] = tuple(sorted(unique, key=sort_key))

    @overload
    def __getitem__(self, index: int) -> Item: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Item, ...]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Catalog({len(self._items)} items)"


class CatalogStore:
    """Holds the current catalog and publishes rescans as one swap.

    Readers call :attr:`current` and always get a complete catalog. Each
    refresh request takes a token; a finished scan is only published if no
    newer request was made in the meantime, so a slow stale scan can never
    replace a newer one.
    """

    def __init__(self, loader: Callable[[], Catalog], catalog: Catalog | None = None) -> None:
        self._loader = loader
        self._catalog = catalog if catalog is not None else Catalog()
        self._lock = threading.Lock()
        self._latest_token = 0

    @property
    def current(self) -> Catalog:
        return self._catalog

    def request_token(self) -> int:
        """Reserve a token for a new refresh; earlier tokens become stale."""
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    def publish(self, catalog: Catalog, token: int | None = None) -> bool:
        """Swap in ``catalog`` unless ``token`` has been superseded."""
        with self._lock:
            if token is not None and token != self._latest_token:
                logger.debug("Discarding stale catalog (token %d, latest %d)", token, self._latest_token)
                return False
            self._catalog = catalog
        return True

    def refresh(self) -> Catalog:
        """Rescan synchronously and publish the result."""
        token = self.request_token()
        catalog = self._loader()
        self.publish(catalog, token)
        return self._catalog

    def refresh_in_background(
        self, on_published: Callable[[Catalog], None] | None = None
    ) -> threading.Thread:
        """Rescan on a daemon thread.

        ``on_published`` runs on the worker thread once the new catalog is
        visible; it is not called for a stale or failed scan.
        """
        token = self.request_token()

        def worker() -> None:
            try:
                catalog = self._loader()
            except Exception:
                logger.exception("Background catalog scan failed")
                return
            if self.publish(catalog, token) and on_published is not None:
                on_published(catalog)

        thread = threading.Thread(target=worker, name="blink-catalog-scan", daemon=True)
        thread.start()
        return thread
