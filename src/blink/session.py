"""Search-as-you-type session: query, ranked results and selection cursor."""

import logging
from collections.abc import Callable
from typing import Literal

from blink.catalog import Catalog, CatalogStore
from blink.config import RESULT_LIMIT
from blink.models import Item
from blink.searcher import rank

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]
Listener = Callable[["QuerySession"], None]


class QuerySession:
    """Mutable state for one launcher activation.

    Every transition recomputes the derived fields before returning and
    only then notifies subscribers, so ``results`` always belongs to
    ``query_text`` and ``selected_index`` is always in range (0 when
    there are no results).
    """

    def __init__(self, store: CatalogStore, limit: int = RESULT_LIMIT) -> None:
        self._store = store
        self._limit = limit
        self._listeners: list[Listener] = []
        self.query_text = ""
        self.results: list[Item] = rank("", store.current, limit)
        self.selected_index = 0

    @classmethod
    def for_catalog(cls, catalog: Catalog, limit: int = RESULT_LIMIT) -> "QuerySession":
        """Session over a fixed catalog with no rescan loader."""
        return cls(CatalogStore(lambda: catalog, catalog), limit)

    @property
    def catalog(self) -> Catalog:
        return self._store.current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after each transition; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def set_query(self, text: str) -> None:
        """Replace the query, re-rank against the current catalog and reset the cursor."""
        results = rank(text, self._store.current, self._limit)
        self.query_text = text
        self.results = results
        self.selected_index = 0
        logger.debug("Query %r -> %d results", text, len(results))
        self._notify()

    def refresh(self) -> None:
        """Re-rank the current query, e.g. after a rescan was published."""
        self.set_query(self.query_text)

    def move_selection(self, direction: Direction) -> None:
        """Move the cursor one step, clamped to the result list.

        Moves past either end are no-ops.
        """
        if direction == "up":
            new_index = max(self.selected_index - 1, 0)
        elif direction == "down":
            new_index = min(self.selected_index + 1, max(len(self.results) - 1, 0))
        else:
            raise ValueError(f"Unknown direction: {direction!r}")

        if new_index != self.selected_index:
            self.selected_index = new_index
            self._notify()

    def current_selection(self) -> Item | None:
        """Item under the cursor, or None when there are no results."""
        if not self.results:
            return None
        return self.results[self.selected_index]
