"""Search and selection controller.

Coordinates catalog searches, holds the result list and tracks the one
selected book shown in the detail view.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol, runtime_checkable

from ..api import Book, SearchFailure, SearchOutcome, SearchSuccess
from .state import Observer, SearchState, StateHolder

logger = logging.getLogger(__name__)


@runtime_checkable
class CatalogClient(Protocol):
    """Anything that can run a catalog search, e.g. GoogleBooksClient."""

    def fetch_books(self, query: str) -> SearchOutcome: ...


class SearchController:
    """Owns search results and selection for one screen.

    ``search`` returns immediately; the HTTP call runs on a worker thread.
    Each request gets a sequence number and only a completion newer than
    every completion seen so far may touch the results, so a slow old
    response can never overwrite a newer one. Failures are logged and
    leave the state alone.

    Selection is sticky: a later search does not clear or revalidate it.
    """

    def __init__(
        self,
        client: CatalogClient,
        executor: Optional[Executor] = None,
    ):
        """Initialize controller.

        Args:
            client: Catalog search, reporting failures as SearchFailure
            executor: Where searches run; a private pool is created
                (and owned) when omitted
        """
        self.client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="bookfinder-search"
        )
        self._holder = StateHolder()
        self._seq_lock = threading.Lock()
        self._last_issued = 0
        self._last_completed = 0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SearchState:
        """Current snapshot."""
        return self._holder.value

    @property
    def results(self) -> tuple[Book, ...]:
        return self._holder.value.results

    @property
    def selected(self) -> Optional[Book]:
        return self._holder.value.selected

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register for state changes; returns an unsubscribe callable."""
        return self._holder.subscribe(observer)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def search(self, query: str) -> Optional[Future]:
        """Start a search for ``query``.

        Args:
            query: Free-text search; blank queries are ignored

        Returns:
            Future resolving to the SearchOutcome once it has been applied
            or discarded, or None if nothing was sent
        """
        if not query or not query.strip():
            logger.debug("Ignoring blank query")
            return None

        with self._seq_lock:
            self._last_issued += 1
            seq = self._last_issued

        logger.debug("Search #%d issued: %r", seq, query)
        return self._executor.submit(self._run, seq, query)

    def select(self, book: Book) -> None:
        """Show ``book`` in the detail view."""
        self._holder.update(lambda s: s.with_selected(book))

    def clear_selection(self) -> None:
        """Close the detail view."""
        self._holder.update(lambda s: s.with_selected(None))

    # -------------------------------------------------------------------------
    # Background completion
    # -------------------------------------------------------------------------

    def _run(self, seq: int, query: str) -> SearchOutcome:
        try:
            outcome = self.client.fetch_books(query)
        except Exception as e:
            # Clients report failures as values; treat a raise the same way.
            logger.exception("Search #%d raised unexpectedly", seq)
            outcome = SearchFailure(f"Unexpected error: {e}")

        try:
            self._holder.update(lambda s: self._apply(s, seq, query, outcome))
        except Exception:
            # Observers run on this worker; their errors must not reach the future.
            logger.exception("Applying search #%d failed", seq)
        return outcome

    def _apply(
        self, state: SearchState, seq: int, query: str, outcome: SearchOutcome
    ) -> SearchState:
        # Runs under the holder's lock.
        with self._seq_lock:
            if seq < self._last_completed:
                logger.debug("Search #%d completed after #%d; discarded", seq, self._last_completed)
                return state
            self._last_completed = seq

        if isinstance(outcome, SearchFailure):
            logger.warning("Search #%d for %r failed: %s", seq, query, outcome.message)
            return state

        if isinstance(outcome, SearchSuccess):
            return state.with_results(outcome.books)

        raise TypeError(f"Unknown search outcome: {outcome!r}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self, wait: bool = True) -> None:
        """Shut down the worker pool if this controller created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SearchController":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
