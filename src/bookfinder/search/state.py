"""Observable search state.

``SearchState`` is an immutable snapshot; ``StateHolder`` keeps the current
snapshot and tells subscribers about every change.
"""

import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional

from ..api import Book

Observer = Callable[["SearchState"], None]


@dataclass(frozen=True)
class SearchState:
    """What the views render: the result list and the selected book."""

    results: tuple[Book, ...] = ()
    selected: Optional[Book] = None

    @property
    def has_results(self) -> bool:
        return len(self.results) > 0

    @property
    def has_selection(self) -> bool:
        return self.selected is not None

    def with_results(self, books) -> "SearchState":
        """Replace the whole result list, keeping the selection."""
        return replace(self, results=tuple(books))

    def with_selected(self, book: Optional[Book]) -> "SearchState":
        return replace(self, selected=book)


class StateHolder:
    """Single-writer container for a SearchState.

    Writers go through ``update`` so read-modify-write is atomic. Observers
    run on the writer's thread after the state lock is released, one
    delivery at a time and always with the newest snapshot; a delivery that
    has already been overtaken by a newer one is skipped.
    """

    def __init__(self, initial: Optional[SearchState] = None):
        self._value = initial or SearchState()
        self._lock = threading.Lock()
        self._observers: list[Observer] = []
        self._version = 0
        # Reentrant so an observer may itself update the state.
        self._notify_lock = threading.RLock()
        self._delivered = 0

    @property
    def value(self) -> SearchState:
        return self._value

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer.

        Args:
            observer: Called with each new snapshot

        Returns:
            A callable that removes the observer again
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def update(self, transform: Callable[[SearchState], SearchState]) -> SearchState:
        """Apply ``transform`` to the current snapshot.

        Observers are notified only when the snapshot actually changes.

        Returns:
            The snapshot after the update
        """
        with self._lock:
            old = self._value
            new = transform(old)
            if new == old:
                return old
            self._value = new
            self._version += 1

        self._notify()
        return new

    def _notify(self) -> None:
        with self._notify_lock:
            with self._lock:
                version = self._version
                value = self._value
                observers = list(self._observers)
            if version <= self._delivered:
                return
            self._delivered = version

            for observer in observers:
                if self._delivered != version:
                    # A nested update already delivered something newer.
                    break
                observer(value)
