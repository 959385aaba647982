"""Search and selection state."""

from .controller import CatalogClient, SearchController
from .state import Observer, SearchState, StateHolder

__all__ = [
    "CatalogClient",
    "SearchController",
    "SearchState",
    "StateHolder",
    "Observer",
]
