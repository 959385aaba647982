"""Pytest configuration and shared fixtures.

Provides sample books, canned API payloads and fake catalog clients for
testing the controller without network access.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Generator, Optional

import pytest

from bookfinder.api import Book, SearchOutcome, SearchSuccess
from bookfinder.config import reset_config
from bookfinder.search import SearchController


# ============================================================================
# Fake Clients
# ============================================================================


class FakeClient:
    """Catalog client returning canned outcomes per query."""

    def __init__(self, outcomes: Optional[dict[str, SearchOutcome]] = None):
        self.outcomes = outcomes or {}
        self.queries: list[str] = []
        self._lock = threading.Lock()

    def fetch_books(self, query: str) -> SearchOutcome:
        with self._lock:
            self.queries.append(query)
        return self.outcomes.get(query, SearchSuccess([]))


class GatedClient(FakeClient):
    """FakeClient whose calls block until the test releases them."""

    def __init__(self, outcomes: Optional[dict[str, SearchOutcome]] = None):
        super().__init__(outcomes)
        self.gates: dict[str, threading.Event] = {}
        self.started: dict[str, threading.Event] = {}

    def gate(self, query: str) -> threading.Event:
        self.gates[query] = threading.Event()
        self.started[query] = threading.Event()
        return self.gates[query]

    def fetch_books(self, query: str) -> SearchOutcome:
        if query in self.started:
            self.started[query].set()
        if query in self.gates:
            assert self.gates[query].wait(timeout=5), f"gate for {query!r} never opened"
        return super().fetch_books(query)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def hobbit() -> Book:
    return Book(id="1", title="The Hobbit", authors=("J.R.R. Tolkien",))


@pytest.fixture
def dune() -> Book:
    return Book(
        id="dune-1",
        title="Dune",
        authors=("Frank Herbert",),
        description="A desert planet.",
        thumbnail_url="http://books.google.com/books/content?id=dune-1",
    )


@pytest.fixture
def foundation() -> Book:
    return Book(id="f-1", title="Foundation", authors=("Isaac Asimov",))


@pytest.fixture
def tolkien_payload() -> dict:
    """Minimal ``/volumes`` response for the query "tolkien"."""
    return {
        "kind": "books#volumes",
        "totalItems": 1,
        "items": [
            {"id": "1", "volumeInfo": {"title": "The Hobbit", "authors": ["J.R.R. Tolkien"]}},
        ],
    }


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def gated_client() -> GatedClient:
    return GatedClient()


@pytest.fixture
def executor() -> Generator[ThreadPoolExecutor, None, None]:
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def controller(fake_client: FakeClient) -> Generator[SearchController, None, None]:
    ctrl = SearchController(fake_client)
    yield ctrl
    ctrl.close()


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from the developer's environment."""
    reset_config()
    monkeypatch.delenv("GOOGLE_BOOKS_API_KEY", raising=False)
    monkeypatch.delenv("BOOKFINDER_BASE_URL", raising=False)
    monkeypatch.delenv("BOOKFINDER_TIMEOUT", raising=False)
    yield
    reset_config()
