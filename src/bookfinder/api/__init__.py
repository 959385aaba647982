"""API module for the external book catalog.

Provides the Google Books client and the Book model it produces.
"""

from .google_books import (
    DEFAULT_BASE_URL,
    Book,
    GoogleBooksClient,
    GoogleBooksError,
    SearchFailure,
    SearchOutcome,
    SearchSuccess,
    parse_books,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "Book",
    "GoogleBooksClient",
    "GoogleBooksError",
    "SearchFailure",
    "SearchOutcome",
    "SearchSuccess",
    "parse_books",
]
