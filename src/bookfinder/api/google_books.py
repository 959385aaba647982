"""Google Books API client for catalog search.

Google Books (googleapis.com/books/v1) exposes a ``volumes`` endpoint that
returns matching volumes for a free-text query. Only the first page of
results is used.

An API key is required and is always passed in by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1"


class GoogleBooksError(Exception):
    """Raised for any failed catalog request.

    Transport errors, timeouts, non-success statuses and undecodable
    bodies all map to this one error.
    """

    pass


# ============================================================================
# Wire Models
# ============================================================================


class ImageLinks(BaseModel):
    """``volumeInfo.imageLinks`` object."""

    model_config = ConfigDict(extra="ignore")

    thumbnail: Optional[str] = None


class VolumeInfo(BaseModel):
    """``volumeInfo`` object of a volume."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str
    authors: Optional[list[str]] = None
    description: Optional[str] = None
    image_links: Optional[ImageLinks] = Field(None, alias="imageLinks")


class VolumeItem(BaseModel):
    """One entry of the ``items`` array."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    volume_info: VolumeInfo = Field(..., alias="volumeInfo")


class VolumesResponse(BaseModel):
    """Body of ``GET /volumes``."""

    model_config = ConfigDict(extra="ignore")

    items: Optional[list[VolumeItem]] = None


# ============================================================================
# Domain Model
# ============================================================================


class Book(BaseModel):
    """A single catalog entry as shown in the list and detail views."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    authors: tuple[str, ...] = ()
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_item(cls, item: VolumeItem) -> "Book":
        """Flatten a wire item into a Book."""
        info = item.volume_info
        return cls(
            id=item.id,
            title=info.title,
            authors=tuple(info.authors or ()),
            description=info.description,
            thumbnail_url=info.image_links.thumbnail if info.image_links else None,
        )


# ============================================================================
# Call Outcome
# ============================================================================


@dataclass(frozen=True)
class SearchSuccess:
    """A decoded response, possibly with no books."""

    books: list[Book] = field(default_factory=list)


@dataclass(frozen=True)
class SearchFailure:
    """Any failed request; ``message`` is for diagnostics only."""

    message: str


SearchOutcome = Union[SearchSuccess, SearchFailure]


def parse_books(payload: object) -> list[Book]:
    """Decode a ``/volumes`` JSON body into books.

    Args:
        payload: Parsed JSON (normally a dict)

    Returns:
        Books in response order; empty when ``items`` is missing or null

    Raises:
        GoogleBooksError: If the body does not match the expected shape
    """
    try:
        response = VolumesResponse.model_validate(payload)
    except ValidationError as e:
        raise GoogleBooksError(f"Unexpected response shape: {e.error_count()} error(s)") from e

    return [Book.from_item(item) for item in response.items or []]


class GoogleBooksClient:
    """Client for the Google Books volumes search."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
    ):
        """Initialize client.

        Args:
            api_key: Google Books API key, sent as the ``key`` parameter
            base_url: API root, without the ``/volumes`` suffix
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": "BookFinder/0.1 (+https://github.com/bookfinder/bookfinder)",
            "Accept": "application/json",
        })

    def _get(self, url: str, params: Optional[dict] = None) -> object:
        """Make GET request, mapping every failure to GoogleBooksError."""
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            raise GoogleBooksError("Request timed out")
        except requests.exceptions.HTTPError as e:
            raise GoogleBooksError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.JSONDecodeError as e:
            raise GoogleBooksError(f"Invalid JSON: {e}")
        except requests.exceptions.RequestException as e:
            raise GoogleBooksError(f"Request failed: {e}")

    def search(self, query: str) -> list[Book]:
        """Search volumes and return the first page of books.

        Args:
            query: Free-text search, sent as ``q``

        Returns:
            List of Book objects

        Raises:
            GoogleBooksError: On any failure
        """
        params = {"q": query, "key": self.api_key}
        data = self._get(f"{self.base_url}/volumes", params)
        return parse_books(data)

    def fetch_books(self, query: str) -> SearchOutcome:
        """Search volumes, reporting failure as a value instead of raising."""
        try:
            books = self.search(query)
        except GoogleBooksError as e:
            return SearchFailure(str(e))

        logger.debug("Query %r returned %d book(s)", query, len(books))
        return SearchSuccess(books)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
