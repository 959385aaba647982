"""Rich renderables for the list and detail views."""

from typing import Optional, Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .api import Book
from .search import SearchState

UNKNOWN_AUTHOR = "Unknown Author"
NO_DESCRIPTION = "No description available."

# Terminals at least this wide show list and detail side by side.
WIDE_LAYOUT_MIN_WIDTH = 120


def secure_url(url: Optional[str]) -> Optional[str]:
    """Rewrite a plain-http thumbnail URL to https."""
    if url is None:
        return None
    return url.replace("http://", "https://")


def format_authors(book: Book) -> str:
    """Comma-joined authors, or a placeholder when there are none."""
    return ", ".join(book.authors) if book.authors else UNKNOWN_AUTHOR


def format_description(book: Book) -> str:
    return book.description or NO_DESCRIPTION


def book_table(books: Sequence[Book], title: str = "Results") -> Table:
    """Create a numbered table of books; numbers start at 1."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=3, justify="right")
    table.add_column("Title", no_wrap=False, max_width=40, overflow="ellipsis")
    table.add_column("Author", style="green", max_width=30, overflow="ellipsis")
    table.add_column("Cover", justify="center", width=5)

    for i, book in enumerate(books, 1):
        table.add_row(
            str(i),
            book.title,
            format_authors(book),
            "✓" if book.thumbnail_url else "-",
        )

    return table


def book_detail(book: Book) -> Panel:
    """Detail panel: title, authors, cover link and description."""
    cover = secure_url(book.thumbnail_url)
    lines = [
        Text(book.title, style="bold"),
        Text(f"By {format_authors(book)}", style="dim"),
        Text(""),
        Text(f"Cover: {cover}") if cover else Text("[No image]", style="dim italic"),
        Text(""),
        Text(format_description(book)),
    ]
    return Panel(Group(*lines), title="Book Details", subtitle="b: back")


def render_state(state: SearchState, width: int) -> RenderableType:
    """Pick the view for a snapshot.

    Without a selection the list is shown. With one, narrow terminals show
    only the detail panel; wide ones show list and detail together.
    """
    if state.selected is None:
        if not state.has_results:
            return Text("No results. Type a search to begin.", style="dim")
        return book_table(state.results)

    if width < WIDE_LAYOUT_MIN_WIDTH:
        return book_detail(state.selected)

    grid = Table.grid(expand=True, padding=(0, 1))
    grid.add_column(ratio=1)
    grid.add_column(ratio=1)
    grid.add_row(book_table(state.results), book_detail(state.selected))
    return grid
