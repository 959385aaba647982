"""Command-line interface for bookfinder.

Built with Typer for commands and Rich for output.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler

from .api import GoogleBooksClient
from .config import get_config
from .display import book_table, render_state
from .search import SearchController, SearchState

# Create the main app
app = typer.Typer(
    name="bookfinder",
    help="Search the Google Books catalog from your terminal.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()
err_console = Console(stderr=True)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def setup_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _build_controller() -> Iterator[SearchController]:
    """Yield a controller built from the environment, or exit on bad config.

    The worker pool and the HTTP session are both closed on exit.
    """
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    client = GoogleBooksClient(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )
    try:
        with SearchController(client) as controller:
            yield controller
    finally:
        client.close()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Search the Google Books catalog from your terminal."""
    setup_logging(verbose)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def search(
    query: str = typer.Argument(..., help="Title, author or any search text"),
    limit: int = typer.Option(10, "--limit", "-l", help="Max results to show"),
) -> None:
    """Search the catalog once and print the results."""
    if not query.strip():
        print_warning("Nothing to search for.")
        raise typer.Exit(1)

    with _build_controller() as controller:
        console.print(f"[dim]Searching Google Books for: {query}...[/dim]")
        controller.search(query).result()
        books = controller.results

    if not books:
        console.print(f"[dim]No books found matching: {query}[/dim]")
        return

    console.print(book_table(books[:limit], title=f"Search: {query}"))
    if len(books) > limit:
        console.print(f"[dim]Showing {limit} of {len(books)} books[/dim]")


@app.command()
def browse() -> None:
    """Search and open book details interactively.

    Type a search, a result number to open it, 'b' to go back or 'q' to quit.
    """
    with _build_controller() as controller:

        def render(state: SearchState) -> None:
            console.print(render_state(state, console.width))

        unsubscribe = controller.subscribe(render)
        render(controller.state)

        try:
            while True:
                entry = typer.prompt(
                    "\nSearch, # to open, b back, q quit",
                    default="",
                    show_default=False,
                ).strip()

                if entry.lower() == "q":
                    break
                if entry.lower() == "b":
                    controller.clear_selection()
                    continue
                if entry.isdigit():
                    results = controller.results
                    index = int(entry)
                    if 1 <= index <= len(results):
                        controller.select(results[index - 1])
                    else:
                        print_warning(f"No result number {index}.")
                    continue

                pending = controller.search(entry)
                if pending is not None:
                    console.print(f"[dim]Searching Google Books for: {entry}...[/dim]")
                    # Keep the prompt from interleaving with the re-render.
                    pending.result()
        finally:
            unsubscribe()


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"bookfinder version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
