"""Search a public book catalog and browse the results."""

__version__ = "0.1.0"
