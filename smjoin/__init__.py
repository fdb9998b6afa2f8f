"""Sort-merge join of CSV tables with external sorting and page I/O accounting."""

__version__ = "0.1.0"

__all__ = ["cli", "external_sorter", "io_tracker", "join", "page", "table"]