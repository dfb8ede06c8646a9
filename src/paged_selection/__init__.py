"""Cross-page record selection over a remotely paginated record set."""

__all__ = [
    "adapters",
    "errors",
    "records",
    "runtime",
    "selection",
    "store",
]

__version__ = "0.1.0"
