"""Asynchronous one-page cache."""

from .page_store import PageStore

__all__ = ["PageStore"]
