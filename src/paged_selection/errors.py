"""Exceptions raised by the page store and the selection model."""

from __future__ import annotations

from typing import Iterable


class PagedSelectionError(RuntimeError):
    """Base class for recoverable errors surfaced to the rendering layer."""


class FetchFailure(PagedSelectionError):
    """The record provider could not deliver a page."""

    def __init__(self, page_index: int, reason: str) -> None:
        super().__init__(f"Failed to fetch page {page_index}: {reason}")
        self.page_index = page_index
        self.reason = reason


class InvalidSelectionCount(PagedSelectionError, ValueError):
    """A "select first N" request carried a non-positive or non-numeric N."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Selection count must be a positive integer, got {value!r}")
        self.value = value


class SelectionOutsidePage(PagedSelectionError, ValueError):
    """A page-scoped selection change named ids that are not on the page."""

    def __init__(self, page_index: int, ids: Iterable[int]) -> None:
        self.ids = tuple(sorted(ids))
        super().__init__(f"Ids {list(self.ids)} are not on page {page_index}")
        self.page_index = page_index


__all__ = [
    "FetchFailure",
    "InvalidSelectionCount",
    "PagedSelectionError",
    "SelectionOutsidePage",
]
