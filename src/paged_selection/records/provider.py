"""Protocol every record source implements."""

from __future__ import annotations

from typing import Protocol

from .models import FetchResult


class RecordProvider(Protocol):
    """Asynchronous source of one page of records at a time."""

    async def fetch_page(self, page_index: int) -> FetchResult:
        """Return the records for the 0-based ``page_index``.

        Implementations raise ``FetchFailure`` when the page cannot be
        delivered; any other exception is wrapped by the page store.
        """
        ...


__all__ = ["RecordProvider"]
