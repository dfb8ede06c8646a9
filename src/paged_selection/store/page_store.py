"""Single-page cache in front of an asynchronous record provider."""

from __future__ import annotations

import asyncio
from typing import Optional

from paged_selection.errors import FetchFailure
from paged_selection.records import Page, RecordProvider
from paged_selection.runtime import EventBus
from paged_selection.runtime import telemetry

LOGGER_NAME = "paged_selection.store"


class PageStore:
    """Holds exactly one loaded page; the most recent ``load`` always wins.

    Every ``load`` takes a new request token. A fetch that resolves while a
    newer token is outstanding is dropped: the held page, ``loading`` and
    ``error`` stay as they are and the caller gets the currently held page.
    """

    def __init__(
        self,
        provider: RecordProvider,
        *,
        bus: Optional[EventBus] = None,
        initial_index: int = 0,
    ) -> None:
        self._provider = provider
        self._bus = bus
        self._page = Page.empty(initial_index)
        self._token = 0
        self._requested_index: Optional[int] = None
        self.loading = False
        self.error: Optional[FetchFailure] = None

    @property
    def page(self) -> Page:
        return self._page

    @property
    def requested_index(self) -> Optional[int]:
        """Index of the newest request, resolved or not."""

        return self._requested_index

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _emit(self, event: str, payload: object) -> None:
        if self._bus is not None:
            self._bus.emit(event, payload)

    async def load(self, page_index: int) -> Page:
        """Fetch ``page_index`` and replace the held page with it.

        Raises ``FetchFailure`` when the newest request fails; the previously
        held page is kept. Superseded requests never raise.
        """

        if page_index < 0:
            raise ValueError("page index cannot be negative")

        self._token += 1
        token = self._token
        self._requested_index = page_index
        self.loading = True
        telemetry.record_event(
            "page.request",
            data={"page": page_index, "token": token},
            logger_name=LOGGER_NAME,
        )
        self._emit("page.loading", page_index)

        try:
            result = await self._provider.fetch_page(page_index)
            page = Page.from_records(page_index, result.records, result.total_count)
        except asyncio.CancelledError:
            if self._is_current(token):
                self.loading = False
            raise
        except Exception as exc:
            failure = (
                exc
                if isinstance(exc, FetchFailure)
                else FetchFailure(page_index, str(exc) or type(exc).__name__)
            )
            if not self._is_current(token):
                self._drop_stale(page_index, token, outcome="failure")
                return self._page
            self.loading = False
            self.error = failure
            telemetry.record_event(
                "page.failed",
                level="error",
                data={"page": page_index, "reason": failure.reason},
                logger_name=LOGGER_NAME,
            )
            self._emit("page.failed", failure)
            if failure is exc:
                raise
            raise failure from exc

        if not self._is_current(token):
            self._drop_stale(page_index, token, outcome="success")
            return self._page

        self._page = page
        self.loading = False
        self.error = None
        telemetry.record_event(
            "page.loaded",
            data={
                "page": page_index,
                "records": len(page),
                "total": page.total_count,
            },
            logger_name=LOGGER_NAME,
        )
        self._emit("page.loaded", page)
        return page

    def _drop_stale(self, page_index: int, token: int, *, outcome: str) -> None:
        telemetry.record_event(
            "page.stale",
            level="debug",
            data={
                "page": page_index,
                "token": token,
                "current_token": self._token,
                "outcome": outcome,
            },
            logger_name=LOGGER_NAME,
        )


__all__ = ["PageStore"]
