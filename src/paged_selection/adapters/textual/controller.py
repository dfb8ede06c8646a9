"""UI-agnostic controller that wires the page store and selection to widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from paged_selection.errors import FetchFailure, InvalidSelectionCount
from paged_selection.records import Page, Record
from paged_selection.runtime import EventBus
from paged_selection.selection import SelectionDelta, SelectionSet
from paged_selection.store import PageStore

INVALID_COUNT_MESSAGE = "Enter a valid number"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class PageView:
    """Everything a table widget needs to draw the current page."""

    records: tuple[Record, ...]
    checked: frozenset[int]
    page_index: int
    page_count: int
    total_count: int
    loading: bool
    selected_count: int

    @property
    def all_checked(self) -> bool:
        return bool(self.records) and len(self.checked) == len(self.records)


@dataclass(slots=True)
class TableUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_rows: Callable[[PageView], None]
    update_count: Callable[[int], None] = _noop
    set_loading: Callable[[bool], None] = _noop
    show_error: Callable[[str], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class TextualTableAdapter:
    """Bridges PageStore + SelectionSet events to a table-friendly surface."""

    def __init__(
        self,
        store: PageStore,
        selection: SelectionSet,
        hooks: TableUIHooks,
        *,
        page_size: int,
        bus: Optional[EventBus] = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.store = store
        self.selection = selection
        self.hooks = hooks
        self.page_size = page_size
        self.bus = bus
        if bus is not None:
            self._subscribe_events(bus)
        self._refresh_rows()

    @property
    def page(self) -> Page:
        return self.store.page

    @property
    def page_count(self) -> int:
        return self.page.page_count(self.page_size)

    def view(self) -> PageView:
        page = self.page
        return PageView(
            records=page.records,
            checked=self.selection.visible_selection(page),
            page_index=page.index,
            page_count=self.page_count,
            total_count=page.total_count,
            loading=self.store.loading,
            selected_count=self.selection.count(),
        )

    async def goto_page(self, page_index: int) -> Optional[Page]:
        """Load ``page_index``; failures are shown, never raised."""

        target = max(0, page_index)
        self._log_state("goto ->", target=target)
        self.hooks.set_loading(True)
        try:
            page = await self.store.load(target)
        except FetchFailure as exc:
            self.hooks.show_error(str(exc))
            return None
        finally:
            self.hooks.set_loading(self.store.loading)
        if self.bus is None:
            self._refresh_rows()
        return page

    async def next_page(self) -> Optional[Page]:
        return await self.goto_page(min(self._anchor_index() + 1, self.page_count - 1))

    async def previous_page(self) -> Optional[Page]:
        return await self.goto_page(max(self._anchor_index() - 1, 0))

    async def first_page(self) -> Optional[Page]:
        return await self.goto_page(0)

    async def last_page(self) -> Optional[Page]:
        return await self.goto_page(self.page_count - 1)

    def _anchor_index(self) -> int:
        # While a request is in flight, step from it rather than the page on screen.
        requested = self.store.requested_index
        if self.store.loading and requested is not None:
            return requested
        return self.page.index

    def set_page_checked(self, record_ids: Iterable[int]) -> SelectionDelta:
        """Handle a widget event carrying every checked row of the page."""

        delta = self.selection.apply_page_selection_change(self.page, record_ids)
        self._after_selection(delta)
        return delta

    def toggle_record(self, record_id: int) -> SelectionDelta:
        checked = set(self.selection.visible_selection(self.page))
        if record_id in checked:
            checked.discard(record_id)
        else:
            checked.add(record_id)
        return self.set_page_checked(checked)

    def toggle_all(self) -> SelectionDelta:
        """Header checkbox: select the whole page, or clear a full page."""

        if self.view().all_checked:
            return self.set_page_checked(())
        return self.set_page_checked(self.page.ids)

    def submit_select_count(self, raw: object) -> Optional[SelectionDelta]:
        self._log_state("select_n ->", raw=raw)
        try:
            delta = self.selection.select_first_n(self.page, raw)
        except InvalidSelectionCount:
            self.hooks.show_error(INVALID_COUNT_MESSAGE)
            return None
        self._after_selection(delta)
        return delta

    def _after_selection(self, delta: SelectionDelta) -> None:
        self._log_state(
            "selection <-",
            added=sorted(delta.added),
            removed=sorted(delta.removed),
        )
        if self.bus is None:
            self._refresh_rows()

    def _subscribe_events(self, bus: EventBus) -> None:
        bus.subscribe("selection.changed", lambda _payload: self._refresh_rows())
        bus.subscribe(
            "page.loading", lambda _payload: self.hooks.set_loading(True)
        )
        bus.subscribe("page.loaded", lambda _payload: self._refresh_rows())

    def _refresh_rows(self) -> None:
        view = self.view()
        self.hooks.update_rows(view)
        self.hooks.update_count(view.selected_count)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "page": self.page.index,
            "requested": self.store.requested_index,
            "loading": self.store.loading,
            "selected": self.selection.count(),
        }


__all__ = ["INVALID_COUNT_MESSAGE", "PageView", "TableUIHooks", "TextualTableAdapter"]
