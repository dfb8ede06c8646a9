"""Selection of record ids that survives pagination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from paged_selection.errors import InvalidSelectionCount, SelectionOutsidePage
from paged_selection.records import Page
from paged_selection.runtime import EventBus
from paged_selection.runtime import telemetry

LOGGER_NAME = "paged_selection.selection"


@dataclass(frozen=True, slots=True)
class SelectionDelta:
    """Outcome of one mutation: what changed and the resulting total."""

    page_index: int
    added: frozenset[int]
    removed: frozenset[int]
    count: int

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def parse_selection_count(value: object) -> int:
    """Validate the N of a "select first N" request.

    Accepts ints and strings holding ASCII base-10 digits (surrounding
    whitespace allowed, no digit separators). Bools, floats, other types and
    anything ``<= 0`` are rejected.
    """

    if isinstance(value, bool):
        raise InvalidSelectionCount(value)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text.isascii() or "_" in text:
            raise InvalidSelectionCount(value)
        try:
            parsed = int(text, 10)
        except ValueError as exc:
            raise InvalidSelectionCount(value) from exc
    else:
        raise InvalidSelectionCount(value)
    if parsed <= 0:
        raise InvalidSelectionCount(value)
    return parsed


class SelectionSet:
    """Owns the ids the user picked on every page visited this session.

    Membership depends on the id only. Page-scoped updates touch the ids of
    the given page and nothing else, so selections made on pages that are no
    longer loaded are left alone.
    """

    def __init__(self, *, bus: Optional[EventBus] = None) -> None:
        self._selected: set[int] = set()
        self._bus = bus

    def visible_selection(self, page: Page) -> frozenset[int]:
        """Ids on ``page`` that are currently selected."""

        return frozenset(
            record.id for record in page.records if record.id in self._selected
        )

    def apply_page_selection_change(
        self, page: Page, now_checked: Iterable[int]
    ) -> SelectionDelta:
        """Make ``now_checked`` the exact selection within ``page``."""

        checked = frozenset(now_checked)
        page_ids = page.id_set
        outside = checked - page_ids
        if outside:
            telemetry.record_event(
                "selection.rejected",
                level="warning",
                data={"page": page.index, "outside": outside},
                logger_name=LOGGER_NAME,
            )
            raise SelectionOutsidePage(page.index, outside)

        with telemetry.span(
            "selection::apply_page_change",
            logger_name=LOGGER_NAME,
            component="selection",
            metadata={"page": page.index, "checked": len(checked)},
        ) as handle:
            before = self._selected & page_ids
            self._selected -= page_ids
            self._selected |= checked
            delta = SelectionDelta(
                page_index=page.index,
                added=frozenset(checked - before),
                removed=frozenset(before - checked),
                count=len(self._selected),
            )
            handle.add_metadata("count", delta.count)

        if delta.changed:
            telemetry.record_event(
                "selection.changed",
                data={
                    "page": page.index,
                    "added": len(delta.added),
                    "removed": len(delta.removed),
                    "count": delta.count,
                },
                logger_name=LOGGER_NAME,
            )
            if self._bus is not None:
                self._bus.emit("selection.changed", delta)
        return delta

    def select_first_n(self, page: Page, n: object) -> SelectionDelta:
        """Select exactly the first ``n`` records of ``page``.

        ``n`` is clamped to the page length. Other pages are untouched and the
        rest of this page is unchecked.
        """

        try:
            count = parse_selection_count(n)
        except InvalidSelectionCount:
            telemetry.record_event(
                "selection.rejected",
                level="warning",
                data={"page": page.index, "n": n},
                logger_name=LOGGER_NAME,
            )
            raise
        take = min(count, len(page))
        return self.apply_page_selection_change(page, page.ids[:take])

    def count(self) -> int:
        return len(self._selected)

    def selected_ids(self) -> frozenset[int]:
        return frozenset(self._selected)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._selected))


__all__ = ["SelectionDelta", "SelectionSet", "parse_selection_count"]
