"""Executable Textual app: a paginated artwork table with cross-page selection."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import DataTable, Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use paged_selection.adapters.textual.app"
    ) from exc

from paged_selection.records.artic import ArticProvider
from paged_selection.runtime import EventBus, Settings
from paged_selection.runtime import telemetry
from paged_selection.selection import SelectionSet
from paged_selection.store import PageStore

from .controller import PageView, TableUIHooks, TextualTableAdapter

COLUMNS = (
    ("title", "Title"),
    ("place_of_origin", "Place of Origin"),
    ("artist_display", "Artist"),
    ("inscriptions", "Inscriptions"),
    ("date_start", "Date Start"),
    ("date_end", "Date End"),
)
CHECKED = "[x]"
UNCHECKED = "[ ]"


@dataclass
class UIState:
    count_text: str = "Selected: 0"


class SelectionTableApp(App[None]):
    """Artworks table whose checkbox column survives page changes."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#toolbar {
		height: 3;
		padding: 0 1;
	}

	#selected-count {
		width: 1fr;
		content-align: left middle;
	}

	#select-count {
		width: 24;
	}

	#records {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("space", "toggle_row", "Toggle row"),
        ("a", "toggle_all", "Toggle page"),
        ("]", "next_page", "Next page"),
        ("[", "previous_page", "Prev page"),
        ("{", "first_page", "First"),
        ("}", "last_page", "Last"),
        ("s", "focus_count", "Select N"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or Settings.from_env()
        self._state = UIState()
        self.adapter: TextualTableAdapter | None = None
        self._table: DataTable | None = None
        self._count_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="toolbar"):
            self._count_widget = Static(self._state.count_text, id="selected-count")
            yield self._count_widget
            yield Input(placeholder="Select first N (this page)", id="select-count")
        self._table = DataTable(id="records", cursor_type="row", zebra_stripes=True)
        yield self._table
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        if self._table is None:
            return
        self._table.add_columns("", *(label for _field, label in COLUMNS))
        bus = EventBus()
        store = PageStore(ArticProvider(self.settings), bus=bus)
        hooks = TableUIHooks(
            update_rows=self._update_rows,
            update_count=self._update_count,
            set_loading=self._set_loading,
            show_error=self._show_error,
            log=self._log_line,
        )
        self.adapter = TextualTableAdapter(
            store,
            SelectionSet(bus=bus),
            hooks,
            page_size=self.settings.page_size,
            bus=bus,
        )
        self._table.focus()
        self.run_worker(self.adapter.first_page(), exclusive=False)

    def _update_rows(self, view: PageView) -> None:
        if self._table is None:
            return
        cursor = self._table.cursor_row
        self._table.clear()
        for record in view.records:
            mark = CHECKED if record.id in view.checked else UNCHECKED
            cells = [record.cell(field) for field, _label in COLUMNS]
            self._table.add_row(mark, *cells, key=str(record.id))
        if view.records:
            self._table.move_cursor(row=min(cursor, len(view.records) - 1))
        self._update_status(
            f"Page {view.page_index + 1}/{view.page_count}"
            f" | {view.total_count} records"
        )

    def _update_count(self, count: int) -> None:
        self._state.count_text = f"Selected: {count}"
        if self._count_widget:
            self._count_widget.update(self._state.count_text)

    def _set_loading(self, loading: bool) -> None:
        if self._table is not None:
            self._table.loading = loading

    def _show_error(self, message: str) -> None:
        self._update_status(message)
        self.notify(message, severity="error")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("paged_selection.ui").debug(line)

    def _cursor_record_id(self) -> Optional[int]:
        if self.adapter is None or self._table is None:
            return None
        records = self.adapter.page.records
        row = self._table.cursor_row
        if not 0 <= row < len(records):
            return None
        return records[row].id

    def action_toggle_row(self) -> None:
        record_id = self._cursor_record_id()
        if self.adapter is not None and record_id is not None:
            self.adapter.toggle_record(record_id)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if self.adapter is None or event.row_key.value is None:
            return
        self.adapter.toggle_record(int(event.row_key.value))

    def action_toggle_all(self) -> None:
        if self.adapter is not None:
            self.adapter.toggle_all()

    def action_next_page(self) -> None:
        if self.adapter is not None:
            self.run_worker(self.adapter.next_page(), exclusive=False)

    def action_previous_page(self) -> None:
        if self.adapter is not None:
            self.run_worker(self.adapter.previous_page(), exclusive=False)

    def action_first_page(self) -> None:
        if self.adapter is not None:
            self.run_worker(self.adapter.first_page(), exclusive=False)

    def action_last_page(self) -> None:
        if self.adapter is not None:
            self.run_worker(self.adapter.last_page(), exclusive=False)

    def action_focus_count(self) -> None:
        self.query_one("#select-count", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is None:
            return
        if self.adapter.submit_select_count(event.value) is not None:
            event.input.value = ""
            if self._table is not None:
                self._table.focus()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = Settings.from_env()
    parser = argparse.ArgumentParser(
        description="Browse Art Institute of Chicago artworks with cross-page selection."
    )
    parser.add_argument(
        "--api-url",
        default=defaults.api_base_url,
        help=f"API base URL (default: {defaults.api_base_url})",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=defaults.page_size,
        help=f"Records per page (default: {defaults.page_size})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.request_timeout,
        help=f"Request timeout in seconds (default: {defaults.request_timeout})",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="telelog preset; defaults to PAGED_SELECTION_* environment settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = Settings(
        api_base_url=args.api_url,
        page_size=args.page_size,
        request_timeout=args.timeout,
    )
    SelectionTableApp(settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
