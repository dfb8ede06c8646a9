"""Textual bindings for the paginated selection table."""

from .controller import INVALID_COUNT_MESSAGE, PageView, TableUIHooks, TextualTableAdapter

__all__ = ["INVALID_COUNT_MESSAGE", "PageView", "TableUIHooks", "TextualTableAdapter"]
