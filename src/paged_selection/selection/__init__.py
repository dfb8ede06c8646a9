"""Cross-page selection model."""

from .selection_set import SelectionDelta, SelectionSet, parse_selection_count

__all__ = ["SelectionDelta", "SelectionSet", "parse_selection_count"]
