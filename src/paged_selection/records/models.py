"""Immutable record and page types handed out by the page store."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence


def _freeze(attributes: Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(attributes, MappingProxyType):
        return attributes
    return MappingProxyType(dict(attributes))


def display_value(value: Any) -> str:
    """Render an attribute for a table cell; absent or blank values become ``-``."""

    text = "" if value is None else str(value).strip()
    return text or "-"


@dataclass(frozen=True, slots=True)
class Record:
    """One remote item. Identity is ``id`` alone; attributes are display-only."""

    id: int
    attributes: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError(f"Record id must be an int, got {self.id!r}")
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        return self.attributes.get(name, default)

    def cell(self, name: str) -> str:
        return display_value(self.attributes.get(name))


@dataclass(frozen=True, slots=True)
class Page:
    """The records loaded for one page index plus the remote total."""

    index: int
    records: tuple[Record, ...] = ()
    total_count: int = 0

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("page index cannot be negative")
        if self.total_count < 0:
            raise ValueError("total_count cannot be negative")
        records = tuple(self.records)
        ids = [record.id for record in records]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Page {self.index} contains duplicate record ids")
        object.__setattr__(self, "records", records)

    @classmethod
    def empty(cls, index: int = 0) -> "Page":
        return cls(index=index)

    @classmethod
    def from_records(
        cls, index: int, records: Iterable[Record], total_count: int
    ) -> "Page":
        return cls(index=index, records=tuple(records), total_count=total_count)

    @property
    def ids(self) -> tuple[int, ...]:
        """Record ids in display order."""

        return tuple(record.id for record in self.records)

    @property
    def id_set(self) -> frozenset[int]:
        return frozenset(record.id for record in self.records)

    def page_count(self, page_size: int) -> int:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.total_count == 0:
            return 1
        return (self.total_count - 1) // page_size + 1

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, position: int) -> Record:
        return self.records[position]


@dataclass(frozen=True, slots=True)
class FetchResult:
    """What a provider returns for one page: its records and the remote total."""

    records: Sequence[Record]
    total_count: int


__all__ = ["FetchResult", "Page", "Record", "display_value"]
