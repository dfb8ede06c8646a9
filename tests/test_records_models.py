from __future__ import annotations

import pytest

from paged_selection.records import Page, Record, display_value


def test_record_identity_ignores_attributes() -> None:
    first = Record(id=7, attributes={"title": "Nighthawks"})
    second = Record(id=7, attributes={"title": "renamed"})

    assert first == second
    assert hash(first) == hash(second)


def test_record_attributes_are_read_only() -> None:
    record = Record(id=1, attributes={"title": "A"})

    with pytest.raises(TypeError):
        record.attributes["title"] = "B"  # type: ignore[index]


@pytest.mark.parametrize("bad_id", ["1", 1.0, True, None])
def test_record_requires_integer_id(bad_id: object) -> None:
    with pytest.raises(TypeError):
        Record(id=bad_id)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, "-"), ("", "-"), ("   ", "-"), ("  Paris ", "Paris"), (1890, "1890"), (0, "0")],
)
def test_display_value(value: object, expected: str) -> None:
    assert display_value(value) == expected


def test_page_ids_keep_order() -> None:
    page = Page.from_records(2, [Record(id=9), Record(id=4), Record(id=6)], 40)

    assert page.ids == (9, 4, 6)
    assert page.id_set == {4, 6, 9}
    assert len(page) == 3
    assert page[1].id == 4


def test_page_rejects_duplicate_ids() -> None:
    with pytest.raises(ValueError):
        Page.from_records(0, [Record(id=1), Record(id=1)], 2)


def test_page_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        Page(index=-1)
    with pytest.raises(ValueError):
        Page(index=0, total_count=-5)


@pytest.mark.parametrize(
    ("total", "expected"), [(0, 1), (1, 1), (12, 1), (13, 2), (120, 10), (121, 11)]
)
def test_page_count(total: int, expected: int) -> None:
    assert Page(index=0, total_count=total).page_count(12) == expected
