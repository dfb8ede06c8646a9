from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest

from paged_selection.errors import FetchFailure
from paged_selection.records.artic import ArticProvider, parse_artworks
from paged_selection.runtime import Settings


def make_payload(ids: List[int], *, total: int = 125) -> Dict[str, Any]:
    return {
        "pagination": {"total": total, "limit": 12, "current_page": 1},
        "data": [
            {
                "id": artwork_id,
                "title": f"Artwork {artwork_id}",
                "place_of_origin": None,
                "artist_display": "Unknown",
            }
            for artwork_id in ids
        ],
    }


def make_provider(handler) -> ArticProvider:
    settings = Settings(api_base_url="https://api.example.test/api/v1/", page_size=12)
    return ArticProvider(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_page_maps_records_and_total() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=make_payload([10, 11, 12]))

    result = await make_provider(handler).fetch_page(0)

    assert [record.id for record in result.records] == [10, 11, 12]
    assert result.total_count == 125
    assert result.records[0].get("title") == "Artwork 10"
    assert result.records[0].cell("place_of_origin") == "-"
    request = seen[0]
    assert request.url.path == "/api/v1/artworks"
    assert request.url.params["page"] == "1"
    assert request.url.params["limit"] == "12"
    assert "artist_display" in request.url.params["fields"]


@pytest.mark.asyncio
async def test_page_index_is_converted_to_one_based() -> None:
    pages: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        pages.append(request.url.params["page"])
        return httpx.Response(200, json=make_payload([]))

    await make_provider(handler).fetch_page(4)

    assert pages == ["5"]


@pytest.mark.asyncio
async def test_http_error_raises_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "down"})

    with pytest.raises(FetchFailure) as excinfo:
        await make_provider(handler).fetch_page(2)

    assert excinfo.value.page_index == 2
    assert excinfo.value.reason == "HTTP 500"


@pytest.mark.asyncio
async def test_any_2xx_status_is_accepted() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(203, json=make_payload([21, 22]))

    result = await make_provider(handler).fetch_page(1)

    assert [record.id for record in result.records] == [21, 22]


@pytest.mark.asyncio
async def test_redirect_status_raises_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(304)

    with pytest.raises(FetchFailure) as excinfo:
        await make_provider(handler).fetch_page(0)

    assert excinfo.value.reason == "HTTP 304"


@pytest.mark.asyncio
async def test_transport_error_raises_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchFailure) as excinfo:
        await make_provider(handler).fetch_page(0)

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_non_json_body_raises_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(FetchFailure):
        await make_provider(handler).fetch_page(0)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"data": []},
        {"data": [], "pagination": {"total": -1}},
        {"data": [{"title": "no id"}], "pagination": {"total": 1}},
        {"data": [{"id": "7"}], "pagination": {"total": 1}},
        {"data": ["oops"], "pagination": {"total": 1}},
    ],
)
def test_parse_artworks_rejects_malformed_payloads(payload: Any) -> None:
    with pytest.raises(FetchFailure):
        parse_artworks(0, payload)


def test_parse_artworks_keeps_attributes_without_id() -> None:
    result = parse_artworks(0, make_payload([3]))

    record = result.records[0]
    assert record.id == 3
    assert "id" not in record.attributes
