"""Record provider backed by the Art Institute of Chicago public API."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from paged_selection.errors import FetchFailure
from paged_selection.runtime import Settings
from paged_selection.runtime import telemetry

from .models import FetchResult, Record

LOGGER_NAME = "paged_selection.records"


class ArticProvider:
    """Fetches ``/artworks`` pages; the API counts pages from 1."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.settings.api_base_url}/artworks"

    def _params(self, page_index: int) -> dict[str, Any]:
        return {
            "page": page_index + 1,
            "limit": self.settings.page_size,
            "fields": ",".join(self.settings.fields),
        }

    async def fetch_page(self, page_index: int) -> FetchResult:
        params = self._params(page_index)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.get(self.url, params=params)
        except httpx.HTTPError as exc:
            telemetry.record_event(
                "provider.transport_error",
                level="warning",
                data={"page": page_index, "error": repr(exc)},
                logger_name=LOGGER_NAME,
            )
            raise FetchFailure(page_index, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            telemetry.record_event(
                "provider.http_error",
                level="warning",
                data={"page": page_index, "status": response.status_code},
                logger_name=LOGGER_NAME,
            )
            raise FetchFailure(page_index, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchFailure(page_index, "response is not JSON") from exc
        return parse_artworks(page_index, payload)


def parse_artworks(page_index: int, payload: Any) -> FetchResult:
    """Map an ``/artworks`` response body onto a ``FetchResult``."""

    if not isinstance(payload, Mapping):
        raise FetchFailure(page_index, "payload is not an object")
    data = payload.get("data")
    pagination = payload.get("pagination")
    if not isinstance(data, list) or not isinstance(pagination, Mapping):
        raise FetchFailure(page_index, "payload lacks data or pagination")

    total = pagination.get("total")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise FetchFailure(page_index, f"invalid total {total!r}")

    records = []
    for item in data:
        if not isinstance(item, Mapping):
            raise FetchFailure(page_index, "record is not an object")
        record_id = item.get("id")
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise FetchFailure(page_index, f"invalid record id {record_id!r}")
        attributes = {key: value for key, value in item.items() if key != "id"}
        records.append(Record(id=record_id, attributes=attributes))
    return FetchResult(records=tuple(records), total_count=total)


__all__ = ["ArticProvider", "parse_artworks"]
