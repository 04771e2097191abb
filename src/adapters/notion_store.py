"""Notion record store adapter.

Implements the core RecordStorePort on top of the official async Notion SDK.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from core.models import Predicate, Record
from core.ports import MalformedResponseError, RecordStoreError

LOGGER = logging.getLogger(__name__)

_STORE_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


def build_filter(predicate: Predicate) -> dict[str, Any]:
    """Translate a core predicate into Notion's compound filter syntax."""

    return {
        "and": [
            {"property": condition.property, condition.kind: {"equals": condition.value}}
            for condition in predicate.conditions
        ]
    }


def to_record(page: Mapping[str, Any]) -> Record:
    # Partial page objects carry only an id.
    properties = page.get("properties")
    return Record(id=str(page["id"]), properties=properties if isinstance(properties, dict) else None)


class NotionRecordStore:
    """Thin Notion wrapper that satisfies the RecordStorePort contract."""

    def __init__(self, client: AsyncClient) -> None:
        # notion-client 2.5 moved database queries to data_sources.query.
        for endpoint, method in (("databases", "query"), ("pages", "update")):
            if not callable(getattr(getattr(client, endpoint, None), method, None)):
                raise RuntimeError(
                    f"Notion client has no {endpoint}.{method}(); install notion-client<2.5"
                )
        self._client = client

    async def query(self, database_id: str, predicate: Predicate) -> list[Record]:
        """Return every page matching the predicate, following pagination."""

        query_filter = build_filter(predicate)
        records: list[Record] = []
        cursor = None
        while True:
            kwargs: dict[str, Any] = {"database_id": database_id, "filter": query_filter}
            if cursor:
                kwargs["start_cursor"] = cursor
            try:
                response = await self._client.databases.query(**kwargs)
            except _STORE_ERRORS as exc:
                raise RecordStoreError(f"query of database {database_id} failed: {exc}") from exc

            results = response.get("results") if isinstance(response, dict) else None
            if not isinstance(results, list):
                raise MalformedResponseError(f"query of database {database_id} returned no results list")
            records.extend(to_record(page) for page in results)

            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break
            LOGGER.debug("Fetching next page of %s (cursor=%s)", database_id, cursor)
        return records

    async def update(self, record_id: str, changes: Mapping[str, Mapping[str, Any]]) -> None:
        try:
            await self._client.pages.update(page_id=record_id, properties=dict(changes))
        except _STORE_ERRORS as exc:
            raise RecordStoreError(f"update of page {record_id} failed: {exc}") from exc
