from __future__ import annotations

import asyncio

import httpx
import pytest
from notion_client import AsyncClient

from adapters.notion_store import NotionRecordStore, build_filter
from core.config import RecordSchema
from core.filters import reset_predicate
from core.ports import MalformedResponseError, RecordStoreError


class FakeDatabases:
    def __init__(self, responses) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []

    async def query(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakePages:
    def __init__(self, error=None) -> None:
        self.error = error
        self.calls: list[dict] = []

    async def update(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"object": "page", "id": kwargs["page_id"]}


class DataSourceOnlyDatabases:
    async def retrieve(self, **kwargs):
        return {"object": "database", "data_sources": []}


class FakeNotionClient:
    def __init__(self, responses=(), update_error=None) -> None:
        self.databases = FakeDatabases(responses)
        self.pages = FakePages(update_error)


def test_build_filter_uses_compound_and() -> None:
    query_filter = build_filter(reset_predicate(RecordSchema()))
    assert query_filter == {
        "and": [
            {"property": "subscriptionStatus", "status": {"equals": "manually subscribing"}},
            {"property": "needsReminder", "checkbox": {"equals": False}},
            {"property": "alreadyRenewed", "checkbox": {"equals": True}},
        ]
    }


def test_query_follows_pagination_and_maps_partial_pages() -> None:
    client = FakeNotionClient(
        [
            {"results": [{"id": "a", "properties": {}}], "has_more": True, "next_cursor": "c1"},
            {"results": [{"id": "b"}], "has_more": False, "next_cursor": None},
        ]
    )
    store = NotionRecordStore(client)
    records = asyncio.run(store.query("db", reset_predicate(RecordSchema())))

    assert [record.id for record in records] == ["a", "b"]
    assert records[0].properties == {}
    assert records[1].is_partial
    assert "start_cursor" not in client.databases.calls[0]
    assert client.databases.calls[1]["start_cursor"] == "c1"


def test_query_without_results_is_malformed() -> None:
    store = NotionRecordStore(FakeNotionClient([{"object": "error"}]))
    with pytest.raises(MalformedResponseError):
        asyncio.run(store.query("db", reset_predicate(RecordSchema())))


def test_transport_error_becomes_store_error() -> None:
    store = NotionRecordStore(FakeNotionClient([httpx.ConnectError("down")]))
    with pytest.raises(RecordStoreError):
        asyncio.run(store.query("db", reset_predicate(RecordSchema())))


def test_update_sends_properties() -> None:
    client = FakeNotionClient()
    store = NotionRecordStore(client)
    asyncio.run(store.update("p1", {"alreadyRenewed": {"checkbox": False}}))

    assert client.pages.calls == [{"page_id": "p1", "properties": {"alreadyRenewed": {"checkbox": False}}}]


def test_update_transport_error_becomes_store_error() -> None:
    store = NotionRecordStore(FakeNotionClient(update_error=httpx.ReadTimeout("slow")))
    with pytest.raises(RecordStoreError):
        asyncio.run(store.update("p1", {"alreadyRenewed": {"checkbox": False}}))


def test_installed_sdk_provides_the_endpoints_we_call() -> None:
    client = AsyncClient(auth="secret_x")
    try:
        assert callable(getattr(client.databases, "query", None))
        assert callable(getattr(client.pages, "update", None))
        NotionRecordStore(client)
    finally:
        asyncio.run(client.aclose())


def test_client_without_database_query_is_rejected_up_front() -> None:
    client = FakeNotionClient()
    client.databases = DataSourceOnlyDatabases()
    with pytest.raises(RuntimeError, match="databases.query"):
        NotionRecordStore(client)
