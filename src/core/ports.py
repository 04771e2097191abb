"""Ports (interfaces) used by the core workflows.

Ports define the minimal contracts for the record store and notification
adapters so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.config import ChannelConfig
from core.models import Predicate, Record, UnitResult


class RecordStoreError(RuntimeError):
    """Raised when the record store cannot be reached or rejects a call."""


class MalformedResponseError(RecordStoreError):
    """Raised when the record store answers without a usable result list."""


class RecordStorePort(Protocol):
    """Record store operations required by the core workflows."""

    async def query(self, database_id: str, predicate: Predicate) -> list[Record]:
        ...

    async def update(self, record_id: str, changes: Mapping[str, Mapping[str, Any]]) -> None:
        ...


class DispatcherPort(Protocol):
    """Notification fan-out required by the reminder workflow."""

    async def dispatch(self, title: str, body: str, config: ChannelConfig) -> list[UnitResult]:
        ...
