"""Renewal-flag reset workflow.

Once a subscription no longer needs a reminder, its "already renewed" flag is
cleared so the next billing cycle starts from a clean state. Every record is
updated independently; one failed update never blocks the others.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import RecordSchema
from core.filters import reset_predicate
from core.models import Outcome, Record, RunSummary, UnitResult
from core.ports import MalformedResponseError, RecordStorePort

LOGGER = logging.getLogger(__name__)


class RenewalFlagResetter:
    """Clears the renewed flag on manual subscriptions that left the reminder cycle."""

    operation = "reset_renewal_status"

    def __init__(self, store: RecordStorePort, database_id: str, schema: RecordSchema) -> None:
        self._store = store
        self._database_id = database_id
        self._schema = schema

    async def run(self) -> RunSummary:
        """Query matching records and reset them concurrently. Never raises."""

        summary = RunSummary(operation=self.operation)
        try:
            records = await self._store.query(self._database_id, reset_predicate(self._schema))
        except MalformedResponseError as exc:
            LOGGER.error("[%s] Malformed query response: %s", self.operation, exc)
            summary.aborted = f"malformed response: {exc}"
            return summary
        except Exception as exc:
            LOGGER.exception("[%s] Error querying database", self.operation)
            summary.aborted = f"query failed: {exc}"
            return summary

        summary.matched = len(records)
        LOGGER.info("Records needing renewal reset: %s", len(records))
        if not records:
            return summary

        pending = []
        for record in records:
            skip_reason = self._skip_reason(record)
            if skip_reason:
                LOGGER.warning("Record %s skipped: %s", record.id, skip_reason)
                summary.results.append(UnitResult(record.id, Outcome.SKIPPED, skip_reason))
                continue
            pending.append(self._reset(record))

        # Updates fire together; each coroutine captures its own failure.
        summary.results.extend(await asyncio.gather(*pending))
        LOGGER.info("All record updates processed: %s", summary.describe())
        return summary

    def _skip_reason(self, record: Record) -> str:
        if record.is_partial:
            return "partial record without properties"
        prop = record.get_property(self._schema.renewed_property)
        if prop is None:
            return f"property {self._schema.renewed_property!r} does not exist"
        if prop.get("type") != "checkbox":
            return f"property {self._schema.renewed_property!r} is not a checkbox"
        return ""

    async def _reset(self, record: Record) -> UnitResult:
        changes = {self._schema.renewed_property: {"checkbox": False}}
        try:
            await self._store.update(record.id, changes)
        except Exception as exc:
            LOGGER.error("Failed to update record %s: %s", record.id, exc)
            return UnitResult(record.id, Outcome.FAILED, str(exc))
        LOGGER.info("Successfully updated record %s", record.id)
        return UnitResult(record.id, Outcome.SUCCESS)
