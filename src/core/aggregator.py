"""Reminder aggregation workflow.

Collects every manual subscription that needs attention into one message and
hands it to the dispatcher, so the user gets a single reminder per cycle.
"""

from __future__ import annotations

import logging

from core.config import ChannelConfig, RecordSchema
from core.filters import reminder_predicate
from core.message import DEFAULT_NOTIFICATION_TITLE, build_consolidated_message, extract_title
from core.models import RunSummary
from core.ports import DispatcherPort, MalformedResponseError, RecordStorePort

LOGGER = logging.getLogger(__name__)


class ReminderAggregator:
    """Builds the consolidated renewal reminder and fans it out."""

    operation = "remind_subscription_renewal"

    def __init__(
        self,
        store: RecordStorePort,
        database_id: str,
        dispatcher: DispatcherPort,
        schema: RecordSchema,
        title: str = DEFAULT_NOTIFICATION_TITLE,
    ) -> None:
        self._store = store
        self._database_id = database_id
        self._dispatcher = dispatcher
        self._schema = schema
        self._title = title

    async def run(self, channels: ChannelConfig) -> RunSummary:
        """Query, aggregate and dispatch one reminder. Never raises."""

        summary = RunSummary(operation=self.operation)
        try:
            records = await self._store.query(self._database_id, reminder_predicate(self._schema))
        except MalformedResponseError as exc:
            LOGGER.error("[%s] Malformed query response: %s", self.operation, exc)
            summary.aborted = f"malformed response: {exc}"
            return summary
        except Exception as exc:
            LOGGER.exception("[%s] Error querying database", self.operation)
            summary.aborted = f"query failed: {exc}"
            return summary

        summary.matched = len(records)
        LOGGER.info("Records needing renewal reminder: %s", len(records))
        if not records:
            return summary

        titles = []
        for record in records:
            if record.is_partial:
                LOGGER.warning("Record %s is partial, using placeholder title", record.id)
            titles.append(extract_title(record, self._schema.title_property))

        message = build_consolidated_message(titles)
        summary.message = message
        if not message.lines:
            return summary

        summary.results.extend(await self._dispatcher.dispatch(self._title, message.body, channels))
        LOGGER.info("Reminder dispatched: %s", summary.describe())
        return summary
