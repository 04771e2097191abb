"""Record selection predicates for the two workflows."""

from __future__ import annotations

from core.config import RecordSchema
from core.models import Condition, Predicate


def _manual_subscription(schema: RecordSchema, needs_reminder: bool, renewed: bool) -> Predicate:
    return Predicate(
        conditions=(
            Condition(schema.status_property, "status", schema.manual_status),
            Condition(schema.reminder_property, "checkbox", needs_reminder),
            Condition(schema.renewed_property, "checkbox", renewed),
        )
    )


def reset_predicate(schema: RecordSchema) -> Predicate:
    """Manual subscriptions not flagged for reminder but still marked renewed."""

    return _manual_subscription(schema, needs_reminder=False, renewed=True)


def reminder_predicate(schema: RecordSchema) -> Predicate:
    """Manual subscriptions flagged for reminder and not yet renewed."""

    return _manual_subscription(schema, needs_reminder=True, renewed=False)
