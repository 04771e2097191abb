"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.

Record properties keep the typed shape used by the record store, for example
``{"type": "checkbox", "checkbox": True}`` or
``{"type": "title", "title": [{"plain_text": "Netflix"}]}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Record:
    """Snapshot of one row in the subscription table."""

    id: str
    # None marks a partial projection returned without property data.
    properties: Optional[Mapping[str, Mapping[str, Any]]]

    @property
    def is_partial(self) -> bool:
        return self.properties is None

    def get_property(self, name: str) -> Optional[Mapping[str, Any]]:
        if self.properties is None:
            return None
        return self.properties.get(name)


@dataclass(frozen=True)
class Condition:
    """One equality constraint over a named property."""

    property: str
    kind: str
    value: Any


@dataclass(frozen=True)
class Predicate:
    """Conjunction of equality constraints used to select records."""

    conditions: Tuple[Condition, ...]


@dataclass(frozen=True)
class ConsolidatedMessage:
    """Single aggregated reminder body for one notification cycle."""

    header: str
    lines: Tuple[str, ...]

    @property
    def body(self) -> str:
        return f"{self.header}\n" + "\n".join(self.lines)


class Outcome(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class UnitResult:
    """Outcome of one unit of work (a record update or a channel send)."""

    key: str
    outcome: Outcome
    reason: str = ""


@dataclass
class RunSummary:
    """Aggregated results of one workflow run, returned instead of raising."""

    operation: str
    results: list[UnitResult] = field(default_factory=list)
    matched: int = 0
    message: Optional[ConsolidatedMessage] = None
    aborted: Optional[str] = None

    def counts(self) -> dict[str, int]:
        totals = {outcome.value: 0 for outcome in Outcome}
        for result in self.results:
            totals[result.outcome.value] += 1
        return totals

    def describe(self) -> str:
        if self.aborted:
            return f"{self.operation}: aborted ({self.aborted})"
        counts = self.counts()
        return (
            f"{self.operation}: matched={self.matched}, success={counts['success']}, "
            f"skipped={counts['skipped']}, failed={counts['failed']}"
        )
