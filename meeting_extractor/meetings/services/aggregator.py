"""Cross-meeting aggregation of action items into a per-assignee ledger."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import structlog

from meeting_extractor.config import settings
from meeting_extractor.meetings.models import (
    AssigneeLedgerEntry,
    LedgerTask,
    MeetingRecord,
)

logger = structlog.get_logger(__name__)

Ledger = dict[str, AssigneeLedgerEntry]


class ActionItemAggregator:
    """Folds meeting records into an assignee-keyed task ledger."""

    def __init__(self, untitled_title: str | None = None) -> None:
        self.untitled_title = untitled_title or settings.untitled_meeting_title

    def aggregate(self, records: Iterable[MeetingRecord]) -> Ledger:
        """
        Build the ledger from records in the order given.

        Assignee names match exactly. Every task is kept; a meeting title is
        listed once per assignee, in order of first appearance.
        """
        ledger: Ledger = {}
        record_count = 0

        for record in records:
            record_count += 1
            meeting_title = record.title or self.untitled_title
            for group in record.action_items:
                entry = ledger.get(group.assignee)
                if entry is None:
                    entry = ledger[group.assignee] = AssigneeLedgerEntry(name=group.assignee)
                for task in group.tasks:
                    entry.add_task(
                        LedgerTask(
                            task=task,
                            meeting_title=meeting_title,
                            meeting_date=record.scheduled,
                        )
                    )

        logger.info(
            "Action item ledger built",
            records=record_count,
            assignees=len(ledger),
            total_tasks=total_tasks(ledger),
        )
        return ledger


def merge_ledgers(ledgers: Sequence[Ledger]) -> Ledger:
    """Merge per-shard ledgers in shard order. Inputs are left untouched."""
    merged: Ledger = {}
    for shard in ledgers:
        for name, entry in shard.items():
            target = merged.get(name)
            if target is None:
                merged[name] = entry.model_copy(deep=True)
                continue
            target.tasks.extend(task.model_copy() for task in entry.tasks)
            for meeting in entry.meetings:
                if meeting not in target.meetings:
                    target.meetings.append(meeting)
    return merged


def total_tasks(ledger: Ledger) -> int:
    return sum(len(entry.tasks) for entry in ledger.values())


def ledger_to_json(ledger: Ledger) -> dict[str, Any]:
    """Wire shape: {name: {name, tasks: [{task, meeting, date}], meetings}}."""
    return {
        name: entry.model_dump(mode="json", by_alias=True)
        for name, entry in ledger.items()
    }
