"""Meeting summary services."""

from meeting_extractor.meetings.services.aggregator import (
    ActionItemAggregator,
    ledger_to_json,
    merge_ledgers,
)
from meeting_extractor.meetings.services.assembler import MeetingRecordAssembler
from meeting_extractor.meetings.services.meeting_service import (
    MeetingService,
    MessageSource,
    MessageSourceError,
)

__all__ = [
    "ActionItemAggregator",
    "MeetingRecordAssembler",
    "MeetingService",
    "MessageSource",
    "MessageSourceError",
    "ledger_to_json",
    "merge_ledgers",
]
