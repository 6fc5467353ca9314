"""Meeting summary service: raw chat messages in, meeting records and ledgers out."""

from collections.abc import Iterable, Mapping
import re
import time
from typing import Any, Protocol

from pydantic import ValidationError
import structlog

from meeting_extractor.config import settings
from meeting_extractor.meetings.models import (
    ExtractionResult,
    ExtractionStats,
    MeetingRecord,
    MeetingSummaryView,
    NoteSection,
    RawMessage,
)
from meeting_extractor.meetings.services.aggregator import ActionItemAggregator, Ledger
from meeting_extractor.meetings.services.assembler import MeetingRecordAssembler

logger = structlog.get_logger(__name__)

# "(25 mins)" fragment of a scheduled time window
DURATION_PATTERN = re.compile(r"\((\d+\s*mins?)\)")


class MessageSourceError(Exception):
    """Raised by a message source when a channel cannot be read."""


class MessageSource(Protocol):
    """Chat history retrieval. Implemented outside this package."""

    def fetch_messages(self, channel: str, limit: int) -> list[dict[str, Any]]: ...


class MeetingService:
    """Turn batches of chat messages into meeting summaries."""

    def __init__(
        self,
        assembler: MeetingRecordAssembler | None = None,
        aggregator: ActionItemAggregator | None = None,
        bot_messages_only: bool | None = None,
    ):
        self.assembler = assembler or MeetingRecordAssembler()
        self.aggregator = aggregator or ActionItemAggregator()
        self.bot_messages_only = (
            settings.bot_messages_only if bot_messages_only is None else bot_messages_only
        )

    def extract_meetings(
        self, messages: Iterable[Mapping[str, Any] | RawMessage]
    ) -> ExtractionResult:
        """
        Assemble a record for every candidate message and keep the summaries.

        Candidates are messages with blocks (bot-authored ones only, unless
        configured otherwise). A record without a url is not a summary and is
        counted, not returned.
        """
        start_time = time.time()
        stats = ExtractionStats()
        meetings: list[MeetingRecord] = []

        for raw in messages:
            stats.messages_seen += 1
            try:
                message = raw if isinstance(raw, RawMessage) else RawMessage.model_validate(raw)
            except ValidationError as e:
                stats.invalid_messages += 1
                logger.warning(
                    "Skipping invalid message",
                    message_index=stats.messages_seen - 1,
                    errors=e.error_count(),
                )
                continue

            if not self._is_candidate(message):
                continue
            stats.candidates += 1

            record = self.assembler.assemble(message)
            if not record.is_meeting_summary:
                stats.not_summaries += 1
                logger.info(
                    "Message is not a meeting summary",
                    ts=message.ts,
                    not_summaries=stats.not_summaries,
                )
                continue
            meetings.append(record)

        stats.meetings = len(meetings)
        processing_time = time.time() - start_time
        logger.info(
            "Meeting extraction completed",
            processing_time_ms=int(processing_time * 1000),
            messages_seen=stats.messages_seen,
            candidates=stats.candidates,
            meetings=stats.meetings,
            not_summaries=stats.not_summaries,
            invalid_messages=stats.invalid_messages,
            total_action_items=total_action_items(meetings),
        )
        return ExtractionResult(meetings=meetings, stats=stats)

    def fetch_meetings(
        self,
        source: MessageSource,
        channel: str | None = None,
        limit: int | None = None,
    ) -> ExtractionResult:
        """Pull recent messages from a source and extract meetings.

        MessageSourceError from the source propagates unchanged.
        """
        channel = channel or settings.summary_channel
        limit = limit or settings.fetch_limit
        logger.info("Fetching meeting summaries", channel=channel, limit=limit)
        messages = source.fetch_messages(channel, limit)
        return self.extract_meetings(messages)

    def action_items_by_assignee(self, records: Iterable[MeetingRecord]) -> Ledger:
        return self.aggregator.aggregate(records)

    def _is_candidate(self, message: RawMessage) -> bool:
        if not message.blocks:
            return False
        if self.bot_messages_only and not message.bot_id:
            return False
        return True


## Dashboard helpers


def total_action_items(records: Iterable[MeetingRecord]) -> int:
    return sum(record.task_count for record in records)


def extract_duration(scheduled: str | None) -> str:
    """Pull "25 mins" out of "Fri, Aug 8th - 12:00 PM PDT (25 mins)"."""
    if not scheduled:
        return "N/A"
    match = DURATION_PATTERN.search(scheduled)
    return match.group(1) if match else "N/A"


def format_notes(notes: list[NoteSection]) -> str:
    parts = []
    for section in notes:
        heading = f"📌 {section.heading}:\n" if section.heading else ""
        items = "\n".join(f"  • {bullet}" for bullet in section.bullets)
        parts.append(heading + items)
    return "\n\n".join(parts)


def to_summary_view(record: MeetingRecord) -> MeetingSummaryView:
    if record.url:
        meeting_id = record.url.rstrip("/").rsplit("/", 1)[-1]
    else:
        meeting_id = str(int(record.received_at.timestamp() * 1000))

    return MeetingSummaryView(
        id=meeting_id,
        title=record.title or "Untitled Meeting",
        meeting_date_time=record.scheduled,
        duration=extract_duration(record.scheduled),
        participants=", ".join(record.participants),
        attendees=len(record.participants) or 1,
        gist=record.gist,
        overview="\n• ".join(record.overview),
        notes=format_notes(record.notes),
        action_items=record.action_items,
        source_url=record.url,
        received_at=record.received_at,
    )


def format_meeting(record: MeetingRecord) -> str:
    """Plain-text digest of one meeting."""
    output = [f"📅 **{record.title or 'Untitled Meeting'}**"]
    if record.scheduled:
        output.append(f"   Date: {record.scheduled}")
    if record.participants:
        output.append(f"   Participants: {len(record.participants)} people")

    if record.gist:
        output.append(f"\n📝 Summary: {record.gist}")

    if record.action_items:
        output.append("\n🎯 Action Items:")
        for group in record.action_items:
            output.append(f"   **{group.assignee}:**")
            output.extend(f"   • {task}" for task in group.tasks)

    if record.url:
        output.append(f"\n🔗 [View meeting]({record.url})")

    return "\n".join(output)
