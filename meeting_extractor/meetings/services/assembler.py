"""Meeting record assembly from one chat message."""

import re
import time

import structlog

from meeting_extractor.config import settings
from meeting_extractor.meetings.models import (
    Block,
    MeetingRecord,
    NoteSection,
    RawMessage,
    Section,
)
from meeting_extractor.meetings.services.action_scanner import scan_action_items
from meeting_extractor.meetings.services.block_parser import parse_blocks
from meeting_extractor.meetings.services.field_extractors import (
    GistField,
    NotesField,
    OverviewField,
    ParticipantsField,
    ScheduledField,
    TitleField,
    extract_fields,
)

logger = structlog.get_logger(__name__)


class MeetingRecordAssembler:
    """Build one MeetingRecord from one chat message."""

    def __init__(self, view_url_pattern: str | None = None):
        self.view_url_pattern = view_url_pattern or settings.view_url_pattern
        self._url_regex = re.compile(self.view_url_pattern)

    def assemble(self, message: RawMessage) -> MeetingRecord:
        """
        Combine field extraction and the action item scan into a record.

        Algorithm:
        1. Parse block JSON into Block values
        2. Run every field extractor over each section block
        3. Scan the full block list for action items
        4. If no block carried the meeting link, look for it in the plain text

        The record is returned even when no url was found; filtering out
        non-summaries is left to the caller.
        """
        start_time = time.time()
        blocks = parse_blocks(message.blocks)

        fields = self._extract_fields(blocks)
        action_items = scan_action_items(blocks)

        if fields.get("url") is None:
            fallback_url = self.find_fallback_url(message.text)
            if fallback_url:
                logger.debug("Recovered meeting url from message text", url=fallback_url)
                fields["url"] = fallback_url
                fields["title"] = None

        record = MeetingRecord(
            **fields,
            action_items=action_items,
            received_at=message.received_at,
        )

        processing_time = time.time() - start_time
        logger.debug(
            "Meeting record assembled",
            processing_time_ms=int(processing_time * 1000),
            total_blocks=len(blocks),
            has_url=record.url is not None,
            action_groups=len(record.action_items),
            tasks=record.task_count,
        )
        return record

    def find_fallback_url(self, text: str) -> str | None:
        match = self._url_regex.search(text or "")
        return match.group(0) if match else None

    def _extract_fields(self, blocks: list[Block]) -> dict:
        # Later blocks overwrite single-valued fields; notes accumulate
        fields: dict = {}
        notes: list[NoteSection] = []

        for block in blocks:
            if not isinstance(block, Section):
                continue
            for match in extract_fields(block.text, self.view_url_pattern):
                if isinstance(match, TitleField):
                    fields["url"] = match.url
                    fields["title"] = match.title
                elif isinstance(match, ScheduledField):
                    fields["scheduled"] = match.value
                elif isinstance(match, ParticipantsField):
                    fields["participants"] = list(match.emails)
                elif isinstance(match, GistField):
                    fields["gist"] = match.value
                elif isinstance(match, OverviewField):
                    fields["overview"] = list(match.bullets)
                elif isinstance(match, NotesField):
                    notes.extend(match.sections)

        fields["notes"] = notes
        return fields


def assemble_meeting_record(message: RawMessage) -> MeetingRecord:
    """Assemble with default settings."""
    return MeetingRecordAssembler().assemble(message)
