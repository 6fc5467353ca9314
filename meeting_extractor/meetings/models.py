"""Meeting summary models - chat blocks in, meeting records and ledgers out."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

## Block model
# One dataclass per block kind the parser understands. Built once per message
# and discarded after parsing.


@dataclass(frozen=True)
class Section:
    """Free-form rich text, e.g. "*Gist:* Quarterly planning recap"."""

    text: str


@dataclass(frozen=True)
class Checkbox:
    """Checkbox group; each option label is one task."""

    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Button:
    """Single-task fallback rendering of a checkbox."""

    label: str


ActionElement = Checkbox | Button


@dataclass(frozen=True)
class Actions:
    """Interactive elements carrying one assignee's tasks."""

    items: tuple[ActionElement, ...] = ()


@dataclass(frozen=True)
class Divider:
    """Visual separator, closes the action items region."""


@dataclass(frozen=True)
class Other:
    """Any block the parser ignores. Kept so block indices stay meaningful."""

    kind: str | None = None  # e.g. "header", "context"


Block = Section | Actions | Divider | Other


## Input message


class RawMessage(BaseModel):
    """Already-fetched chat message as handed over by the message source."""

    model_config = ConfigDict(extra="allow")

    blocks: list[Any] = Field(default_factory=list)
    text: str = ""
    ts: float
    bot_id: str | None = None

    @field_validator("blocks", mode="before")
    @classmethod
    def coerce_blocks(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("ts")
    @classmethod
    def validate_ts(cls, value: float) -> float:
        # NaN, inf and values past the platform's time_t range
        try:
            datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Timestamp out of range: {value}") from e
        return value

    @property
    def received_at(self) -> datetime:
        return datetime.fromtimestamp(self.ts, tz=UTC)


## Output records


class NoteSection(BaseModel):
    """Heading + bullets subdivision of the meeting notes."""

    model_config = ConfigDict(frozen=True)

    heading: str
    bullets: list[str] = Field(default_factory=list)


class ActionGroup(BaseModel):
    """One assignee's tasks from one meeting."""

    model_config = ConfigDict(frozen=True)

    assignee: str
    tasks: list[str] = Field(default_factory=list)


class MeetingRecord(BaseModel):
    """Normalized meeting summary extracted from one chat message.

    A record without a url is not a meeting summary; callers filter on it.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    url: str | None = None
    scheduled: str | None = None  # free text, e.g. "Fri, Aug 8th - 12:00 PM PDT (25 mins)"
    participants: list[str] = Field(default_factory=list)
    gist: str | None = None
    overview: list[str] = Field(default_factory=list)
    notes: list[NoteSection] = Field(default_factory=list)
    action_items: list[ActionGroup] = Field(default_factory=list)
    received_at: datetime

    @property
    def is_meeting_summary(self) -> bool:
        return self.url is not None

    @property
    def task_count(self) -> int:
        return sum(len(group.tasks) for group in self.action_items)


## Aggregation output


class LedgerTask(BaseModel):
    """Single task with the meeting it came from."""

    task: str
    meeting_title: str = Field(serialization_alias="meeting")
    meeting_date: str | None = Field(None, serialization_alias="date")


class AssigneeLedgerEntry(BaseModel):
    """Cross-meeting task list for one assignee."""

    name: str
    tasks: list[LedgerTask] = Field(default_factory=list)
    meetings: list[str] = Field(default_factory=list)  # first appearance order

    def add_task(self, task: LedgerTask) -> None:
        self.tasks.append(task)
        if task.meeting_title not in self.meetings:
            self.meetings.append(task.meeting_title)


## Service results


class ExtractionStats(BaseModel):
    """Counters for one extraction run."""

    messages_seen: int = 0
    invalid_messages: int = 0
    candidates: int = 0
    not_summaries: int = 0
    meetings: int = 0


class ExtractionResult(BaseModel):
    """Meeting summaries found in a batch of messages."""

    meetings: list[MeetingRecord] = Field(default_factory=list)
    stats: ExtractionStats = Field(default_factory=ExtractionStats)


class MeetingSummaryView(BaseModel):
    """Dashboard-facing shape of a meeting record."""

    id: str
    title: str
    meeting_date_time: str | None = None
    duration: str = "N/A"
    participants: str = ""
    attendees: int = 1
    gist: str | None = None
    overview: str = ""
    notes: str = ""
    action_items: list[ActionGroup] = Field(default_factory=list)
    source_url: str | None = None
    received_at: datetime
