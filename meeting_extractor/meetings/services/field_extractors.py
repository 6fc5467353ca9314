"""Per-field extractors for meeting summary section blocks.

Each extractor is a pure function of one block's text and returns ``None``
when the block does not carry its field. Extractors never raise and do not
depend on each other, so a block may feed several fields at once.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import re

from meeting_extractor.config import settings
from meeting_extractor.meetings.models import NoteSection

## Accepted label spellings, checked in order
TITLE_LABELS = ("*Title:*", "*Title:")
DATE_LABELS = ("*Date and Time:*", "Date and Time:")
PARTICIPANT_LABELS = ("*Participants:*", "Participants:")
GIST_LABELS = ("*Gist:*", "*Gist*:")
OVERVIEW_LABELS = ("*Overview:*", "*Overview*:")
NOTES_LABELS = ("*Notes:*", "*Notes*:")
ACTION_ITEMS_LABELS = ("*Action Items:*", "*Action Items*:")

# "•" and its UTF-8-read-as-cp1252 artifact "â€¢"; "-" for plain lists
BULLET_SPLIT = re.compile(r"\n[ \t]*(?:•|â€¢|-)")
EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
LINK_LABEL_PATTERN = re.compile(r"\|([^>]+)>")
VALUE_UNTIL_BOLD = re.compile(r"[^*\n]+")
VALUE_UNTIL_BOLD_MULTILINE = re.compile(r"[^*]+")
# Line starting with an emoji short-code, e.g. ":calendar: *Planning*"
NOTES_SECTION_SPLIT = re.compile(r"\n(?=[ \t]*:[\w+-]+:)")
NOTES_SECTION_PATTERN = re.compile(r"^\s*:[\w+-]+:\s*\*([^*]+)\*(.*)$", re.DOTALL)


## Field results


@dataclass(frozen=True)
class TitleField:
    url: str
    title: str | None = None


@dataclass(frozen=True)
class ScheduledField:
    value: str


@dataclass(frozen=True)
class ParticipantsField:
    emails: tuple[str, ...]


@dataclass(frozen=True)
class GistField:
    value: str


@dataclass(frozen=True)
class OverviewField:
    bullets: tuple[str, ...]


@dataclass(frozen=True)
class NotesField:
    sections: tuple[NoteSection, ...]


FieldMatch = (
    TitleField | ScheduledField | ParticipantsField | GistField | OverviewField | NotesField
)


## Helpers


def find_label(text: str, labels: Sequence[str]) -> int | None:
    """Return the index just past the earliest accepted label spelling, if any."""
    best: tuple[int, int] | None = None
    for label in labels:
        pos = text.find(label)
        if pos == -1:
            continue
        # Earliest occurrence wins, longer spelling on a tie
        candidate = (pos, -len(label))
        if best is None or candidate < best:
            best = candidate
    if best is None:
        return None
    return best[0] - best[1]


def has_label(text: str, labels: Sequence[str]) -> bool:
    return find_label(text, labels) is not None


def decode_entities(text: str) -> str:
    """Decode the three entities chat platforms escape in message text."""
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def split_bullets(text: str) -> list[str]:
    """Split a bullet list on newline+bullet boundaries, dropping empty items."""
    segments = BULLET_SPLIT.split("\n" + text.strip())
    return [segment.strip() for segment in segments if segment.strip()]


def _value_after(
    text: str, labels: Sequence[str], pattern: re.Pattern[str] = VALUE_UNTIL_BOLD
) -> str | None:
    end = find_label(text, labels)
    if end is None:
        return None
    # Plain labels may still be followed by the closing bold marker
    match = pattern.match(text[end:].lstrip("*").lstrip())
    if not match:
        return None
    value = match.group(0).strip()
    return value or None


## Extractors


def extract_title(text: str, url_pattern: str | None = None) -> TitleField | None:
    if not has_label(text, TITLE_LABELS):
        return None
    url_match = re.search(url_pattern or settings.view_url_pattern, text)
    if not url_match:
        return None

    title = None
    label_match = LINK_LABEL_PATTERN.search(text, url_match.start())
    if label_match:
        title = decode_entities(label_match.group(1)).strip() or None
    return TitleField(url=url_match.group(0), title=title)


def extract_scheduled(text: str) -> ScheduledField | None:
    value = _value_after(text, DATE_LABELS)
    return ScheduledField(value) if value else None


def extract_participants(text: str) -> ParticipantsField | None:
    end = find_label(text, PARTICIPANT_LABELS)
    if end is None:
        return None
    # No de-duplication: mailto links repeat the address in their label
    emails = EMAIL_PATTERN.findall(text[end:])
    return ParticipantsField(tuple(emails)) if emails else None


def extract_gist(text: str) -> GistField | None:
    value = _value_after(text, GIST_LABELS, VALUE_UNTIL_BOLD_MULTILINE)
    return GistField(value) if value else None


def extract_overview(text: str) -> OverviewField | None:
    end = find_label(text, OVERVIEW_LABELS)
    if end is None:
        return None
    bullets = split_bullets(text[end:])
    return OverviewField(tuple(bullets)) if bullets else None


def extract_notes(text: str) -> NotesField | None:
    end = find_label(text, NOTES_LABELS)
    if end is None:
        return None

    sections = []
    for chunk in NOTES_SECTION_SPLIT.split("\n" + text[end:].strip()):
        match = NOTES_SECTION_PATTERN.match(chunk)
        if not match:
            continue
        sections.append(
            NoteSection(
                heading=match.group(1).strip(),
                bullets=split_bullets(match.group(2)),
            )
        )
    return NotesField(tuple(sections)) if sections else None


EXTRACTORS: tuple[Callable[[str], FieldMatch | None], ...] = (
    extract_scheduled,
    extract_participants,
    extract_gist,
    extract_overview,
    extract_notes,
)


def extract_fields(text: str, url_pattern: str | None = None) -> list[FieldMatch]:
    """Run every extractor over one block's text and return what matched."""
    matches: list[FieldMatch] = []
    title = extract_title(text, url_pattern)
    if title is not None:
        matches.append(title)
    for extractor in EXTRACTORS:
        match = extractor(text)
        if match is not None:
            matches.append(match)
    return matches
