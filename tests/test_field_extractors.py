"""
Focused tests for the per-field extractors.
"""

import pytest

from meeting_extractor.meetings.models import NoteSection
from meeting_extractor.meetings.services.field_extractors import (
    GistField,
    NotesField,
    OverviewField,
    ParticipantsField,
    ScheduledField,
    TitleField,
    decode_entities,
    extract_fields,
    extract_gist,
    extract_notes,
    extract_overview,
    extract_participants,
    extract_scheduled,
    extract_title,
    find_label,
    split_bullets,
)


class TestTitle:
    """Title + URL extraction."""

    def test_title_and_url(self, example_url_pattern):
        """Test title and url."""
        text = "*Title:* <https://app.example.ai/view/abc123|Weekly Sync>"

        field = extract_title(text, example_url_pattern)

        assert field == TitleField(url="https://app.example.ai/view/abc123", title="Weekly Sync")

    def test_entities_decoded(self, example_url_pattern):
        """Test entities decoded."""
        text = "*Title:* <https://app.example.ai/view/x1|R&amp;D &lt;Q3&gt;>"

        field = extract_title(text, example_url_pattern)

        assert field.title == "R&D <Q3>"

    def test_default_pattern_matches_fireflies(self):
        """Test default pattern matches fireflies."""
        text = "*Title:* <https://app.fireflies.ai/view/Standup::9KX|Standup>"

        field = extract_title(text)

        assert field.url == "https://app.fireflies.ai/view/Standup::9KX"
        assert field.title == "Standup"

    def test_requires_title_label(self, example_url_pattern):
        """Test requires title label."""
        text = "<https://app.example.ai/view/abc123|Weekly Sync>"

        assert extract_title(text, example_url_pattern) is None

    def test_requires_view_url(self, example_url_pattern):
        """Test requires view url."""
        text = "*Title:* <https://calendar.example.com/e/1|Weekly Sync>"

        assert extract_title(text, example_url_pattern) is None

    def test_url_without_label_segment(self, example_url_pattern):
        """Test url without label segment."""
        text = "*Title:* https://app.example.ai/view/abc123"

        field = extract_title(text, example_url_pattern)

        assert field == TitleField(url="https://app.example.ai/view/abc123", title=None)


class TestScheduled:
    """Test scheduled."""

    @pytest.mark.parametrize(
        "text",
        [
            "*Date and Time:* Fri, Aug 8th - 12:00 PM PDT (25 mins)",
            "Date and Time: Fri, Aug 8th - 12:00 PM PDT (25 mins)",
            "*Date and Time:* Fri, Aug 8th - 12:00 PM PDT (25 mins)\n*Participants:* a@b.io",
        ],
    )
    def test_label_dialects(self, text):
        """Bold and plain labels both match; value stops at newline."""
        assert extract_scheduled(text) == ScheduledField("Fri, Aug 8th - 12:00 PM PDT (25 mins)")

    def test_value_stops_at_bold_marker(self):
        """Test value stops at bold marker."""
        text = "*Date and Time:* Mon 9 AM *Duration:* 30m"

        assert extract_scheduled(text) == ScheduledField("Mon 9 AM")

    def test_no_label(self):
        """Test no label."""
        assert extract_scheduled("Fri, Aug 8th") is None

    def test_empty_value(self):
        """Test empty value."""
        assert extract_scheduled("*Date and Time:*") is None


class TestParticipants:
    """Test participants."""

    def test_emails_in_order_without_dedupe(self):
        """Mailto links repeat the address; duplicates pass through."""
        text = "*Participants:* <mailto:jane@acme.io|jane@acme.io>, sam.lee@acme.io"

        field = extract_participants(text)

        assert field == ParticipantsField(("jane@acme.io", "jane@acme.io", "sam.lee@acme.io"))

    def test_plain_label(self):
        """Test plain label."""
        field = extract_participants("Participants: ana+ops@corp.example.com")

        assert field.emails == ("ana+ops@corp.example.com",)

    def test_only_after_label(self):
        """Test only after label."""
        text = "owner@acme.io\n*Participants:* guest@acme.io"

        assert extract_participants(text).emails == ("guest@acme.io",)

    def test_label_without_emails(self):
        """Test label without emails."""
        assert extract_participants("*Participants:* Jane, Sam") is None


class TestGist:
    """Test gist extraction."""

    def test_gist(self):
        """Test gist value stops at the next bold label."""
        text = "*Gist:* Beta ships Monday.\n*Overview:*\n• a"

        assert extract_gist(text) == GistField("Beta ships Monday.")

    def test_gist_spans_lines_until_bold(self):
        """Test gist spans lines until bold."""
        text = "*Gist:* Beta ships Monday.\nQA owns sign-off. *Next*"

        assert extract_gist(text).value == "Beta ships Monday.\nQA owns sign-off."

    def test_no_gist(self):
        """Test no gist."""
        assert extract_gist("Gist without label") is None


class TestOverview:
    """Test overview."""

    def test_bullets(self):
        """Test bullet glyph splitting."""
        text = "*Overview:*\n• point one\n• point two"

        assert extract_overview(text) == OverviewField(("point one", "point two"))

    def test_mis_encoded_bullets(self):
        """The charset artifact of the bullet glyph splits the same way."""
        text = "*Overview:*\nâ€¢ point one\nâ€¢ point two"

        assert extract_overview(text).bullets == ("point one", "point two")

    def test_dash_bullets_and_blank_segments(self):
        """Test dash bullets and blank segments."""
        text = "*Overview:*\n- point one\n-   \n• point two"

        assert extract_overview(text).bullets == ("point one", "point two")

    def test_first_bullet_on_label_line(self):
        """Test first bullet on label line."""
        text = "*Overview:* • point one\n• point two"

        assert extract_overview(text).bullets == ("point one", "point two")

    def test_empty_overview(self):
        """Test empty overview."""
        assert extract_overview("*Overview:*\n") is None


class TestNotes:
    """Test notes."""

    def test_sections(self):
        """Test notes split into shortcode headed sections."""
        text = (
            "*Notes:*\n:rocket: *Launch*\n• Ship Monday\n• Announce it"
            "\n:warning: *Risks*\n• Flaky CI"
        )

        field = extract_notes(text)

        assert field == NotesField(
            (
                NoteSection(heading="Launch", bullets=["Ship Monday", "Announce it"]),
                NoteSection(heading="Risks", bullets=["Flaky CI"]),
            )
        )

    def test_section_without_bullets(self):
        """Test section without bullets."""
        field = extract_notes("*Notes:*\n:memo: *Misc*")

        assert field.sections == (NoteSection(heading="Misc", bullets=[]),)

    def test_text_without_shortcode_headings(self):
        """Test text without shortcode headings."""
        assert extract_notes("*Notes:*\nJust some prose.") is None

    def test_times_inside_bullets_do_not_split(self):
        """Test times inside bullets do not split."""
        text = "*Notes:*\n:clock1: *Timing*\n• Starts 10:30\n• Ends 11:00"

        field = extract_notes(text)

        assert len(field.sections) == 1
        assert field.sections[0].bullets == ["Starts 10:30", "Ends 11:00"]


class TestHelpers:
    """Test label and bullet helpers."""

    def test_find_label_prefers_earliest(self):
        """Test find label prefers earliest."""
        text = "Date and Time: x *Date and Time:* y"

        assert find_label(text, ("*Date and Time:*", "Date and Time:")) == len("Date and Time:")

    def test_find_label_prefers_longer_on_tie(self):
        """Test find label prefers longer on tie."""
        assert find_label("*Title:* x", ("*Title:", "*Title:*")) == len("*Title:*")

    def test_decode_entities(self):
        """Test decode entities."""
        assert decode_entities("a &lt;b&gt; &amp;amp;") == "a <b> &amp;"

    def test_split_bullets_drops_empty(self):
        """Test split bullets drops empty."""
        assert split_bullets("\n•\n• a\n•  ") == ["a"]


class TestExtractFields:
    """Test extract fields."""

    def test_inert_block(self):
        """A block matching no label yields nothing and does not raise."""
        assert extract_fields("Nothing to see here") == []

    def test_several_fields_in_one_block(self, example_url_pattern):
        """Test several fields in one block."""
        text = (
            "*Title:* <https://app.example.ai/view/k9|Kickoff>\n"
            "*Date and Time:* Tue 10 AM\n"
            "*Participants:* a@x.io"
        )

        matches = extract_fields(text, example_url_pattern)

        assert TitleField(url="https://app.example.ai/view/k9", title="Kickoff") in matches
        assert ScheduledField("Tue 10 AM") in matches
        assert ParticipantsField(("a@x.io",)) in matches
