"""Shared test configuration and fixtures for all tests."""

import pytest

from tests.builders import (
    DIVIDER,
    EXAMPLE_VIEW_URL_PATTERN,
    FIREFLIES_URL,
    buttons,
    checkboxes,
    section,
)


@pytest.fixture
def example_url_pattern() -> str:
    return EXAMPLE_VIEW_URL_PATTERN


@pytest.fixture
def summary_blocks() -> list[dict]:
    """Block payload of a typical meeting summary message."""
    return [
        {"type": "header", "text": {"type": "plain_text", "text": "Meeting recap"}},
        section(f"*Title:* <{FIREFLIES_URL}|Weekly Sync &amp; Planning>"),
        section("*Date and Time:* Fri, Aug 8th - 12:00 PM PDT (25 mins)"),
        section(
            "*Participants:* <mailto:jane@acme.io|jane@acme.io>, sam.lee@acme.io"
        ),
        section("*Gist:* The team agreed to ship the beta on Monday."),
        section("*Overview:*\n• Beta scope frozen\n• QA starts Thursday"),
        section(
            "*Notes:*\n:rocket: *Launch*\n• Ship Monday\n• Announce in #general"
            "\n:warning: *Risks*\n• Flaky CI"
        ),
        DIVIDER,
        section("*Action Items:*"),
        section("*Jane Doe:*"),
        checkboxes("Write release notes", "Update changelog"),
        section("*Sam Lee:*"),
        buttons("Follow up with client"),
        DIVIDER,
    ]


@pytest.fixture
def summary_message(summary_blocks: list[dict]) -> dict:
    """Raw chat message carrying a meeting summary."""
    return {
        "type": "message",
        "bot_id": "B012345",
        "ts": "1723143600.000200",
        "text": f"Your meeting recap is ready: {FIREFLIES_URL}",
        "blocks": summary_blocks,
    }


@pytest.fixture
def chatter_message() -> dict:
    """Ordinary bot message that is not a meeting summary."""
    return {
        "bot_id": "B012345",
        "ts": 1723143700.0,
        "text": "Reminder: standup in 5 minutes",
        "blocks": [section("Reminder: standup in 5 minutes")],
    }
