"""Settings + logging for the meeting-record extractor."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from package directory
PACKAGE_DIR = Path(__file__).resolve().parent
load_dotenv(dotenv_path=PACKAGE_DIR / ".env")


class Settings(BaseSettings):
    """Essential settings for extraction services and logging."""

    model_config = SettingsConfigDict(env_prefix="MEETING_EXTRACTOR_")

    # Environment + logging
    log_level: str = "INFO"

    # Transcription service view link, e.g. https://app.fireflies.ai/view/Weekly-Sync::abc123
    view_url_pattern: str = r"https://app\.fireflies\.ai/view/[^\s|<>]+"

    # Substitute title used when aggregating meetings without one
    untitled_meeting_title: str = "Untitled"

    # Defaults handed to the external message source
    summary_channel: str = "fireflies-ai"
    fetch_limit: int = 20
    bot_messages_only: bool = True


settings = Settings()


def configure_structlog() -> None:
    """Simple logging setup."""
    import logging
    import sys

    import structlog

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        stream=sys.stdout,
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
