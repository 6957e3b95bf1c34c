"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from job_trust.models.base import DEFAULT_DATABASE_URL, normalize_database_url

DEFAULT_SESSION_SECRET = "dev-secret-change-me-in-production"


@dataclass
class DatabaseConfig:
    url: str = DEFAULT_DATABASE_URL


@dataclass
class WebConfig:
    session_secret: str = DEFAULT_SESSION_SECRET


@dataclass
class FeedbackConfig:
    default_page_size: int = 10
    max_page_size: int = 100
    comment_max_length: int = 500


@dataclass
class DecayRefreshConfig:
    enabled: bool = False
    hour: int = 3
    minute: int = 0
    timezone: str = "UTC"


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    web: WebConfig = field(default_factory=WebConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)
    decay_refresh: DecayRefreshConfig = field(default_factory=DecayRefreshConfig)
    log_dir: str = "logs"
    log_level: str = "INFO"


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml and fill in your settings."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Database (env var takes precedence)
    db_raw = raw.get("database", {})
    url = os.environ.get("DATABASE_URL", db_raw.get("url", DEFAULT_DATABASE_URL))
    config.database = DatabaseConfig(url=normalize_database_url(url))

    # Web
    web_raw = raw.get("web", {})
    config.web = WebConfig(
        session_secret=os.environ.get(
            "SESSION_SECRET", web_raw.get("session_secret", DEFAULT_SESSION_SECRET)
        ),
    )

    # Feedback
    feedback_raw = raw.get("feedback", {})
    config.feedback = FeedbackConfig(
        default_page_size=feedback_raw.get("default_page_size", 10),
        max_page_size=feedback_raw.get("max_page_size", 100),
        comment_max_length=feedback_raw.get("comment_max_length", 500),
    )

    # Decay refresh
    refresh_raw = raw.get("decay_refresh", {})
    config.decay_refresh = DecayRefreshConfig(
        enabled=refresh_raw.get("enabled", False),
        hour=refresh_raw.get("hour", 3),
        minute=refresh_raw.get("minute", 0),
        timezone=refresh_raw.get("timezone", "UTC"),
    )

    config.log_dir = raw.get("log_dir", "logs")
    config.log_level = os.environ.get("LOG_LEVEL", raw.get("log_level", "INFO"))

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.web.session_secret == DEFAULT_SESSION_SECRET:
        warnings.append("Using the default session secret - set SESSION_SECRET in production")

    if config.database.url.startswith("sqlite"):
        warnings.append("SQLite database configured - concurrent submissions are serialized by file locking")

    if not 1 <= config.feedback.default_page_size <= config.feedback.max_page_size:
        warnings.append("Feedback default_page_size must be between 1 and max_page_size")

    if config.feedback.comment_max_length > 500:
        warnings.append("Feedback comment_max_length above 500 exceeds the comment column size")

    if config.decay_refresh.enabled and not (
        0 <= config.decay_refresh.hour <= 23 and 0 <= config.decay_refresh.minute <= 59
    ):
        warnings.append("Decay refresh time is out of range - hour must be 0-23 and minute 0-59")

    return warnings
