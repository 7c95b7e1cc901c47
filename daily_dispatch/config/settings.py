"""Application settings with environment variable support."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path


# Compute base_dir at module level
_BASE_DIR = Path(__file__).parent.parent.parent.resolve()


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DD_",  # DD_SITES, DD_LOG_LEVEL, etc.
    )

    # Paths - computed from base_dir
    base_dir: Path = _BASE_DIR
    data_dir: Path = _BASE_DIR / "data"
    sites_file: Path = _BASE_DIR / "data" / "sites.json"
    snapshot_file: Optional[Path] = _BASE_DIR / "data" / "snapshot.json"

    # Newline-separated site list, used when no sites file has been saved
    sites: str = ""

    # Transport
    fetch_timeout_seconds: float = 10.0
    max_redirects: int = 5
    user_agent: str = "Mozilla/5.0 (compatible; DailyDispatchBot/1.0; +news aggregator)"

    # Aggregation
    feed_timeout_seconds: float = 8.0
    recency_window_hours: float = 26.0
    max_articles: int = 40
    description_max_chars: int = 500

    # Cache
    initial_refresh_delay_seconds: float = 3.0

    # Logging
    log_level: str = "INFO"


settings = Settings()
