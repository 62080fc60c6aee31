"""Configuration management for healthtables."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Where generated location and report files are written
    output_dir: Path = Path(os.getenv("OUTPUT_DIR", "out"))

    # Crawled pages, one folder per source and date
    cache_dir: Path = Path(os.getenv("CACHE_DIR", "cache"))

    # Batch settings
    max_concurrency: int = int(os.getenv("MAX_CONCURRENCY", "5"))
    status_interval_seconds: float = float(os.getenv("STATUS_INTERVAL_SECONDS", "10"))

    # Crawling
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    user_agent: str = os.getenv("USER_AGENT", "healthtables/0.1 (+https://github.com/healthtables)")

    # Computed totals may differ from a scraped totals row by this fraction
    totals_tolerance: float = float(os.getenv("TOTALS_TOLERANCE", "0.05"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()


settings = Settings()
