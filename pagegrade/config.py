from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    # App
    environment: str = "development"
    log_level: str = "INFO"
    extra_allowed_origins: str = ""   # comma-separated
    # Retrieval
    request_timeout_seconds: int = 15
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    )
    # Tried in order. {url} is the raw target, {quoted} the percent-encoded one.
    retrieval_sources: List[str] = [
        "{url}",
        "https://api.allorigins.win/raw?url={quoted}",
        "https://corsproxy.io/?{quoted}",
        "https://api.codetabs.com/v1/proxy?quest={quoted}",
    ]
    min_content_bytes: int = 100
    # Input limits
    min_text_words: int = 100
    min_humanize_chars: int = 50
    # Rate limiting
    rate_limit_per_minute: int = 10


@lru_cache()
def get_settings() -> Settings:
    return Settings()
