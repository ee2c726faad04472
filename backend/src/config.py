"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from pydantic_settings import BaseSettings

from domain.boq.brands import DEFAULT_BRAND_KEYWORDS


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment Variables:
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default true)
        ENVIRONMENT: development | production (hides /docs in production)
        CORS_ORIGINS: Comma separated list of allowed origins
        MATCH_MIN_CONFIDENCE: Floor a candidate must exceed to be listed
        AUTO_MATCH_THRESHOLD: Floor a best match must exceed to be accepted
        MATCH_CANDIDATE_LIMIT: Candidates returned for manual review
        BRAND_KEYWORDS: JSON list of brand keywords, scanned in order
        MAX_UPLOAD_SIZE_BYTES: Maximum BOQ upload size
    """

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5000"

    # Matching
    MATCH_MIN_CONFIDENCE: float = 25.0
    AUTO_MATCH_THRESHOLD: float = 30.0
    MATCH_CANDIDATE_LIMIT: int = 5
    BRAND_KEYWORDS: List[str] = list(DEFAULT_BRAND_KEYWORDS)

    # Uploads
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024  # 10 MB

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def matching_config(self) -> "MatchingConfig":
        return MatchingConfig(
            min_confidence=self.MATCH_MIN_CONFIDENCE,
            auto_match_threshold=self.AUTO_MATCH_THRESHOLD,
            candidate_limit=self.MATCH_CANDIDATE_LIMIT,
            brand_keywords=tuple(self.BRAND_KEYWORDS),
        )


@dataclass(frozen=True)
class MatchingConfig:
    """Thresholds and vocabulary injected into the matcher.

    Attributes:
        min_confidence: A pair is listed only when its total exceeds this
        auto_match_threshold: A best match is accepted for a document only
            when its confidence exceeds this
        candidate_limit: Number of candidates offered for manual review
        brand_keywords: Ordered brand vocabulary for the description parser
    """
    min_confidence: float = 25.0
    auto_match_threshold: float = 30.0
    candidate_limit: int = 5
    brand_keywords: Tuple[str, ...] = tuple(DEFAULT_BRAND_KEYWORDS)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
