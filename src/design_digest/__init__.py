"""Design Digest: curated design reading from a generative content service."""

from .errors import (
    AuthorizationError,
    DigestError,
    ExtractionError,
    RetrievalError,
    SchemaError,
)
from .models import (
    Article,
    ArticleType,
    DateRange,
    DigestConfig,
    DigestHistoryItem,
    ExperienceLevel,
    Topic,
    UserPreferences,
)
from .pipeline import DigestPipeline, analyze_url, generate_digest

__all__ = [
    "Article",
    "ArticleType",
    "AuthorizationError",
    "DateRange",
    "DigestConfig",
    "DigestError",
    "DigestHistoryItem",
    "DigestPipeline",
    "ExperienceLevel",
    "ExtractionError",
    "RetrievalError",
    "SchemaError",
    "Topic",
    "UserPreferences",
    "analyze_url",
    "generate_digest",
]
