"""Data models for Design Digest."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    """Random, collision-resistant identifier (not derived from content)."""
    return uuid4().hex


class ArticleType(str, Enum):
    ARTICLE = "Article"
    VIDEO = "Video"


class ExperienceLevel(str, Enum):
    BEGINNER_MID = "Beginner-Mid"
    MID_SENIOR = "Mid-Senior"


class DateRange(str, Enum):
    LAST_24_HOURS = "Last 24 Hours"
    LAST_WEEK = "Last Week"
    LAST_MONTH = "Last Month"
    LAST_6_MONTHS = "Last 6 Months"
    ANY_TIME = "Any Time"


class Topic(str, Enum):
    PRODUCT_THINKING = "Product Thinking"
    AI_IN_UX = "AI in UX"
    VISUAL_DESIGN = "Visual Design"
    STRATEGY = "Strategy"
    DESIGN_SYSTEMS = "Design Systems"
    RESEARCH = "Research"
    PRODUCT_CASE_STUDIES = "Product Design Case Studies"
    UX_CASE_STUDIES = "UX Design Case Studies"
    SURPRISE_ME = "Random/Surprise Me"

    @property
    def is_case_study(self) -> bool:
        return "Case Studies" in self.value


INFERENCE_SOURCE = "AI Inference"
UNAVAILABLE_CATEGORY = "Error"


class Article(BaseModel):
    """A single curated article or video.

    url 是 Article 在任意列表中的唯一键（保存 / 点赞 / 历史均按 url 匹配）。
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    title: str
    author: str
    source: str
    type: ArticleType
    category: str
    url: str
    summary: list[str]
    insights: list[str]
    application_tips: list[str]
    tweet_draft: str | None = None

    @property
    def is_inferred(self) -> bool:
        """True when produced by the non-grounded inference tier."""
        return self.source == INFERENCE_SOURCE

    @property
    def is_unavailable(self) -> bool:
        return self.category == UNAVAILABLE_CATEGORY

    def share_text(self) -> str:
        """Promotional text ready to copy: hook first, link last."""
        body = self.tweet_draft or f"{self.title} by {self.author}"
        return f"{body}\n\n{self.url}"


class DigestConfig(BaseModel):
    """User-chosen generation parameters."""

    model_config = ConfigDict(frozen=True)

    level: ExperienceLevel = ExperienceLevel.MID_SENIOR
    topics: tuple[Topic, ...] = (Topic.SURPRISE_ME,)
    date_range: DateRange = DateRange.LAST_MONTH

    @field_validator("topics")
    @classmethod
    def _sentinel_is_exclusive(cls, topics: tuple[Topic, ...]) -> tuple[Topic, ...]:
        topics = tuple(dict.fromkeys(topics))
        # an empty selection means "surprise me"; the sentinel is exclusive
        if not topics or Topic.SURPRISE_ME in topics and len(topics) > 1:
            return (Topic.SURPRISE_ME,)
        return topics

    @property
    def is_surprise(self) -> bool:
        return self.topics == (Topic.SURPRISE_ME,)

    def toggle_topic(self, topic: Topic) -> "DigestConfig":
        """Return a copy with *topic* toggled.

        选择 Random 会清空其它主题；选择具体主题会移除 Random；
        取消最后一个具体主题时回到 Random。
        """
        if topic is Topic.SURPRISE_ME:
            return self.model_copy(update={"topics": (Topic.SURPRISE_ME,)})

        concrete = [t for t in self.topics if t is not Topic.SURPRISE_ME]
        if topic in concrete:
            concrete.remove(topic)
        else:
            concrete.append(topic)
        return self.model_copy(update={"topics": tuple(concrete) or (Topic.SURPRISE_ME,)})

    @classmethod
    def for_url(cls, level: ExperienceLevel) -> "DigestConfig":
        """Snapshot stored with URL-analysis history entries."""
        return cls(level=level, topics=(Topic.SURPRISE_ME,), date_range=DateRange.ANY_TIME)


class UserPreferences(BaseModel):
    """Previously rated articles, most recent first. Read-only input."""

    liked: list[Article] = []
    disliked: list[Article] = []


class DigestHistoryItem(BaseModel):
    """Immutable record of one completed generation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    config: DigestConfig
    articles: tuple[Article, ...]
    origin: Literal["feed", "url"]
