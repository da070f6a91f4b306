"""Digest generation and URL analysis pipelines.

Each pipeline is an ordered list of tiers tried one after another:

  generate_digest: grounded-strict → grounded-broad → bundled fallback set
  analyze_url:     grounded search → inference (no search) → "Analysis Unavailable"

A tier fails on any error except ``AuthorizationError``, which is re-raised
at whichever tier it happens so the caller can ask for a new credential.
Tiers run strictly in sequence; nothing is retried beyond the chain.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .config import LlmConfig
from .errors import AuthorizationError, DigestError
from .extractor import parse_json_payload
from .fallback import fallback_articles
from .models import (
    INFERENCE_SOURCE,
    UNAVAILABLE_CATEGORY,
    Article,
    ArticleType,
    DigestConfig,
    UserPreferences,
    new_id,
)
from .preferences import build_context
from .prompts import (
    ARTICLE_SCHEMA,
    broad_digest_prompt,
    strict_digest_prompt,
    url_inference_prompt,
    url_search_prompt,
)
from .retrieval import ContentRetriever, GenerationRequest
from .validator import normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Tier driver
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tier(Generic[T]):
    """One named strategy in a fallback chain."""

    name: str
    run: Callable[[], Awaitable[T]]


async def run_tiers(
    tiers: Sequence[Tier[T]],
    accept: Callable[[T], bool] = bool,
) -> T | None:
    """Try *tiers* in order, returning the first accepted result.

    Returns None when every tier failed or was rejected by *accept*.
    """
    for tier in tiers:
        logger.info("Tier %s: starting", tier.name)
        try:
            result = await tier.run()
        except AuthorizationError:
            logger.error("Tier %s: credential rejected, aborting chain", tier.name)
            raise
        except DigestError as e:
            logger.warning("Tier %s failed: %s: %s", tier.name, type(e).__name__, e)
            continue
        except Exception:
            logger.exception("Tier %s failed unexpectedly", tier.name)
            continue

        if accept(result):
            logger.info("Tier %s: succeeded", tier.name)
            return result
        logger.warning("Tier %s returned nothing usable", tier.name)

    return None


def unavailable_article(url: str) -> Article:
    """Synthetic record returned when every URL-analysis tier failed."""
    return Article(
        id=f"error_{new_id()}",
        title="Analysis Unavailable",
        author="System",
        source="Internal",
        type=ArticleType.ARTICLE,
        category=UNAVAILABLE_CATEGORY,
        url=url,
        summary=[
            "We could not analyze this URL at the moment.",
            "Please try again later or check the URL.",
        ],
        insights=["N/A"],
        application_tips=["Try a different URL", "Check your internet connection"],
    )


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------

class DigestPipeline:
    """Runs both pipelines against an injected ContentRetriever.

    The pipeline holds no per-request state; concurrent calls are independent.
    """

    def __init__(
        self,
        retriever: ContentRetriever,
        llm_config: LlmConfig | None = None,
    ) -> None:
        self.retriever = retriever
        self.articles_per_digest = (llm_config or LlmConfig()).articles_per_digest

    # --- digest -------------------------------------------------------------

    async def _search_articles(self, prompt: str) -> list[Article]:
        raw = await self.retriever.generate(GenerationRequest(prompt=prompt, grounded=True))
        return normalize(parse_json_payload(raw), "list")

    def digest_tiers(
        self,
        config: DigestConfig,
        prefs: UserPreferences | None = None,
    ) -> list[Tier[list[Article]]]:
        context = build_context(prefs)
        count = self.articles_per_digest
        return [
            Tier(
                "grounded-strict",
                lambda: self._search_articles(strict_digest_prompt(config, context, count)),
            ),
            Tier(
                "grounded-broad",
                lambda: self._search_articles(broad_digest_prompt(config, context, count)),
            ),
        ]

    async def generate_digest(
        self,
        config: DigestConfig,
        prefs: UserPreferences | None = None,
    ) -> list[Article]:
        """Return a non-empty list of articles for *config*.

        Raises:
            AuthorizationError: the content service rejected the credential.
        """
        logger.info(
            "Generating digest: level=%s, topics=%s, date_range=%s",
            config.level.value,
            [t.value for t in config.topics],
            config.date_range.value,
        )
        articles = await run_tiers(self.digest_tiers(config, prefs))
        if articles:
            logger.info("Digest ready with %d articles", len(articles))
            return articles

        logger.warning("All live attempts failed, using bundled fallback articles")
        return fallback_articles()

    # --- URL analysis -------------------------------------------------------

    async def _analyze_with_search(self, url: str) -> Article:
        raw = await self.retriever.generate(
            GenerationRequest(prompt=url_search_prompt(url), grounded=True)
        )
        return normalize(parse_json_payload(raw), "single", fallback_url=url)

    async def _analyze_by_inference(self, url: str) -> Article:
        raw = await self.retriever.generate(
            GenerationRequest(
                prompt=url_inference_prompt(url, INFERENCE_SOURCE),
                response_schema=ARTICLE_SCHEMA,
            )
        )
        article = normalize(parse_json_payload(raw), "single", fallback_url=url)
        # unverified output is always labelled, whatever the model wrote
        return article.model_copy(update={"source": INFERENCE_SOURCE})

    def url_tiers(self, url: str) -> list[Tier[Article]]:
        return [
            Tier("grounded-analysis", lambda: self._analyze_with_search(url)),
            Tier("inference", lambda: self._analyze_by_inference(url)),
        ]

    async def analyze_url(self, url: str) -> Article:
        """Analyze a single URL; never fails except on credential problems.

        Raises:
            AuthorizationError: the content service rejected the credential.
        """
        url = url.strip()
        logger.info("Analyzing URL: %s", url)
        article = await run_tiers(self.url_tiers(url), accept=lambda a: a is not None)
        if article is None:
            logger.error("All URL analysis attempts failed for %s", url)
            return unavailable_article(url)
        return article


# ---------------------------------------------------------------------------
# Functional entry points
# ---------------------------------------------------------------------------

async def generate_digest(
    retriever: ContentRetriever,
    config: DigestConfig,
    prefs: UserPreferences | None = None,
    llm_config: LlmConfig | None = None,
) -> list[Article]:
    return await DigestPipeline(retriever, llm_config).generate_digest(config, prefs)


async def analyze_url(retriever: ContentRetriever, url: str) -> Article:
    return await DigestPipeline(retriever).analyze_url(url)
