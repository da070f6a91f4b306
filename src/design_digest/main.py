"""Caller wiring for Design Digest.

Plays the role of the UI: load config → build retriever → run a pipeline →
record the result in the library. A rejected credential is reported as a
re-authentication request and nothing is recorded.
"""

import asyncio
import logging
import sys

from .config import AppConfig, Settings, load_config
from .errors import AuthorizationError
from .models import Article, DigestConfig
from .pipeline import DigestPipeline
from .retrieval import OpenRouterRetriever
from .store import JsonListStore, Library

logger = logging.getLogger(__name__)

EXIT_REAUTH = 2


def _setup_logging() -> None:
    """Configure logging to stdout."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _build(config: AppConfig, settings: Settings) -> tuple[DigestPipeline, Library]:
    retriever = OpenRouterRetriever(config.llm, settings)
    library = Library(JsonListStore(config.storage.dir))
    return DigestPipeline(retriever, config.llm), library


def _log_articles(articles: list[Article]) -> None:
    for i, article in enumerate(articles, 1):
        logger.info("%d. [%s] %s (%s)", i, article.source, article.title, article.url)


def run_digest(config_path: str = "config.yaml") -> int:
    """Generate a digest from the configured defaults and record it."""
    config, settings = load_config(config_path)
    pipeline, library = _build(config, settings)
    digest_config = DigestConfig(
        level=config.digest.level,
        topics=tuple(config.digest.topics),
        date_range=config.digest.date_range,
    )

    try:
        articles = asyncio.run(
            pipeline.generate_digest(digest_config, library.preferences())
        )
    except AuthorizationError as e:
        logger.error("API key missing or invalid, please re-enter it: %s", e)
        return EXIT_REAUTH

    library.record(digest_config, articles, origin="feed")
    _log_articles(articles)
    return 0


def run_analyze(url: str, config_path: str = "config.yaml") -> int:
    """Analyze a single URL and record it."""
    config, settings = load_config(config_path)
    pipeline, library = _build(config, settings)

    try:
        article = asyncio.run(pipeline.analyze_url(url))
    except AuthorizationError as e:
        logger.error("API key missing or invalid, please re-enter it: %s", e)
        return EXIT_REAUTH

    library.record(DigestConfig.for_url(config.digest.level), [article], origin="url")
    _log_articles([article])
    return 0


def cli() -> None:
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Design Digest - curated design reading")
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to config.yaml (default: config.yaml)",
    )
    parser.add_argument(
        "--url",
        help="Analyze a single URL instead of generating a digest",
    )
    args = parser.parse_args()

    _setup_logging()
    if args.url:
        sys.exit(run_analyze(args.url, config_path=args.config))
    sys.exit(run_digest(config_path=args.config))


if __name__ == "__main__":
    cli()
