"""Check parsed model output against the Article shape.

Validation produces a tagged ``ValidationResult`` so that the pipeline
tiers can decide what to do; ``normalize`` is the raising wrapper used by
the tiers themselves.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import ValidationError

from .errors import SchemaError
from .models import Article, ArticleType, new_id

logger = logging.getLogger(__name__)

Expected = Literal["single", "list"]

_REQUIRED_TEXT = ("title", "author", "source", "category")
_TEXT_LISTS = ("summary", "insights", "application_tips")
_ARTICLE_TYPES = frozenset(t.value for t in ArticleType)

# Hosts the model falls back to when it has no real link
_PLACEHOLDER_HOSTS = frozenset({"example.com", "example.org", "example.net"})


@dataclass
class ValidationResult:
    articles: list[Article] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)
    is_list: bool = True

    @property
    def ok(self) -> bool:
        if not self.is_list:
            return len(self.articles) == 1
        # an empty list is valid here; the pipeline decides what "empty" means
        return bool(self.articles) or not self.problems


def _url_problem(url: Any) -> str | None:
    if not isinstance(url, str) or not url.strip():
        return "url: missing or empty"
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError:
        return f"url: malformed URL ({url!r})"
    if parsed.scheme not in ("http", "https") or not hostname:
        return f"url: not an absolute http(s) URL ({url!r})"
    host = hostname.lower().removeprefix("www.")
    if host in _PLACEHOLDER_HOSTS:
        return f"url: placeholder host ({url!r})"
    return None


def _check_entry(entry: Any, fallback_url: str | None) -> tuple[Article | None, list[str]]:
    """Validate one entry; returns the article or the list of problems."""
    if not isinstance(entry, dict):
        return None, [f"expected an object, got {type(entry).__name__}"]

    data = dict(entry)
    problems: list[str] = []

    for name in _REQUIRED_TEXT:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"{name}: missing or empty")
        else:
            data[name] = value.strip()

    for name in _TEXT_LISTS:
        value = data.get(name)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            problems.append(f"{name}: must be a list of strings")
        else:
            data[name] = [v.strip() for v in value if v.strip()]

    if isinstance(data.get("summary"), list) and not data["summary"]:
        problems.append("summary: must not be empty")

    article_type = data.get("type")
    if not isinstance(article_type, str) or article_type not in _ARTICLE_TYPES:
        problems.append(f"type: must be one of {sorted(_ARTICLE_TYPES)}, got {article_type!r}")

    if fallback_url is not None:
        # the model is not trusted to echo the input URL exactly
        data["url"] = fallback_url
    elif (problem := _url_problem(data.get("url"))) is not None:
        problems.append(problem)
    else:
        data["url"] = data["url"].strip()

    if problems:
        return None, problems

    if not isinstance(data.get("id"), str) or not data["id"].strip():
        data["id"] = new_id()

    tweet = data.get("tweet_draft")
    if not isinstance(tweet, str) or not tweet.strip():
        data["tweet_draft"] = f"{data['title']} by {data['author']}"

    try:
        return Article.model_validate(data), []
    except ValidationError as e:
        return None, [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]


def validate_payload(
    value: Any,
    expected: Expected,
    fallback_url: str | None = None,
) -> ValidationResult:
    """Validate *value* without raising.

    list 模式下逐条校验：不合格的条目被丢弃，合格的保留；url 重复时保留第一条。
    """
    if expected == "single":
        article, problems = _check_entry(value, fallback_url)
        return ValidationResult(
            articles=[article] if article else [],
            problems=problems,
            is_list=False,
        )

    if not isinstance(value, list):
        return ValidationResult(problems=[f"expected a list, got {type(value).__name__}"])

    result = ValidationResult()
    seen_urls: set[str] = set()
    for i, entry in enumerate(value):
        article, problems = _check_entry(entry, fallback_url)
        if article is None:
            logger.warning("Dropping article #%d: %s", i, "; ".join(problems))
            result.problems.extend(f"[{i}] {p}" for p in problems)
            continue
        if article.url in seen_urls:
            logger.info("Dropping duplicate article #%d (%s)", i, article.url)
            continue
        seen_urls.add(article.url)
        result.articles.append(article)

    return result


def normalize(
    value: Any,
    expected: Expected,
    fallback_url: str | None = None,
) -> Article | list[Article]:
    """Validate and normalize parsed JSON into Article(s).

    Args:
        value: Parsed JSON value.
        expected: ``"single"`` for one object, ``"list"`` for an array.
        fallback_url: When given, overwrites every returned article's url.

    Raises:
        SchemaError: the value does not have the Article shape.
    """
    result = validate_payload(value, expected, fallback_url)
    if not result.ok:
        raise SchemaError(result.problems)
    if expected == "single":
        return result.articles[0]
    return result.articles
