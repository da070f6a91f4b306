"""Prompt templates for the content service.

The wording is an opaque instruction string as far as the pipelines are
concerned; only the placeholders matter.
"""

from .models import DigestConfig, Topic

_ARTICLE_SHAPE = """\
{{
  "id": "uuid",
  "title": "Title",
  "author": "Author",
  "source": "Source Name",
  "type": "Article" | "Video",
  "category": "Topic Category",
  "url": "{url}",
  "summary": ["para1", "para2", "para3"],
  "insights": ["insight1", "insight2", "insight3", "insight4", "insight5"],
  "application_tips": ["tip1", "tip2", "tip3", "tip4", "tip5"],
  "tweet_draft": "A short hook-style post about the piece, WITHOUT the URL"
}}"""

# JSON schema used for structured output (non-grounded calls only)
ARTICLE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "author": {"type": "string"},
        "source": {"type": "string"},
        "type": {"type": "string", "enum": ["Article", "Video"]},
        "category": {"type": "string"},
        "url": {"type": "string"},
        "summary": {"type": "array", "items": {"type": "string"}},
        "insights": {"type": "array", "items": {"type": "string"}},
        "application_tips": {"type": "array", "items": {"type": "string"}},
        "tweet_draft": {"type": "string"},
    },
    "required": [
        "id", "title", "author", "source", "type", "category", "url",
        "summary", "insights", "application_tips", "tweet_draft",
    ],
    "additionalProperties": False,
}


_STRICT_DIGEST_PROMPT = """\
ACT AS: A Lead Product Designer.
TASK: Find {count} unique, high-quality articles or videos relevant to the topics.
DATE CONSTRAINT: The articles MUST be published within: {date_range}.
TARGET AUDIENCE LEVEL: {level}.
TOPICS: {topics}.
PREFERRED SOURCES: Reputable design publications like UX Collective, NNGroup, \
Smashing Magazine, A List Apart, Growth.design, Figma Blog, or similar industry voices.

{preferences}
OUTPUT FORMAT:
Return a RAW JSON array of {count} Article objects and nothing else:

[
{shape}
]

CRITICAL RULES FOR URLs:
1. The 'url' field MUST be the EXACT URL returned by the web search.
2. Do NOT fabricate, hallucinate, or guess URLs. Do NOT use example.com.
3. If a valid URL is not found, do not include that article in the list.

Give 5-7 distinct points in 'insights' and 'application_tips' when the content supports it.
"""

_BROAD_DIGEST_PROMPT = """\
ACT AS: A Lead Product Designer and Editor.
TASK: Find {count} classic, seminal, or highly popular design articles/videos that are timeless.
TARGET AUDIENCE LEVEL: {level}.
TOPICS: {topics}.

{preferences}
INSTRUCTIONS:
1. Use web search to find reputable articles from sources like NNGroup, Baymard, \
Smashing Magazine, or A List Apart.
2. Ensure the URLs are valid and functional. Do not guess links.

OUTPUT FORMAT: Return a JSON array of {count} Article objects:

[
{shape}
]
"""

_URL_SEARCH_PROMPT = """\
ACT AS: A Lead Product Designer.
TASK: Analyze the content at this URL: {url}

INSTRUCTIONS:
1. Use web search to find the content of this page.
2. If the URL is not directly accessible, search for the title + author.
3. Synthesize a detailed summary and analysis.

OUTPUT FORMAT: Return a SINGLE RAW JSON Article object and nothing else:
{shape}
"""

_URL_INFERENCE_PROMPT = """\
ACT AS: A Lead Product Designer.
TASK: Analyze this URL: {url}

The live search for this URL failed. Infer the likely content from the URL \
structure, its keywords, or your own knowledge if it is a well-known piece.
If you cannot tell what the page says, write a "Best Practices" guide for the \
topic referenced in the URL instead.
Set "source" to "{inference_source}".

OUTPUT FORMAT: Return a SINGLE JSON Article object:
{shape}
"""


def _topics_text(config: DigestConfig, broad: bool) -> str:
    if config.is_surprise:
        text = (
            "foundational Product Design concepts" if broad
            else "trending Product Design, UX Strategy, and UI Engineering topics"
        )
    else:
        text = ", ".join(t.value for t in config.topics if t is not Topic.SURPRISE_ME)

    if any(t.is_case_study for t in config.topics):
        text += (
            " (including famous redesign case studies)" if broad
            else ". Include detailed Product/UX Redesign case studies if available"
        )
    return text


def strict_digest_prompt(config: DigestConfig, preferences: str, count: int) -> str:
    return _STRICT_DIGEST_PROMPT.format(
        count=count,
        date_range=config.date_range.value,
        level=config.level.value,
        topics=_topics_text(config, broad=False),
        preferences=preferences,
        shape=_ARTICLE_SHAPE.format(url="THE_EXACT_SOURCE_URL_FOUND_BY_SEARCH"),
    )


def broad_digest_prompt(config: DigestConfig, preferences: str, count: int) -> str:
    return _BROAD_DIGEST_PROMPT.format(
        count=count,
        level=config.level.value,
        topics=_topics_text(config, broad=True),
        preferences=preferences,
        shape=_ARTICLE_SHAPE.format(url="THE_EXACT_URL"),
    )


def url_search_prompt(url: str) -> str:
    return _URL_SEARCH_PROMPT.format(url=url, shape=_ARTICLE_SHAPE.format(url=url))


def url_inference_prompt(url: str, inference_source: str) -> str:
    return _URL_INFERENCE_PROMPT.format(
        url=url,
        inference_source=inference_source,
        shape=_ARTICLE_SHAPE.format(url=url),
    )
