"""Tests for Article validation / normalization."""

import pytest

from design_digest.errors import SchemaError
from design_digest.models import Article, ArticleType
from design_digest.validator import normalize, validate_payload


# ── Helpers ──────────────────────────────────────────────────────────────


def _make_payload(**overrides) -> dict:
    payload = {
        "id": "abc",
        "title": "Design Systems 101",
        "author": "NNGroup",
        "source": "NNGroup",
        "type": "Article",
        "category": "Design Systems",
        "url": "https://www.nngroup.com/articles/design-systems-101/",
        "summary": ["A design system is a set of standards."],
        "insights": ["Single source of truth is essential."],
        "application_tips": ["Start small."],
        "tweet_draft": "Adoption is the hard part.",
    }
    payload.update(overrides)
    return payload


def _without(key: str) -> dict:
    payload = _make_payload()
    del payload[key]
    return payload


# ── single ───────────────────────────────────────────────────────────────


class TestNormalizeSingle:
    """单条 Article 校验"""

    def test_valid_payload(self):
        article = normalize(_make_payload(), "single")
        assert isinstance(article, Article)
        assert article.id == "abc"
        assert article.type is ArticleType.ARTICLE
        assert article.tweet_draft == "Adoption is the hard part."

    def test_video_type(self):
        assert normalize(_make_payload(type="Video"), "single").type is ArticleType.VIDEO

    def test_strings_are_trimmed(self):
        article = normalize(_make_payload(title="  Padded  ", summary=[" a ", "  "]), "single")
        assert article.title == "Padded"
        assert article.summary == ["a"]

    def test_missing_id_is_generated(self):
        article = normalize(_without("id"), "single")
        assert article.id

    def test_empty_id_is_generated(self):
        assert normalize(_make_payload(id="  "), "single").id.strip()

    def test_ids_are_not_content_derived(self):
        """同一内容两次校验得到不同 id"""
        first = normalize(_without("id"), "single")
        second = normalize(_without("id"), "single")
        assert first.id != second.id

    def test_fallback_url_overrides(self):
        url = "https://medium.com/some/post-123"
        article = normalize(_make_payload(url="https://wrong.example/other"), "single", fallback_url=url)
        assert article.url == url

    def test_fallback_url_when_url_missing(self):
        url = "https://uxdesign.cc/post"
        assert normalize(_without("url"), "single", fallback_url=url).url == url

    def test_missing_tweet_draft_is_padded(self):
        article = normalize(_without("tweet_draft"), "single")
        assert article.tweet_draft == "Design Systems 101 by NNGroup"

    @pytest.mark.parametrize("field", ["title", "author", "source", "category"])
    def test_missing_required_text(self, field):
        with pytest.raises(SchemaError) as exc:
            normalize(_without(field), "single")
        assert any(p.startswith(field) for p in exc.value.problems)

    def test_empty_title_rejected(self):
        with pytest.raises(SchemaError):
            normalize(_make_payload(title=""), "single")

    @pytest.mark.parametrize("field", ["summary", "insights", "application_tips"])
    def test_list_fields_must_be_string_lists(self, field):
        with pytest.raises(SchemaError) as exc:
            normalize(_make_payload(**{field: "not a list"}), "single")
        assert any(p.startswith(field) for p in exc.value.problems)

    def test_list_items_must_be_strings(self):
        """不做隐式类型转换"""
        with pytest.raises(SchemaError):
            normalize(_make_payload(insights=["ok", 3]), "single")

    def test_empty_summary_rejected(self):
        with pytest.raises(SchemaError):
            normalize(_make_payload(summary=[]), "single")

    def test_invalid_type(self):
        with pytest.raises(SchemaError) as exc:
            normalize(_make_payload(type="Podcast"), "single")
        assert any(p.startswith("type") for p in exc.value.problems)

    @pytest.mark.parametrize("value", [["Article"], {"k": 1}, None, 1])
    def test_non_string_type(self, value):
        """type 为列表 / 对象时报 SchemaError，而不是 TypeError"""
        with pytest.raises(SchemaError) as exc:
            normalize(_make_payload(type=value), "single")
        assert any(p.startswith("type") for p in exc.value.problems)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "/relative/path",
            "ftp://files.site.com/a",
            "https://example.com/article",
            "https://www.example.org/x",
            "https://[not-ipv6/x",
        ],
    )
    def test_bad_urls_rejected(self, url):
        with pytest.raises(SchemaError):
            normalize(_make_payload(url=url), "single")

    def test_non_object(self):
        with pytest.raises(SchemaError):
            normalize([_make_payload()], "single")

    def test_problems_listed_together(self):
        with pytest.raises(SchemaError) as exc:
            normalize({"title": "Only a title"}, "single")
        assert len(exc.value.problems) >= 5


# ── list ─────────────────────────────────────────────────────────────────


class TestNormalizeList:
    """列表模式：丢弃不合格条目，按 url 去重"""

    def test_valid_list(self):
        payload = [
            _make_payload(url="https://a.com/1"),
            _make_payload(url="https://b.com/2"),
        ]
        articles = normalize(payload, "list")
        assert [a.url for a in articles] == ["https://a.com/1", "https://b.com/2"]

    def test_bad_entries_dropped(self):
        payload = [_make_payload(title=""), _make_payload(url="https://a.com/1"), "junk"]
        articles = normalize(payload, "list")
        assert len(articles) == 1
        assert articles[0].url == "https://a.com/1"

    def test_all_entries_bad(self):
        with pytest.raises(SchemaError) as exc:
            normalize([_make_payload(type="Tweet"), 42], "list")
        assert len(exc.value.problems) >= 2

    def test_empty_list_is_not_an_error(self):
        assert normalize([], "list") == []

    def test_not_a_list(self):
        with pytest.raises(SchemaError):
            normalize(_make_payload(), "list")

    def test_unhashable_type_does_not_sink_siblings(self):
        payload = [
            _make_payload(url="https://good.com/1"),
            _make_payload(url="https://good.com/2", type={"k": 1}),
            _make_payload(url="https://good.com/3", type=["Article"]),
        ]
        assert [a.url for a in normalize(payload, "list")] == ["https://good.com/1"]

    def test_malformed_url_does_not_sink_siblings(self):
        payload = [
            _make_payload(url="https://[not-ipv6/x"),
            _make_payload(url="https://good.com/1"),
        ]
        assert [a.url for a in normalize(payload, "list")] == ["https://good.com/1"]

    def test_duplicate_urls_collapsed(self):
        payload = [
            _make_payload(title="First", url="https://a.com/1"),
            _make_payload(title="Second", url="https://a.com/1"),
        ]
        articles = normalize(payload, "list")
        assert [a.title for a in articles] == ["First"]

    def test_generated_ids_unique_within_list(self):
        payload = [_without("id"), {**_without("id"), "url": "https://b.com/2"}]
        articles = normalize(payload, "list")
        assert articles[0].id != articles[1].id


# ── tagged result ────────────────────────────────────────────────────────


class TestValidatePayload:
    def test_failure_does_not_raise(self):
        result = validate_payload({"title": "x"}, "single")
        assert not result.ok
        assert result.articles == []
        assert result.problems

    def test_partial_list_ok(self):
        result = validate_payload([_make_payload(), {}], "list")
        assert result.ok
        assert len(result.articles) == 1
        assert result.problems
