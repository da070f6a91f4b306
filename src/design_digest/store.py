"""JSON-backed history / saved / liked / disliked lists.

Persistence is plain "load list / save list"; everything else (toggling,
rating, recording history) happens in ``Library`` on in-memory copies.
持久化失败不应导致调用方崩溃：读取出错时按空列表处理。
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import TypeAdapter, ValidationError

from .models import Article, DigestConfig, DigestHistoryItem, UserPreferences

logger = logging.getLogger(__name__)

LIST_KEYS = ("history", "saved", "liked", "disliked")

Rating = Literal["up", "down"] | None

_ARTICLE = TypeAdapter(Article)
_HISTORY_ITEM = TypeAdapter(DigestHistoryItem)


class JsonListStore:
    """One JSON file per named list under *directory*."""

    def __init__(self, directory: str | Path = "data") -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if key not in LIST_KEYS:
            raise KeyError(f"unknown list {key!r}, expected one of {LIST_KEYS}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> list[Any] | None:
        """Return the stored list, or None when missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s, starting fresh: %s", path, e)
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a JSON list, got %s", path, type(data).__name__)
            return None
        return data

    def save(self, key: str, items: list[Any]) -> None:
        """Write *items*; a crash mid-write leaves the previous file intact."""
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(
            json.dumps(items, indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        tmp_path.replace(path)


class Library:
    """The user's history and rated/saved articles, keyed by url.

    The same article may live in several lists at once as separate copies.
    """

    def __init__(self, store: JsonListStore) -> None:
        self.store = store
        self.history: list[DigestHistoryItem] = self._load("history", _HISTORY_ITEM)
        self.saved: list[Article] = self._load("saved", _ARTICLE)
        self.liked: list[Article] = self._load("liked", _ARTICLE)
        self.disliked: list[Article] = self._load("disliked", _ARTICLE)
        logger.info(
            "Loaded library: %d history, %d saved, %d liked, %d disliked",
            len(self.history), len(self.saved), len(self.liked), len(self.disliked),
        )

    def _load(self, key: str, adapter: TypeAdapter) -> list:
        """Load one list, dropping only the entries that fail validation."""
        raw = self.store.load(key)
        if raw is None:
            return []
        items = []
        for i, entry in enumerate(raw):
            try:
                items.append(adapter.validate_python(entry))
            except ValidationError as e:
                logger.warning(
                    "Dropping corrupt %s entry #%d: %d errors", key, i, e.error_count()
                )
        return items

    def _persist(self, key: str) -> None:
        items = getattr(self, key)
        self.store.save(key, [item.model_dump(mode="json") for item in items])

    # --- history ------------------------------------------------------------

    def record(
        self,
        config: DigestConfig,
        articles: list[Article],
        origin: Literal["feed", "url"],
    ) -> DigestHistoryItem:
        """Prepend a history entry for a completed generation."""
        item = DigestHistoryItem(config=config, articles=tuple(articles), origin=origin)
        self.history.insert(0, item)
        self._persist("history")
        return item

    # --- saved --------------------------------------------------------------

    def is_saved(self, article: Article) -> bool:
        return any(a.url == article.url for a in self.saved)

    def toggle_save(self, article: Article) -> bool:
        """Save or unsave *article*; returns the new saved state."""
        if self.is_saved(article):
            self.saved = [a for a in self.saved if a.url != article.url]
            saved = False
        else:
            self.saved.insert(0, article.model_copy(deep=True))
            saved = True
        self._persist("saved")
        return saved

    # --- ratings ------------------------------------------------------------

    def rating(self, article: Article) -> Rating:
        if any(a.url == article.url for a in self.liked):
            return "up"
        if any(a.url == article.url for a in self.disliked):
            return "down"
        return None

    def rate(self, article: Article, rating: Rating) -> None:
        """Move *article* to liked/disliked, or clear its rating with None."""
        self.liked = [a for a in self.liked if a.url != article.url]
        self.disliked = [a for a in self.disliked if a.url != article.url]
        if rating == "up":
            self.liked.insert(0, article.model_copy(deep=True))
        elif rating == "down":
            self.disliked.insert(0, article.model_copy(deep=True))
        self._persist("liked")
        self._persist("disliked")

    def preferences(self) -> UserPreferences:
        """Snapshot for the pipeline; later rating changes don't leak into it."""
        return UserPreferences(liked=list(self.liked), disliked=list(self.disliked))
