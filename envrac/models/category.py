from __future__ import annotations

from enum import Enum


class Category(Enum):
    """Editorial buckets, in the order they are rendered in the article."""

    VIDEO = "Video"
    ARTICLE = "Article"
    TOOL = "Tool"
    PODCAST = "Podcast"
    BOOK = "Book"
    DEFERRED = "Deferred"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def publishable(cls) -> list["Category"]:
        return [c for c in cls if c is not cls.DEFERRED]


_LABELS = {
    Category.VIDEO: "🎞️ Youtube",
    Category.ARTICLE: "📖 Articles",
    Category.TOOL: "🛠️ Tools",
    Category.PODCAST: "🎧 Podcasts",
    Category.BOOK: "📚 Livres",
    Category.DEFERRED: "Autre",
}
