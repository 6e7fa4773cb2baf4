"""Discovery of previously published articles."""

from .published_articles import INDEX_FILE, find_last_two

__all__ = ["INDEX_FILE", "find_last_two"]
