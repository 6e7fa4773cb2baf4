"""Typed models used across the application."""

from .category import Category
from .task import Task
from .published import ContentEntry, PublishedArticleRef
from .article import ComposedArticle

__all__ = ["Category", "Task", "ContentEntry", "PublishedArticleRef", "ComposedArticle"]
