"""Task processing: category classification and grouping."""

from .classify import CategoryClassifier, classify_tasks, group_by_category

__all__ = ["CategoryClassifier", "classify_tasks", "group_by_category"]
