"""Top-level package for the En Vrac publisher.

This package gathers open tasks from the task tracker, sorts them into
editorial categories and publishes the weekly "En Vrac" article to the
blog's content repository.
"""

__all__ = []
