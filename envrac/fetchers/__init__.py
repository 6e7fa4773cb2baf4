"""Task tracker access layer."""

from .tasks import fetch_tasks, parse_tasks_payload

__all__ = ["fetch_tasks", "parse_tasks_payload"]
