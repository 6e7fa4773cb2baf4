from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from ..models import Category, Task
from ..utils.logging import get_logger

logger = get_logger("envrac.processors.classify")


class CategoryClassifier:
    """Map task-tracker section identifiers to editorial categories.

    The table is configuration data (see ``config/categories.yaml``); any
    identifier it does not know is ``Category.DEFERRED``.
    """

    def __init__(self, table: Mapping[str, Category]) -> None:
        self._table: Dict[str, Category] = {str(k): v for k, v in table.items()}

    def classify(self, section_id: str | int | None) -> Category:
        if section_id is None:
            return Category.DEFERRED
        return self._table.get(str(section_id).strip(), Category.DEFERRED)


def classify_tasks(tasks: Iterable[Task], classifier: CategoryClassifier) -> List[Task]:
    """Attach a category to every task, in place."""
    classified = list(tasks)
    for task in classified:
        task.category = classifier.classify(task.section_id)
        logger.debug("Section %s -> %s for %r", task.section_id, task.category.value, task.content)
    return classified


def group_by_category(tasks: Iterable[Task]) -> Dict[Category, List[Task]]:
    """Partition tasks by category, dropping Deferred ones.

    Keys follow ``Category`` declaration order and only categories with at
    least one task are present.
    """
    buckets: Dict[Category, List[Task]] = {c: [] for c in Category.publishable()}
    deferred = 0
    for task in tasks:
        if task.category is None or task.category is Category.DEFERRED:
            deferred += 1
            continue
        buckets[task.category].append(task)
    if deferred:
        logger.info("Set aside %d deferred task(s)", deferred)
    return {c: items for c, items in buckets.items() if items}
