from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Sequence

from ..models import Category, ComposedArticle, PublishedArticleRef, Task

MONTHS = (
    "Janvier",
    "Février",
    "Mars",
    "Avril",
    "Mai",
    "Juin",
    "Juillet",
    "Août",
    "Septembre",
    "Octobre",
    "Novembre",
    "Décembre",
)

PUBLISH_TIME = "05:00:03+01:00"
DEFAULT_BLOG_URL = "https://blog.victorprouff.fr/en-vracs"

_HEAD_TEMPLATE = """---
title: "[En Vrac] - {day_label}"
description: "En vrac du {day_label}. Mes découvertes, articles, vidéos et écoute qui m'ont intéressé et que je veux partager."
summary: "En vrac du {day_label}. Mes découvertes, articles, vidéos et écoute qui m'ont intéressé et que je veux partager."
date: {iso_date}T{publish_time}
categories: [ "En vrac" ]
draft: false
---

Hello ! 😊

Comme chaque semaine, vous pouvez retrouver ici des liens d’articles de vidéos ou de podcast que j’ai découvert au fil de ma veille quotidienne et que j’aimerais partager avec vous. 😀

Les deux derniers EnVrac :
{backlinks}"""


def day_label(day: date) -> str:
    """``19 Octobre`` style label, independent of the platform locale."""
    return f"{day:%d} {MONTHS[day.month - 1]}"


def article_url(ref: PublishedArticleRef, *, blog_url: str = DEFAULT_BLOG_URL) -> str:
    prefix = f"{ref.year_prefix}/" if ref.year is not None else ""
    return f"{blog_url.rstrip('/')}/{prefix}{ref.name}/"


def format_backlink(ref: PublishedArticleRef, *, blog_url: str = DEFAULT_BLOG_URL) -> str:
    return f"  - [[En Vrac] - {ref.date}]({article_url(ref, blog_url=blog_url)})"


def compose_head(
    today: date,
    ref1: PublishedArticleRef,
    ref2: PublishedArticleRef,
    *,
    blog_url: str = DEFAULT_BLOG_URL,
) -> str:
    backlinks = "\n".join(format_backlink(r, blog_url=blog_url) for r in (ref1, ref2))
    return _HEAD_TEMPLATE.format(
        day_label=day_label(today),
        iso_date=today.isoformat(),
        publish_time=PUBLISH_TIME,
        backlinks=backlinks,
    )


def format_task_line(task: Task) -> str:
    if task.description:
        return f"- {task.content} - {task.description}\n"
    return f"- {task.content}\n"


def compose_body(grouped: Mapping[Category, Sequence[Task]]) -> str:
    """Render one section per category, in the mapping's iteration order."""
    parts = []
    for category, tasks in grouped.items():
        if category is Category.DEFERRED:
            continue
        parts.append(f"\n\n## {category.label}\n")
        parts.extend(format_task_line(t) for t in tasks)
    return "".join(parts)


def compose_article(
    today: date,
    refs: Iterable[PublishedArticleRef],
    grouped: Mapping[Category, Sequence[Task]],
    *,
    blog_url: str = DEFAULT_BLOG_URL,
) -> ComposedArticle:
    ref1, ref2 = refs
    return ComposedArticle(
        head=compose_head(today, ref1, ref2, blog_url=blog_url),
        body=compose_body(grouped),
    )
