from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import requests

from ..analysis import find_last_two
from ..fetchers import fetch_tasks
from ..models import ComposedArticle
from ..output import ContentRepository, build_commit_request, compose_article, publish
from ..processors import CategoryClassifier, group_by_category
from ..utils.config_loader import load_category_table
from ..utils.logging import get_logger
from ..utils.settings import Settings

logger = get_logger("envrac.pipeline")


@dataclass(slots=True)
class PipelineResult:
    article: ComposedArticle
    path: str
    published: bool
    task_count: int
    published_count: int
    commit_sha: Optional[str] = None


def build_classifier(settings: Settings) -> CategoryClassifier:
    return CategoryClassifier(load_category_table(settings.categories_path))


def build_repository(settings: Settings) -> ContentRepository:
    return ContentRepository(
        token=settings.github_token,
        repo=settings.repository,
        user_agent=settings.user_agent,
        branch=settings.branch,
        base_url=settings.content_api_url,
        timeout=settings.timeout,
    )


def run_pipeline(
    settings: Settings,
    *,
    dry_run: bool = False,
    today: Optional[date] = None,
    classifier: Optional[CategoryClassifier] = None,
    repo: Optional[ContentRepository] = None,
    session: Optional[requests.Session] = None,
) -> PipelineResult:
    """Build today's article and, unless ``dry_run``, commit it.

    Steps run sequentially: locate the last two articles, fetch and classify
    tasks, compose, publish. Any failure aborts the run before the commit.
    """
    today = today or date.today()
    classifier = classifier or build_classifier(settings)
    repo = repo or build_repository(settings)

    refs = find_last_two(repo, settings.content_path)
    tasks = fetch_tasks(
        settings.todoist_token,
        settings.project_id,
        classifier,
        base_url=settings.task_api_url,
        timeout=settings.timeout,
        session=session,
    )
    grouped = group_by_category(tasks)
    article = compose_article(today, refs, grouped, blog_url=settings.blog_url)

    request = build_commit_request(
        article.text,
        today,
        content_path=settings.content_path,
        branch=settings.branch,
        committer_name=settings.committer_name,
        committer_email=settings.committer_email,
        year_folder=settings.year_folder,
    )
    result = PipelineResult(
        article=article,
        path=request.path,
        published=False,
        task_count=len(tasks),
        published_count=sum(len(v) for v in grouped.values()),
    )
    if dry_run:
        logger.info("[DRY-RUN] Would publish %s with %d task(s)", request.path, result.published_count)
        return result

    result.commit_sha = publish(repo, request)
    result.published = True
    logger.info("Published %s with %d task(s)", request.path, result.published_count)
    return result
