from __future__ import annotations

from typing import Any, List

import requests

from ..errors import UpstreamError, UpstreamTimeoutError
from ..models import Task
from ..processors import CategoryClassifier, classify_tasks
from ..utils.logging import get_logger

logger = get_logger("envrac.fetchers.tasks")

DEFAULT_TASK_API_URL = "https://api.todoist.com/api/v1"
_SERVICE = "task tracker"


def parse_tasks_payload(payload: Any, *, raw_body: str = "") -> List[Task]:
    """Deserialize a tasks response.

    Accepts the enveloped shape (``{"results": [...]}``) first and falls back
    to a bare list of task objects.
    """
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        items = payload["results"]
    elif isinstance(payload, list):
        items = payload
    else:
        raise UpstreamError(None, raw_body or repr(payload), service=_SERVICE)

    tasks: List[Task] = []
    for item in items:
        if not isinstance(item, dict):
            raise UpstreamError(None, raw_body or repr(item), service=_SERVICE)
        tasks.append(Task.from_payload(item))
    return tasks


def fetch_tasks(
    api_token: str,
    project_id: str,
    classifier: CategoryClassifier,
    *,
    base_url: str = DEFAULT_TASK_API_URL,
    timeout: float = 30,
    session: requests.Session | None = None,
) -> List[Task]:
    """Fetch the open tasks of a project and classify them.

    Only the first page returned by the API is used.
    """
    url = f"{base_url.rstrip('/')}/tasks"
    headers = {"Authorization": f"Bearer {api_token}"}
    http = session or requests
    logger.debug("Fetching tasks for project %s from %s", project_id, url)
    try:
        resp = http.get(url, params={"project_id": project_id}, headers=headers, timeout=timeout)
    except requests.Timeout as exc:
        logger.error("Task tracker timed out after %ss: %s", timeout, exc)
        raise UpstreamTimeoutError(str(exc), service=_SERVICE) from exc
    except requests.RequestException as exc:
        logger.error("Task tracker request error: %s", exc)
        raise UpstreamError(None, str(exc), service=_SERVICE) from exc

    if not 200 <= resp.status_code < 300:
        logger.error("Task tracker fetch failed (%s): %s", resp.status_code, resp.text)
        raise UpstreamError(resp.status_code, resp.text, service=_SERVICE)

    try:
        payload = resp.json()
    except ValueError as exc:
        raise UpstreamError(resp.status_code, resp.text, service=_SERVICE) from exc

    tasks = classify_tasks(parse_tasks_payload(payload, raw_body=resp.text), classifier)
    logger.info("Fetched %d task(s) for project %s", len(tasks), project_id)
    return tasks
