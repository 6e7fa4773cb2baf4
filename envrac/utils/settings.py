from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import ConfigurationError
from ..fetchers.tasks import DEFAULT_TASK_API_URL
from ..output.article_formatter import DEFAULT_BLOG_URL
from ..output.github_client import DEFAULT_CONTENT_API_URL
from .config_loader import DEFAULT_CATEGORIES_PATH

_TRUE_VALUES = {"1", "true", "yes", "on"}

DEFAULT_CONTENT_PATH = "content/en-vracs"
DEFAULT_BRANCH = "main"
DEFAULT_USER_AGENT = "envrac-publisher"
DEFAULT_TIMEOUT = 30.0
DEFAULT_COMMITTER_NAME = "En Vrac Bot"
DEFAULT_COMMITTER_EMAIL = "envrac@users.noreply.github.com"


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"HTTP_TIMEOUT must be a number: {exc}") from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"HTTP_TIMEOUT must be a positive number of seconds, got {raw!r}")
    return timeout


@dataclass(slots=True)
class Settings:
    todoist_token: str
    project_id: str
    github_token: str
    repository: str
    secret: Optional[str] = None
    content_path: str = DEFAULT_CONTENT_PATH
    branch: str = DEFAULT_BRANCH
    content_api_url: str = DEFAULT_CONTENT_API_URL
    task_api_url: str = DEFAULT_TASK_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    committer_name: str = DEFAULT_COMMITTER_NAME
    committer_email: str = DEFAULT_COMMITTER_EMAIL
    blog_url: str = DEFAULT_BLOG_URL
    year_folder: bool = True
    categories_path: str = str(DEFAULT_CATEGORIES_PATH)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, *, require_secret: bool = False) -> "Settings":
        """Read settings from the environment.

        All missing required variables are reported together.
        """
        env = os.environ if env is None else env
        github_token = env.get("GITHUB_TOKEN") or env.get("GITHUB_API_KEY")
        required = {
            "TODOIST_API_TOKEN": env.get("TODOIST_API_TOKEN"),
            "TODOIST_PROJECT_ID": env.get("TODOIST_PROJECT_ID"),
            "GITHUB_TOKEN": github_token,
            "CONTENT_REPOSITORY": env.get("CONTENT_REPOSITORY"),
        }
        if require_secret:
            required["ENVRAC_SECRET"] = env.get("ENVRAC_SECRET")
        missing = sorted(k for k, v in required.items() if not v)
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            todoist_token=required["TODOIST_API_TOKEN"],
            project_id=required["TODOIST_PROJECT_ID"],
            github_token=github_token,
            repository=required["CONTENT_REPOSITORY"],
            secret=env.get("ENVRAC_SECRET") or None,
            content_path=env.get("CONTENT_PATH", DEFAULT_CONTENT_PATH).strip("/"),
            branch=env.get("CONTENT_BRANCH", DEFAULT_BRANCH),
            content_api_url=env.get("CONTENT_API_URL", DEFAULT_CONTENT_API_URL).rstrip("/"),
            task_api_url=env.get("TASK_API_URL", DEFAULT_TASK_API_URL).rstrip("/"),
            user_agent=env.get("ENVRAC_USER_AGENT", DEFAULT_USER_AGENT),
            timeout=_parse_timeout(env.get("HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))),
            committer_name=env.get("COMMITTER_NAME", DEFAULT_COMMITTER_NAME),
            committer_email=env.get("COMMITTER_EMAIL", DEFAULT_COMMITTER_EMAIL),
            blog_url=env.get("BLOG_URL", DEFAULT_BLOG_URL).rstrip("/"),
            year_folder=env.get("PUBLISH_YEAR_FOLDER", "true").strip().lower() in _TRUE_VALUES,
            categories_path=env.get("CATEGORIES_CONFIG") or str(DEFAULT_CATEGORIES_PATH),
        )
