from __future__ import annotations

import json
import math
from typing import List, Optional

import requests
from github import Auth, Github, GithubException, InputGitAuthor

from ..errors import PublishError, UpstreamError, UpstreamTimeoutError
from ..models import ContentEntry
from ..utils.logging import get_logger

logger = get_logger("envrac.output.github")

_SERVICE = "content host"

DEFAULT_CONTENT_API_URL = "https://api.github.com"


def _error_body(exc: GithubException) -> str:
    data = getattr(exc, "data", None)
    if isinstance(data, (dict, list)):
        return json.dumps(data, ensure_ascii=False)
    return str(data if data is not None else exc)


class ContentRepository:
    """Read and write access to the blog's content repository.

    Every call is a single request with the configured timeout; nothing is
    retried.
    """

    def __init__(
        self,
        *,
        token: str,
        repo: str,
        user_agent: str,
        branch: str = "main",
        base_url: str = DEFAULT_CONTENT_API_URL,
        timeout: float = 30,
        client: Optional[Github] = None,
    ) -> None:
        self.repo_name = repo
        self.branch = branch
        self._client = client or Github(
            auth=Auth.Token(token),
            base_url=base_url,
            user_agent=user_agent,
            # PyGithub takes whole seconds; round up so the deadline never hits 0
            timeout=max(1, math.ceil(timeout)),
            retry=None,
        )
        self._repo = self._client.get_repo(repo, lazy=True)

    def list_dir(self, path: str) -> List[ContentEntry]:
        logger.debug("Listing %s@%s:%s", self.repo_name, self.branch, path)
        try:
            contents = self._repo.get_contents(path, ref=self.branch)
        except GithubException as exc:
            body = _error_body(exc)
            logger.error("Listing %s failed (%s): %s", path, exc.status, body)
            raise UpstreamError(exc.status, body, service=_SERVICE) from exc
        except requests.Timeout as exc:
            logger.error("Listing %s timed out: %s", path, exc)
            raise UpstreamTimeoutError(str(exc), service=_SERVICE) from exc
        except requests.RequestException as exc:
            raise UpstreamError(None, str(exc), service=_SERVICE) from exc

        if not isinstance(contents, list):
            contents = [contents]
        entries = [ContentEntry(name=c.name, type=c.type, path=c.path) for c in contents]
        logger.info("Listed %d entries under %s", len(entries), path)
        return entries

    def create_file(
        self,
        path: str,
        *,
        message: str,
        content: str,
        committer_name: str,
        committer_email: str,
        branch: Optional[str] = None,
    ) -> str:
        """Commit a new file and return the commit sha.

        An existing file at ``path`` is a remote-reported failure.
        """
        identity = InputGitAuthor(committer_name, committer_email)
        branch = branch or self.branch
        logger.debug("Creating %s@%s", path, branch)
        try:
            result = self._repo.create_file(
                path,
                message,
                content,
                branch=branch,
                committer=identity,
                author=identity,
            )
        except GithubException as exc:
            body = _error_body(exc)
            logger.error("Commit of %s rejected (%s): %s", path, exc.status, body)
            raise PublishError(exc.status, body, service=_SERVICE) from exc
        except requests.Timeout as exc:
            logger.error("Commit of %s timed out: %s", path, exc)
            raise UpstreamTimeoutError(str(exc), service=_SERVICE) from exc
        except requests.RequestException as exc:
            raise PublishError(None, str(exc), service=_SERVICE) from exc

        commit = result.get("commit") if isinstance(result, dict) else None
        sha = getattr(commit, "sha", "") or ""
        logger.info("Created %s@%s (commit %s)", path, branch, sha[:7] or "?")
        return sha
