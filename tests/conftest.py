"""Shared fixtures: settings and an in-memory content repository."""

from typing import Dict, List
from unittest.mock import Mock

import pytest

from envrac.models import Category, ContentEntry
from envrac.processors import CategoryClassifier
from envrac.utils.settings import Settings

SECTION_TABLE = {
    "181074705": Category.VIDEO,
    "179438112": Category.ARTICLE,
    "181074629": Category.TOOL,
    "184011119": Category.PODCAST,
    "184719314": Category.BOOK,
}


class FakeContentRepository:
    """Directory listings keyed by path; records created files."""

    def __init__(self, tree: Dict[str, List[ContentEntry]]):
        self.tree = tree
        self.listed: List[str] = []
        self.created: List[dict] = []

    def list_dir(self, path: str) -> List[ContentEntry]:
        self.listed.append(path)
        return list(self.tree.get(path, []))

    def create_file(self, path, *, message, content, committer_name, committer_email, branch=None):
        self.created.append(
            {
                "path": path,
                "message": message,
                "content": content,
                "committer": (committer_name, committer_email),
                "branch": branch,
            }
        )
        return "abc1234def"


def files(*names: str) -> List[ContentEntry]:
    return [ContentEntry(name=n, type="file") for n in names]


def dirs(*names: str) -> List[ContentEntry]:
    return [ContentEntry(name=n, type="dir") for n in names]


def tasks_response(payload, status_code: int = 200, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text or str(payload)
    return response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        todoist_token="todo-token",
        project_id="2332182173",
        github_token="gh-token",
        repository="owner/blog",
        secret="s3cret",
        content_path="content/en-vracs",
        branch="main",
    )


@pytest.fixture
def classifier() -> CategoryClassifier:
    return CategoryClassifier(SECTION_TABLE)
