"""Article rendering and publication to the content repository."""

from .article_formatter import compose_article, compose_body, compose_head, day_label
from .github_client import ContentRepository
from .publisher import CommitRequest, build_commit_request, encode_content, publish

__all__ = [
    "compose_article",
    "compose_body",
    "compose_head",
    "day_label",
    "ContentRepository",
    "CommitRequest",
    "build_commit_request",
    "encode_content",
    "publish",
]
