from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..utils.logging import get_logger
from .github_client import ContentRepository

logger = get_logger("envrac.output.publisher")

FILENAME_SUFFIX = "envrac.md"


def article_filename(today: date) -> str:
    return f"{today.isoformat()}-{FILENAME_SUFFIX}"


def article_path(content_path: str, today: date, *, year_folder: bool = True) -> str:
    """Repository path of today's article, nested under ``<YYYY>/`` when enabled."""
    parts = [p for p in (content_path.strip("/"), f"{today:%Y}" if year_folder else "") if p]
    parts.append(article_filename(today))
    return "/".join(parts)


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(encoded: str) -> str:
    return base64.b64decode(encoded).decode("utf-8")


def default_commit_message(today: date) -> str:
    return f"En vrac du {today.isoformat()}"


@dataclass(slots=True, frozen=True)
class CommitRequest:
    path: str
    message: str
    content: str
    branch: str
    committer_name: str
    committer_email: str

    @property
    def encoded_content(self) -> str:
        return encode_content(self.content)

    def to_payload(self) -> Dict[str, Any]:
        """Body of the contents API ``PUT`` for this commit."""
        identity = {"name": self.committer_name, "email": self.committer_email}
        return {
            "message": self.message,
            "committer": dict(identity),
            "author": dict(identity),
            "content": self.encoded_content,
            "branch": self.branch,
        }


def build_commit_request(
    content: str,
    today: date,
    *,
    content_path: str,
    branch: str,
    committer_name: str,
    committer_email: str,
    message: Optional[str] = None,
    year_folder: bool = True,
) -> CommitRequest:
    return CommitRequest(
        path=article_path(content_path, today, year_folder=year_folder),
        message=message or default_commit_message(today),
        content=content,
        branch=branch,
        committer_name=committer_name,
        committer_email=committer_email,
    )


def publish(repo: ContentRepository, request: CommitRequest) -> str:
    """Commit the article once. Raises ``PublishError`` on any rejection."""
    logger.info("Publishing %s (%d bytes)", request.path, len(request.content.encode("utf-8")))
    # The client base64-encodes the text exactly like ``encoded_content``
    return repo.create_file(
        request.path,
        message=request.message,
        content=request.content,
        committer_name=request.committer_name,
        committer_email=request.committer_email,
        branch=request.branch,
    )
