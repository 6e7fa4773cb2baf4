"""Exception hierarchy shared by every stage of the pipeline."""

from __future__ import annotations

from typing import Optional


class EnVracError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(EnVracError):
    """Raised when a required setting is missing or the category table is invalid."""


class AuthorizationError(EnVracError):
    """Raised when the caller-supplied trigger secret does not match."""


class InsufficientHistoryError(EnVracError):
    """Raised when fewer than two published articles can be found."""

    def __init__(self, found: int) -> None:
        super().__init__(f"Need at least two published articles, found {found}")
        self.found = found


class UpstreamError(EnVracError):
    """Non-2xx answer (or unusable payload) from a remote API.

    ``body`` keeps the remote error text verbatim for diagnostics.
    """

    def __init__(self, status: Optional[int], body: str, *, service: str = "upstream") -> None:
        super().__init__(f"{service} returned {status}: {body}")
        self.status = status
        self.body = body
        self.service = service


class UpstreamTimeoutError(UpstreamError):
    """The remote API did not answer before the per-call deadline."""

    def __init__(self, body: str, *, service: str = "upstream") -> None:
        super().__init__(None, body, service=service)


class PublishError(UpstreamError):
    """The content host rejected the commit of the new article."""
