from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ComposedArticle:
    head: str
    body: str

    @property
    def text(self) -> str:
        return self.head + self.body
