from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

EntryKind = Literal["file", "dir"]

_MARKDOWN_EXTENSION = ".md"


@dataclass(slots=True, frozen=True)
class ContentEntry:
    """One item of a content-host directory listing."""

    name: str
    type: EntryKind
    path: str = ""

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


@dataclass(slots=True, frozen=True)
class PublishedArticleRef:
    """A previously published article, as linked from the new one."""

    name: str
    date: str
    year: Optional[str] = None

    @classmethod
    def from_entry(cls, entry_name: str, *, year: Optional[str] = None) -> "PublishedArticleRef":
        name = entry_name
        if name.lower().endswith(_MARKDOWN_EXTENSION):
            name = name[: -len(_MARKDOWN_EXTENSION)]
        name = name.lower()
        return cls(name=name, date=name[:10], year=year)

    @property
    def year_prefix(self) -> str:
        return self.name[:4]
