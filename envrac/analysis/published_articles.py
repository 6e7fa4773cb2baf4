from __future__ import annotations

from typing import List, Protocol, Tuple

from ..errors import InsufficientHistoryError
from ..models import ContentEntry, PublishedArticleRef
from ..utils.logging import get_logger

logger = get_logger("envrac.analysis.published")

INDEX_FILE = "_index.md"
_WANTED = 2


class DirectoryLister(Protocol):
    def list_dir(self, path: str) -> List[ContentEntry]: ...


def _article_files(entries: List[ContentEntry]) -> List[ContentEntry]:
    return [e for e in entries if e.type == "file" and e.name != INDEX_FILE]


def find_last_two(
    lister: DirectoryLister,
    content_path: str,
) -> Tuple[PublishedArticleRef, PublishedArticleRef]:
    """Return the two most recently named articles, newest first.

    The content directory is either flat or split into year folders. With
    year folders, the two newest are visited newest first until two article
    files have been collected; if they hold fewer, the flat files left at the
    top level from before the split are added. Names start with a zero-padded
    date, so lexicographic order is chronological.
    """
    root = content_path.strip("/")
    top = lister.list_dir(root)
    year_dirs = sorted((e for e in top if e.is_dir), key=lambda e: e.name, reverse=True)

    candidates: List[Tuple[ContentEntry, str | None]] = []
    if not year_dirs:
        candidates = [(e, None) for e in _article_files(top)]
    else:
        for year_dir in year_dirs[:_WANTED]:
            path = f"{root}/{year_dir.name}" if root else year_dir.name
            files = _article_files(lister.list_dir(path))
            logger.debug("Found %d article(s) in %s", len(files), path)
            candidates.extend((e, year_dir.name) for e in files)
            if len(candidates) >= _WANTED:
                break
        if len(candidates) < _WANTED:
            flat = _article_files(top)
            logger.debug("Adding %d top-level article(s) under %s", len(flat), root)
            candidates.extend((e, None) for e in flat)

    candidates.sort(key=lambda c: c[0].name, reverse=True)
    if len(candidates) < _WANTED:
        raise InsufficientHistoryError(len(candidates))

    first, second = (PublishedArticleRef.from_entry(e.name, year=year) for e, year in candidates[:_WANTED])
    logger.info("Last published articles: %s, %s", first.name, second.name)
    return first, second
