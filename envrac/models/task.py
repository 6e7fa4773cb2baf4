from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .category import Category


@dataclass(slots=True)
class Task:
    content: str
    description: str
    section_id: str

    # Assigned once, right after fetching
    category: Optional[Category] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Task":
        """Build a task from one task-tracker JSON object.

        Older API versions name the key ``section``; the identifier may be an
        integer, a string or null.
        """
        section = payload.get("section_id")
        if section is None:
            section = payload.get("section")
        return cls(
            content=str(payload.get("content") or ""),
            description=str(payload.get("description") or ""),
            section_id="" if section is None else str(section),
        )
