from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ..errors import ConfigurationError
from ..models import Category

DEFAULT_CATEGORIES_PATH = Path(__file__).resolve().parent.parent / "config" / "categories.yaml"

_CATEGORY_NAMES = {c.value: c for c in Category.publishable()}


def parse_category_table(data: Mapping[str, Any]) -> Dict[str, Category]:
    """Turn the ``categories`` mapping into a section-id lookup table.

    Expected shape::

        categories:
          Video: ["181074705"]
          Article: [179438112]

    Identifiers are compared as strings. ``Deferred`` cannot be listed: it is
    whatever the table does not name.
    """
    raw = data.get("categories")
    if not isinstance(raw, dict):
        raise ConfigurationError("'categories' must be a mapping of category name to section ids")

    table: Dict[str, Category] = {}
    for name, ids in raw.items():
        category = _CATEGORY_NAMES.get(str(name))
        if category is None:
            raise ConfigurationError(
                f"Unknown category '{name}'. Allowed: {sorted(_CATEGORY_NAMES)}"
            )
        if ids is None:
            continue
        if not isinstance(ids, list):
            raise ConfigurationError(f"Section ids for '{name}' must be a list")
        for section_id in ids:
            key = str(section_id).strip()
            previous = table.get(key)
            if previous is not None and previous is not category:
                raise ConfigurationError(
                    f"Section id {key} is mapped to both {previous.value} and {category.value}"
                )
            table[key] = category
    return table


def load_category_table(path: Path | str) -> Dict[str, Category]:
    """Load the section-to-category table from a YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Category config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Category config must be a mapping: {config_path}")
    return parse_category_table(data)
