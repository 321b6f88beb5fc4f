"""Portfolio data shown on the home page."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from sassify.core.logging_config import get_logger

logger = get_logger(__name__)

UTF8_BOM = "\ufeff"


def empty_projects_data() -> Dict[str, Any]:
    return {"saas": [], "technologies": []}


def get_projects_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the portfolio JSON at ``path``.

    A missing or unreadable file is logged and yields empty ``saas`` and
    ``technologies`` lists instead of failing the page.
    """
    json_path = Path(path)
    if not json_path.is_file():
        logger.warning("Portfolio JSON file not found at: %s", json_path)
        return empty_projects_data()

    try:
        content = json_path.read_text(encoding="utf-8")
        if content.startswith(UTF8_BOM):
            content = content[len(UTF8_BOM):]
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Portfolio JSON decode error in %s: %s", json_path, e)
        return empty_projects_data()

    if not isinstance(data, dict):
        logger.error("Portfolio JSON in %s is not an object", json_path)
        return empty_projects_data()

    saas = data.get("saas")
    logger.debug("Portfolio JSON loaded: %d projects", len(saas) if isinstance(saas, list) else 0)
    return data
