# quizgen/services/output_parser.py
import json
from typing import Any

import json_repair


def repair_and_parse(text: str) -> Any:
    """
    Coerces near-JSON model output (single quotes, trailing commas, prose or
    markdown fences around the payload, truncated brackets) into a Python value.
    Raises ValueError when nothing parseable can be recovered.
    """
    repaired = json_repair.repair_json(text)
    return json.loads(repaired)


def excerpt(text: str | None, limit: int = 200) -> str | None:
    """First `limit` characters of a raw response, marked as truncated."""
    if not text:
        return None
    return text[:limit] + "..."
