"""Extraction of a single JSON object from free-form model output."""

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def find_balanced_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` substring of text, or None.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Parse the first JSON object found in text.

    A ```json fenced block wins over bare text. Returns None when no object
    can be located or the located text is not a JSON object.
    """
    match = _FENCED_BLOCK.search(text)
    candidate = find_balanced_object(match.group(1)) if match else None
    if candidate is None:
        candidate = find_balanced_object(text)
    if candidate is None:
        return None

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
