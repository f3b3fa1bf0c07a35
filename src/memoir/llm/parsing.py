"""Helpers for turning chat replies into JSON values."""

from __future__ import annotations

import json
import re
from typing import Any

from memoir.exceptions import ModelResponseError

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


def extract_content(payload: Any) -> str:
    """Return ``choices[0].message.content`` from a chat completion body."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ModelResponseError(
            f"Chat completion has no choices[0].message.content: {e!r}",
            raw_content=json.dumps(payload, ensure_ascii=False, default=str)[:2000],
        ) from e
    if content is None:
        return ""
    return str(content).strip()


def strip_json_fences(text: str) -> str:
    """Strip markdown code fences models tend to wrap JSON in."""
    text = text.strip()
    match = _JSON_FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text


def decode_json(text: str) -> Any:
    """Decode reply text as JSON. Raises ``ValueError`` on malformed input."""
    return json.loads(strip_json_fences(text))
