"""Recovering a JSON object from LLM output.

Generative models routinely wrap JSON in Markdown fences or add a sentence
before it, even when asked not to. These helpers undo that before parsing.
"""

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\n?(.*?)```", re.DOTALL)
_STRAY_FENCE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\n?")


def extract_json_text(text: str) -> str:
    """Return the JSON portion of possibly-fenced model output.

    Order of attempts:
      1. The body of the first ```json / ``` fenced block
      2. The text with any stray fence markers removed
      3. If that still doesn't start with ``{``, the span from the first
         ``{`` to the last ``}``

    The result is not guaranteed to be valid JSON.
    """
    stripped = text.strip()

    match = _FENCED_BLOCK.search(stripped)
    if match:
        candidate = match.group(1).strip()
    else:
        candidate = _STRAY_FENCE.sub("", stripped).strip()

    if candidate.startswith("{"):
        return candidate

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start != -1 and end > start:
        return candidate[start:end + 1]
    return candidate


def parse_json_object(text: str) -> dict[str, Any]:
    """Extract and decode a JSON object from model output.

    Raises:
        json.JSONDecodeError: If the extracted text is not valid JSON.
        TypeError: If it is valid JSON but not an object.
    """
    data = json.loads(extract_json_text(text))
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    return data
