"""Locate the JSON object inside a provider reply.

JSON mode usually yields a bare object, but models still occasionally wrap
it in a markdown fence or lead with a sentence.  Candidates are tried from
most to least literal; the first one that decodes to an object wins.
"""

import json
import re
from collections.abc import Iterator

_FENCE_RE = re.compile(r"```(?:json)?[^\S\n]*\n(.*?)\n```", re.DOTALL | re.IGNORECASE)


def _candidates(text: str) -> Iterator[str]:
    yield text
    yield from _FENCE_RE.findall(text)
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        yield text[start : end + 1]


def extract_json(response_text: str) -> dict | None:
    """Return the first JSON object found in *response_text*.

    A reply whose whole body is valid JSON but not an object (an array, a
    number) is rejected outright rather than searched for a nested object.

    Returns:
        The decoded dict, or ``None`` when the reply holds no JSON object.
    """
    if not response_text or not response_text.strip():
        return None

    for index, candidate in enumerate(_candidates(response_text)):
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
        if index == 0:
            return None
    return None
