"""Strip markdown fences from raw model replies."""

from __future__ import annotations

import re

# language tag ends at the first newline
_FENCE_PATTERN = re.compile(r"^```(\w*)[ \t]*\n(.*?)\n?[ \t]*```$", re.DOTALL)
_INLINE_FENCE_PATTERN = re.compile(r"^```(.*?)```$", re.DOTALL)


def extract_json_payload(raw: str) -> str:
    """Return the candidate payload inside ``raw``.

    A reply wrapped in a fenced code block (with or without a language tag)
    yields the trimmed inner text, which may be empty; anything else is
    returned trimmed. No JSON validation happens here.
    """

    text = (raw or "").strip()
    match = _FENCE_PATTERN.match(text)
    if match:
        return match.group(2).strip()
    match = _INLINE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text


# plain-text exports arrive with the same fencing habits
strip_code_fence = extract_json_payload
