"""
Completion detection for assistant replies.

The assistant signals that a report is ready by embedding a JSON object
carrying the completion marker, plus ``title`` and ``body``, somewhere in its
free-text reply. This module finds that object, extracts the structured data
and returns the remaining text for display.

Anything ambiguous resolves to "not complete yet" with the reply untouched,
so the conversation can simply continue.
"""

import json

from feedback_widget.services.chat.types import COMPLETION_MARKER, ChatResult, StructuredData

FALLBACK_REPLY = "Thank you! Creating your issue now..."


def find_last_object_span(content: str) -> tuple[int, int] | None:
    """
    Locate the last balanced ``{...}`` block in ``content``.

    Walks backward from the last closing brace with a depth counter, so
    braces nested inside the object (code fences in the body, for example)
    do not cut it short.

    Returns:
        (start, end) code point indices of the opening and closing braces,
        inclusive, or None if there is no closing brace or it is unmatched.
    """
    end = content.rfind("}")
    if end == -1:
        return None

    depth = 0
    for i in range(end, -1, -1):
        char = content[i]
        if char == "}":
            depth += 1
        elif char == "{":
            depth -= 1

        if depth == 0:
            return (i, end)

    return None


def _extract_structured_data(candidate: str) -> StructuredData | None:
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError):
        return None

    if not isinstance(data, dict):
        return None

    # Keys must be present and non-null
    if any(data.get(key) is None for key in (COMPLETION_MARKER, "title", "body")):
        return None

    title, body = data["title"], data["body"]
    if not isinstance(title, str) or not isinstance(body, str):
        return None

    return StructuredData(title=title, body=body)


def parse_completion(content: str) -> ChatResult:
    """Split an assistant reply into visible text and optional completion data."""
    if COMPLETION_MARKER not in content:
        return ChatResult(reply=content, is_complete=False)

    span = find_last_object_span(content)
    if span is None:
        return ChatResult(reply=content, is_complete=False)

    start, end = span
    structured = _extract_structured_data(content[start : end + 1])
    if structured is None:
        return ChatResult(reply=content, is_complete=False)

    visible_reply = (content[:start] + content[end + 1 :]).strip()

    return ChatResult(
        reply=visible_reply or FALLBACK_REPLY,
        is_complete=True,
        structured_data=structured,
    )
