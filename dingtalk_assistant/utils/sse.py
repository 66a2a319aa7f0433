"""Parsing of buffered server-sent-event answers."""

import json
import re
from collections.abc import Iterator

from dingtalk_assistant.models.conversation import SSEMessage
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

DATA_PREFIX = "data:"

# A JSON array of one or more double-quoted strings at the very end of the text.
# The remote service appends its follow-up questions this way, with no separator.
_TRAILING_STRING_ARRAY = re.compile(
    r'\[\s*"(?:[^"\\]|\\.)+"(?:\s*,\s*"(?:[^"\\]|\\.)+")*\s*\]\s*$',
)


def iter_sse_messages(raw: str) -> Iterator[SSEMessage]:
    """Yield the messages carried by the `data:` lines of an SSE body.

    JSON objects are decoded into messages, payloads that are not JSON are
    passed through verbatim as `raw` messages, and JSON values that are not
    objects carry no text and are dropped.
    """
    for line in raw.split("\n"):
        if not line.startswith(DATA_PREFIX):
            continue

        payload = line[len(DATA_PREFIX) :].strip()
        if not payload:
            continue

        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError:
            yield SSEMessage(data=payload, type="raw")
            continue

        if not isinstance(decoded, dict):
            logger.debug(f"Skipping non-object SSE payload: {payload[:50]}")
            continue

        data = decoded.get("data")
        yield SSEMessage(
            data=str(data) if data else "",
            type=str(decoded.get("type") or ""),
            in_dialog=decoded.get("inDialog"),
        )


def parse_sse_response(raw: str) -> str:
    """Concatenate the text of every SSE message in line order."""
    return "".join(message.data for message in iter_sse_messages(raw) if message.data)


def split_follow_ups(text: str) -> tuple[str, list[str]]:
    """Split an answer into its body and the trailing follow-up question array.

    Returns:
        The trimmed answer without the array, and the decoded questions. When
        there is no trailing array, or it does not decode, the whole trimmed
        text is returned with an empty list.
    """
    match = _TRAILING_STRING_ARRAY.search(text)
    if not match:
        return text.strip(), []

    try:
        follow_ups = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning(f"Trailing follow-up array is not valid JSON: {match.group(0)[:80]}")
        return text.strip(), []

    return text[: match.start()].strip(), [str(question) for question in follow_ups]


def extract_follow_ups(text: str) -> list[str]:
    """Return the follow-up questions appended to an answer."""
    return split_follow_ups(text)[1]


def clean_answer(text: str) -> str:
    """Return the answer without its trailing follow-up questions."""
    return split_follow_ups(text)[0]
