"""Parsing of model replies into session summaries.

Vision models do not reliably follow output instructions. Replies are
normalized before validation: markdown fences are stripped, missing
timestamps are filled in and inverted time ranges are collapsed.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

from pydantic import ValidationError

from sessionsight.domain.models import SessionSummary
from sessionsight.providers.base import MalformedResponseError, SchemaMismatchError

logger = logging.getLogger(__name__)

FENCE = "```"

_LANGUAGE_TAG = re.compile(r"[A-Za-z][\w+-]*")


def extract_json_text(raw: str) -> str:
    """Isolate the JSON payload of a reply.

    Only the first fenced block is considered. A fence without a closing
    marker is ignored and the whole trimmed reply is used.
    """
    text = raw.strip()
    start = text.find(FENCE)
    if start == -1:
        return text

    body = text[start + len(FENCE):]
    tag = _LANGUAGE_TAG.match(body)
    if tag:
        body = body[tag.end():]

    end = body.find(FENCE)
    if end == -1:
        return text
    return body[:end].strip()


def parse_session_summary(
    raw: str,
    now: datetime | None = None,
    provider: str = "",
) -> SessionSummary:
    """Parse a raw model reply into a SessionSummary.

    The model cannot know absolute time, so ``start_time`` and
    ``end_time`` are placeholders when it omits them or returns an
    inverted range: both become ``now``. Callers holding the real
    session range should overwrite them.

    Args:
        raw: The reply text exactly as returned by the model.
        now: Timestamp used for repairs. Defaults to the current UTC time.
        provider: Provider name attached to raised errors.

    Raises:
        MalformedResponseError: If the reply holds no valid JSON.
        SchemaMismatchError: If the JSON does not fit the schema.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    json_text = extract_json_text(raw)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Response is not valid JSON: {e}; raw={raw}",
            provider=provider,
            raw_response=raw,
        ) from e

    if isinstance(data, dict):
        for field in ("start_time", "end_time"):
            if field not in data:
                data[field] = now.isoformat()

    try:
        summary = SessionSummary.model_validate(data)
    except ValidationError as e:
        raise SchemaMismatchError(
            f"Response does not match the session summary schema: {e}",
            provider=provider,
            raw_response=raw,
        ) from e

    if summary.start_time > summary.end_time:
        logger.debug(
            "Inverted time range %s > %s, resetting to now",
            summary.start_time,
            summary.end_time,
        )
        summary = summary.model_copy(update={"start_time": now, "end_time": now})
    return summary
