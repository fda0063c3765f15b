"""
Derived listing fields - pure functions recomputed on every read, never stored.
Challenge: Deterministic output for tests; no hidden clock reads.
Design: "now" is always a parameter; callers decide where time comes from.
"""

import re
from datetime import datetime, timezone

import pendulum

LINE_BREAK_MARKER = "<br />"
SHORT_DESCRIPTION_LENGTH = 10
TRUNCATION_MARKER = "..."

_LINE_BREAK = re.compile(r"\r\n|\n\r|\n|\r")


def normalize_description(text: str | None) -> str | None:
    """Replace raw line breaks with the explicit marker. Idempotent: the marker contains no line break.

    Non-string values pass through untouched; the type rule reports them.
    """
    if not isinstance(text, str):
        return text
    return _LINE_BREAK.sub(LINE_BREAK_MARKER, text)


def short_description(description: str | None) -> str | None:
    """First 10 characters of the stored description plus "..." when longer.

    Counts characters (code points), not encoded bytes, so multi-byte text is
    never cut inside a character.
    """
    if description is None:
        return None
    if len(description) < SHORT_DESCRIPTION_LENGTH:
        return description
    return description[:SHORT_DESCRIPTION_LENGTH] + TRUNCATION_MARKER


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def created_at_ago(created_at: datetime | None, now: datetime) -> str | None:
    """Human-relative rendering of created_at as seen from now ("3 hours ago", "in 2 days").

    Same output as pendulum's diff_for_humans() against the clock, but with now
    passed in. Naive datetimes (SQLite hands them back) are read as UTC.
    """
    if created_at is None:
        return None
    diff = pendulum.instance(created_at).diff(pendulum.instance(now), abs=False)
    return pendulum.format_diff(diff, is_now=True)
