from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

# YYYY-MM-DD[(T| )HH:MM[:SS[.fff]]][±HH:MM]; basic and week-date forms are refused.
_ISO_EXTENDED = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?"
    r"(?:[+-]\d{2}:\d{2})?$"
)


def parse_instant(value: str) -> datetime:
    """
    Parse a timestamp string into a timezone-aware instant.

    Accepts ISO-8601 extended dates/date-times (with or without offset,
    "Z" suffix allowed) and RFC 2822 dates. Naive values are taken as UTC.

    Raises ValueError when the string cannot be parsed.
    """
    text = value.strip()
    if not text:
        raise ValueError("timestamp is empty")

    iso_text = text[:-1] + "+00:00" if text[-1] in ("Z", "z") else text
    if _ISO_EXTENDED.match(iso_text):
        # Well-formed shape but impossible values (month 13) still fail here.
        parsed = datetime.fromisoformat(iso_text)
    else:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError) as exc:
            raise ValueError(f"unparsable timestamp: {value!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
