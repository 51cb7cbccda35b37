"""Parse and format the timestamps found in Markdown front matter."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from .config import DATE_FORMAT, DATE_INPUT_FORMATS

logger = logging.getLogger(__name__)

# A full date and at least hours:minutes; bare dates are not timestamps
ISO_DATE_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")


def parse_date(text: str) -> datetime | None:
    """Try ISO 8601 date-time first, then each of DATE_INPUT_FORMATS.

    Offsets are dropped so the result is always a naive local datetime.
    Returns None if nothing matches.
    """
    text = text.strip()
    if not text:
        return None

    if not ISO_DATE_TIME_RE.match(text):
        logger.debug("Unrecognised date %r", text)
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        pass

    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    logger.debug("Unrecognised date %r", text)
    return None


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)
