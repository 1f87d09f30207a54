"""ISO-8601 date-time parsing.

Submission dates are written by the data collection server as offset-aware
ISO-8601 values, e.g. ``2020-01-01T00:00:00.000+00:00``.
"""

import logging
import re
from datetime import datetime

from xform_submissions.utils.exceptions import MalformedDateError

logger = logging.getLogger(__name__)

# "+0000" style offsets at the end of the value
_COMPACT_OFFSET = re.compile(r"([+-])(\d{2})(\d{2})$")


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date-time with a UTC offset.

    Accepts "Z", "+HH:MM" and "+HHMM" offsets and optional fractional seconds.

    Args:
        value: Raw ISO-8601 string

    Returns:
        Offset-aware datetime

    Raises:
        MalformedDateError: If the value is not ISO-8601 or carries no offset

    Example:
        >>> parse_datetime("2020-01-01T00:00:00.000+00:00")
        datetime.datetime(2020, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    if "T" in normalized:
        normalized = _COMPACT_OFFSET.sub(r"\1\2:\3", normalized)

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError as e:
        logger.debug("Rejected date-time value %r: %s", value, e)
        raise MalformedDateError(value) from e

    if parsed.tzinfo is None:
        raise MalformedDateError(value, "missing UTC offset")

    return parsed
