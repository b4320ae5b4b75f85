"""RFC 3339 timestamp helpers."""

import calendar
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

RFC3339_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:[.,]([0-9]+))?"
    r"(Z|[+-][0-9]{2}:[0-9]{2})"
)

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _days_in_month(year: int, month: int) -> int:
    # calendar.isleap is plain arithmetic, so year 0 (a leap year) works too
    if month == 2 and calendar.isleap(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def _match_fields(value: str) -> Optional[re.Match]:
    match = RFC3339_PATTERN.fullmatch(value)
    if match is None:
        return None

    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    if not 1 <= month <= 12 or not 1 <= day <= _days_in_month(year, month):
        return None
    if hour > 23 or minute > 59 or second > 59:
        return None

    offset = match.group(8)
    if offset != "Z" and (int(offset[1:3]) > 23 or int(offset[4:6]) > 59):
        return None
    return match


def is_rfc3339(value: str) -> bool:
    """
    Check whether text is a valid RFC 3339 date-time with a mandatory offset.

    The whole string must match: digits are ASCII only, the separator is an
    upper-case "T" and the offset either "Z" or "+hh:mm"/"-hh:mm". Fractional
    seconds of any length are accepted. Years 0000 to 9999 are allowed.
    """
    return _match_fields(value) is not None


def parse_rfc3339(value: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 date-time with a mandatory offset.

    Args:
        value: Timestamp text.

    Returns:
        Timezone-aware datetime, or None if the text is not a valid timestamp
        or falls in year 0000, which datetime cannot represent.
    """
    match = _match_fields(value)
    if match is None:
        return None

    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    if year < 1:
        return None
    fraction = match.group(7) or ""
    offset = match.group(8)

    if offset == "Z":
        tz = timezone.utc
    else:
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        tz = timezone(-delta if offset[0] == "-" else delta)

    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)


def format_rfc3339(moment: datetime) -> str:
    """
    Format a datetime as RFC 3339 with second precision.

    Naive datetimes are taken as local time. A zero offset is written as "Z".
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text
