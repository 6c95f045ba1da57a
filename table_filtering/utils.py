"""
Value helpers shared by the evaluator, the comparator and the facet counter.
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional

_DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')

DAY_SECONDS = 24 * 60 * 60


def is_number(value: Any) -> bool:
    """int or float, but not bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify(value: Any) -> str:
    """
    Render an accessor result as a string the way a table cell shows it.

    None -> "", booleans -> "true"/"false", integral floats drop the ".0".

    Example:
        stringify(3.0)   # "3"
        stringify(True)  # "true"
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_truthy(value: Any) -> bool:
    """Falsy set: None, False, 0, "", NaN."""
    if value is None or value is False or value == "":
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    return True


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an accessor result into a local naive datetime.

    Accepts ISO-8601 strings, datetime and date objects. A date-only string
    such as "2024-05-15" is UTC midnight; other naive strings are local.
    Aware values are converted to local time. Anything else, or an
    unparseable string, returns None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        if _DATE_ONLY.match(value.strip()):
            parsed = parsed.replace(tzinfo=timezone.utc)
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def date_buckets(value: Any, now: datetime) -> List[str]:
    """
    Return every date-preset bucket a value falls into at instant `now`.

    Buckets overlap: "today" and "this_week" can both hold. A missing or
    unparseable value falls only into "never". Weeks start on Sunday.
    """
    parsed = parse_date(value)
    if parsed is None:
        return ["never"]

    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    # datetime.weekday() is Monday=0; shift so Sunday is day 0
    week_start = today_start - timedelta(days=(today_start.weekday() + 1) % 7)
    age_days = math.floor((now - parsed).total_seconds() / DAY_SECONDS)

    buckets = []
    if age_days == 0 or parsed >= today_start:
        buckets.append("today")
    if parsed >= week_start:
        buckets.append("this_week")
    if age_days >= 7:
        buckets.append("7plus_days")
    return buckets
