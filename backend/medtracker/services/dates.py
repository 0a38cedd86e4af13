"""Date resolution for slot values and the canonical timestamp format.

Every stored ``date`` attribute has the shape ``MM/DD/YYYY, HH:MM:SS`` with a
24-hour clock. Point queries match on the ``MM/DD/YYYY`` prefix, range queries
compare against a full canonical timestamp.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from dateutil import tz
from dateutil.relativedelta import relativedelta

CANONICAL_FORMAT = "%m/%d/%Y, %H:%M:%S"

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class InvalidDateError(ValueError):
    pass


@dataclass(frozen=True)
class PointQuery:
    prefix: str


@dataclass(frozen=True)
class RangeQuery:
    lower_bound: str
    period_label: str


def format_timestamp(moment: datetime) -> str:
    return (
        f"{moment.month:02d}/{moment.day:02d}/{moment.year:04d}, "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def format_date_prefix(moment: datetime) -> str:
    return f"{moment.month:02d}/{moment.day:02d}/{moment.year:04d}"


def parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value.strip(), CANONICAL_FORMAT)
    except ValueError as exc:
        raise InvalidDateError(f"Not a canonical timestamp: {value!r}") from exc


def display_timestamp(value: str) -> str:
    """Render a stored timestamp the way it is read out in reports.

    ``06/15/2024, 14:05:09`` becomes ``6/15/2024, 2:05:09 PM``. Values that do
    not parse are returned unchanged.
    """
    try:
        moment = parse_timestamp(value)
    except InvalidDateError:
        return value
    hour12 = moment.hour % 12 or 12
    meridiem = "PM" if moment.hour >= 12 else "AM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour12}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def now_in(tz_name: str) -> datetime:
    zone = tz.gettz(tz_name)
    if zone is None:
        raise InvalidDateError(f"Unknown time zone: {tz_name}")
    return datetime.now(tz=zone).replace(tzinfo=None)


def resolve_point_date(date_string: str) -> PointQuery:
    match = _ISO_DATE.match((date_string or "").strip())
    if match is None:
        raise InvalidDateError(f"Expected YYYY-MM-DD, got {date_string!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        target = datetime(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Not a calendar date: {date_string!r}") from exc
    return PointQuery(prefix=format_date_prefix(target))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def resolve_range_date(
    days: int | None = None,
    weeks: int | None = None,
    months: int | None = None,
    *,
    now: datetime,
) -> RangeQuery:
    """Lower bound for "the past N days/weeks/months".

    Only the first of ``days``, ``weeks``, ``months`` that is set is used.
    """
    if days is not None:
        target = now - timedelta(days=days)
        label = _plural(days, "day")
    elif weeks is not None:
        target = now - timedelta(days=weeks * 7)
        label = _plural(weeks, "week")
    elif months is not None:
        target = now - relativedelta(months=months)
        label = _plural(months, "month")
    else:
        raise InvalidDateError("One of days, weeks or months is required")
    return RangeQuery(lower_bound=format_timestamp(target), period_label=label)
