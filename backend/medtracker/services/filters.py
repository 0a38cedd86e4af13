from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from boto3.dynamodb.conditions import Attr, ConditionBase, Key

from medtracker.core.enums import EventKind
from medtracker.schemas.events import medicine_label
from medtracker.services.dates import PointQuery, RangeQuery

SUBJECT_KEY_ATTR = "userid"
TIMESTAMP_ATTR = "date"
EVENT_LABEL_ATTR = "event"


@dataclass(frozen=True)
class EventQuery:
    key_condition: ConditionBase
    filter_expression: ConditionBase | None = None

    def as_query_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"KeyConditionExpression": self.key_condition}
        if self.filter_expression is not None:
            kwargs["FilterExpression"] = self.filter_expression
        return kwargs


@dataclass(frozen=True)
class LookupTarget:
    kind: EventKind | None
    term: str | None
    needle: str | None


def build_point_query(subject_key: str, point: PointQuery) -> EventQuery:
    return EventQuery(
        key_condition=Key(SUBJECT_KEY_ATTR).eq(subject_key)
        & Key(TIMESTAMP_ATTR).begins_with(point.prefix)
    )


def build_range_query(subject_key: str, range_query: RangeQuery) -> EventQuery:
    return EventQuery(
        key_condition=Key(SUBJECT_KEY_ATTR).eq(subject_key)
        & Key(TIMESTAMP_ATTR).gt(range_query.lower_bound)
    )


def resolve_lookup_target(*, activity: str | None = None, medicine: str | None = None) -> LookupTarget:
    if activity:
        return LookupTarget(kind=EventKind.ACTIVITY, term=activity, needle=activity)
    if medicine:
        return LookupTarget(kind=EventKind.MEDICINE, term=medicine, needle=medicine_label(medicine))
    return LookupTarget(kind=None, term=None, needle=None)


def build_lookup_query(
    subject_key: str,
    *,
    activity: str | None = None,
    medicine: str | None = None,
) -> tuple[EventQuery, LookupTarget]:
    """Query for "when did X last happen", activity taking precedence over medicine."""
    target = resolve_lookup_target(activity=activity, medicine=medicine)
    key_condition = Key(SUBJECT_KEY_ATTR).eq(subject_key)
    if target.needle is None:
        return EventQuery(key_condition=key_condition), target
    return (
        EventQuery(
            key_condition=key_condition,
            filter_expression=Attr(EVENT_LABEL_ATTR).contains(target.needle),
        ),
        target,
    )
