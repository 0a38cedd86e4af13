from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from medtracker.core.enums import EventKind
from medtracker.schemas.events import MedicalEvent
from medtracker.services.dates import (
    InvalidDateError,
    PointQuery,
    RangeQuery,
    display_timestamp,
    parse_timestamp,
)
from medtracker.services.filters import LookupTarget


def describe_point(point: PointQuery) -> str:
    return f"on {point.prefix}"


def describe_range(range_query: RangeQuery) -> str:
    return f"for the past {range_query.period_label}"


def format_history_subject(subject_name: str, description: str) -> str:
    return f"Medical History for {subject_name} {description}"


def format_history_report(
    events: Sequence[MedicalEvent],
    *,
    subject_name: str,
    description: str,
) -> str:
    lines = [f"You have requested to see {subject_name}'s medical history {description}:", ""]
    if not events:
        lines.append("No events were recorded.")
        return "\n".join(lines) + "\n"

    for index, event in enumerate(events, start=1):
        lines.append(f"Event {index}: {event.event_label}")
        lines.append(f"Date: {display_timestamp(event.timestamp)}")
        # Only a dosage or duration line is followed by a blank separator.
        if event.dosage:
            lines.extend([f"Dosage: {event.dosage}", ""])
        elif event.duration_minutes:
            lines.extend([f"Duration: {event.duration_minutes} minutes", ""])
    return "\n".join(lines) + "\n"


def _sort_key(event: MedicalEvent) -> datetime:
    try:
        return parse_timestamp(event.timestamp)
    except InvalidDateError:
        return datetime.min


def select_most_recent(events: Sequence[MedicalEvent]) -> MedicalEvent | None:
    if not events:
        return None
    # sorted() is stable, so equal timestamps keep the order they arrived in
    return sorted(events, key=_sort_key, reverse=True)[0]


def format_lookup_answer(
    events: Sequence[MedicalEvent],
    *,
    subject_name: str,
    target: LookupTarget,
) -> str:
    latest = select_most_recent(events)
    if latest is None:
        return f"No {target.term or 'events'} found for {subject_name}."

    when = display_timestamp(latest.timestamp)
    if target.kind is EventKind.ACTIVITY:
        return f"{subject_name}'s most recent {target.term} was on {when}."
    if target.kind is EventKind.MEDICINE:
        if latest.dosage:
            return f"{subject_name} was most recently given {latest.dosage} of {target.term} on {when}."
        return f"{subject_name} was most recently given {target.term} on {when}."
    return f"{subject_name}'s most recent event was {latest.event_label} on {when}."
