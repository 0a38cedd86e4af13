from __future__ import annotations

import pytest

from medtracker.schemas.events import MedicalEvent
from medtracker.services.dates import PointQuery
from medtracker.services.filters import build_lookup_query, build_point_query
from medtracker.services.mailer import EmailDeliveryError, EmailMessage, SesMailer
from medtracker.services.store import MedicalEventStore, StorageError
from skill_helpers import FakeSes, FakeTable, client_error


def test_event_item_uses_table_attribute_names():
    event = MedicalEvent(
        subject_key="U1#Bob",
        timestamp="06/15/2024, 08:00:00",
        event_label="Medicine Given - Aspirin",
        dosage="5mg",
    )
    assert event.to_item() == {
        "userid": "U1#Bob",
        "date": "06/15/2024, 08:00:00",
        "event": "Medicine Given - Aspirin",
        "dosage": "5mg",
    }


def test_legacy_sentinel_values_read_as_absent():
    event = MedicalEvent.from_item(
        {"userid": "U1#Bob", "date": "06/15/2024, 08:00:00", "event": "nap", "duration": "-1"}
    )
    assert event.duration_minutes is None
    assert event.kind is None


def test_put_then_query_roundtrip():
    table = FakeTable()
    store = MedicalEventStore(table)
    store.put_event(
        MedicalEvent(subject_key="U1#Bob", timestamp="06/15/2024, 08:00:00", event_label="nap", duration_minutes="20")
    )
    store.put_event(
        MedicalEvent(subject_key="U1#Alice", timestamp="06/15/2024, 09:00:00", event_label="nap", duration_minutes="5")
    )

    events = store.query_events(build_point_query("U1#Bob", PointQuery(prefix="06/15/2024")))
    assert [e.subject_key for e in events] == ["U1#Bob"]
    assert events[0].duration_minutes == "20"


def test_query_follows_pagination():
    table = FakeTable(page_size=2)
    store = MedicalEventStore(table)
    for minute in range(5):
        store.put_event(
            MedicalEvent(subject_key="U1#Bob", timestamp=f"06/15/2024, 08:0{minute}:00", event_label="nap")
        )

    query, _ = build_lookup_query("U1#Bob")
    events = store.query_events(query)
    assert len(events) == 5
    assert len(table.queries) == 3


def test_storage_errors_are_wrapped():
    table = FakeTable()
    table.fail_with = client_error("PutItem")
    store = MedicalEventStore(table)
    with pytest.raises(StorageError):
        store.put_event(MedicalEvent(subject_key="U1#Bob", timestamp="06/15/2024, 08:00:00", event_label="nap"))

    query, _ = build_lookup_query("U1#Bob")
    with pytest.raises(StorageError):
        store.query_events(query)


def test_mailer_sends_plain_text_message():
    ses = FakeSes()
    mailer = SesMailer(ses, sender="tracker@example.org")
    message_id = mailer.send(EmailMessage(recipient="me@example.org", subject="Hi", body="Body"))

    assert message_id == "msg-1"
    sent = ses.sent[0]
    assert sent["Source"] == "tracker@example.org"
    assert sent["Destination"] == {"ToAddresses": ["me@example.org"]}
    assert sent["Message"]["Subject"]["Data"] == "Hi"
    assert sent["Message"]["Body"]["Text"]["Data"] == "Body"


def test_mailer_wraps_delivery_failures():
    ses = FakeSes()
    ses.fail = True
    mailer = SesMailer(ses, sender="tracker@example.org")
    with pytest.raises(EmailDeliveryError):
        mailer.send(EmailMessage(recipient="me@example.org", subject="Hi", body="Body"))
