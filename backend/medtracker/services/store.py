from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from medtracker.core.config import Settings
from medtracker.schemas.events import MedicalEvent
from medtracker.services.filters import EventQuery

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


class MedicalEventStore:
    def __init__(self, table: Any) -> None:
        self._table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> MedicalEventStore:
        dynamodb = boto3.resource("dynamodb", region_name=settings.dynamodb_region)
        return cls(dynamodb.Table(settings.events_table_name))

    def put_event(self, event: MedicalEvent) -> None:
        try:
            self._table.put_item(Item=event.to_item())
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to write event for {event.subject_key}") from exc
        logger.info("Stored event %r at %s", event.event_label, event.timestamp)

    def query_events(self, query: EventQuery) -> list[MedicalEvent]:
        kwargs = query.as_query_kwargs()
        items: list[dict[str, Any]] = []
        try:
            while True:
                page = self._table.query(**kwargs)
                items.extend(page.get("Items", []))
                last_key = page.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("Failed to query events") from exc
        logger.info("Query returned %d event(s)", len(items))
        return [MedicalEvent.from_item(item) for item in items]
