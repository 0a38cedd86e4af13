from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medtracker.core.enums import EventKind

MEDICINE_LABEL_PREFIX = "Medicine Given - "

# Rows written by the first version of the skill used "-1" for missing slots.
_ABSENT_MARKERS = {"", "-1"}


def medicine_label(medicine_name: str) -> str:
    return f"{MEDICINE_LABEL_PREFIX}{medicine_name}"


class MedicalEvent(BaseModel):
    """One row of the events table.

    Field aliases are the attribute names stored in DynamoDB.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    subject_key: str = Field(alias="userid")
    timestamp: str = Field(alias="date")
    event_label: str = Field(alias="event")
    dosage: str | None = None
    duration_minutes: str | None = Field(default=None, alias="duration")

    @field_validator("dosage", "duration_minutes", mode="before")
    @classmethod
    def _absent_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if text in _ABSENT_MARKERS:
            return None
        return text

    @property
    def kind(self) -> EventKind | None:
        if self.dosage:
            return EventKind.MEDICINE
        if self.duration_minutes:
            return EventKind.ACTIVITY
        return None

    def to_item(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> MedicalEvent:
        return cls.model_validate(item)
