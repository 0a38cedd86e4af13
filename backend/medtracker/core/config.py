from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "MedTracker Skill"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # SES and DynamoDB historically live in different regions for this skill.
    aws_region: str = "us-east-1"
    dynamodb_region: str = "us-east-2"
    events_table_name: str = "MyMedTrackerTable"

    sender_email: str = ""
    skill_id: str | None = None
    timezone: str = "UTC"

    profile_timeout_seconds: float = Field(default=5.0, gt=0)
    verify_skill_requests: bool = True

    @property
    def is_local_dev(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
