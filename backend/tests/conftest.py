from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

os.environ["ENVIRONMENT"] = "development"
os.environ["SENDER_EMAIL"] = "tracker@example.org"
os.environ["EVENTS_TABLE_NAME"] = "TestMedTrackerTable"
os.environ["TIMEZONE"] = "UTC"
os.environ["VERIFY_SKILL_REQUESTS"] = "false"
os.environ.pop("SKILL_ID", None)

from medtracker.core.config import get_settings
get_settings.cache_clear()
from medtracker.main import app
from medtracker.services.mailer import SesMailer
from medtracker.services.store import MedicalEventStore
from medtracker.skill.builder import build_skill, get_skill
from medtracker.skill.services import SkillServices
from skill_helpers import FIXED_NOW, FakeSes, FakeTable, ProfileStub


@pytest.fixture()
def fake_table() -> FakeTable:
    return FakeTable()


@pytest.fixture()
def fake_ses() -> FakeSes:
    return FakeSes()


@pytest.fixture()
def profile_stub() -> ProfileStub:
    return ProfileStub()


@pytest.fixture()
def skill_services(fake_table, fake_ses, profile_stub) -> SkillServices:
    settings = get_settings()
    return SkillServices(
        settings=settings,
        store=MedicalEventStore(fake_table),
        mailer=SesMailer(fake_ses, sender=settings.sender_email),
        email_lookup=profile_stub,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture()
def client(skill_services) -> TestClient:
    skill = build_skill(skill_services)
    app.dependency_overrides[get_skill] = lambda: skill
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
