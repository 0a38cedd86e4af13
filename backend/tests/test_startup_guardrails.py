from __future__ import annotations

import pytest

from medtracker.core.config import Settings
from medtracker.core.startup_guardrails import StartupGuardrailError, validate_startup_guardrails


def test_guardrail_allows_development_without_sender_or_skill_id():
    settings = Settings(environment="development", sender_email="", skill_id=None)
    validate_startup_guardrails(settings)


def test_guardrail_rejects_missing_sender_in_non_dev():
    settings = Settings(environment="production", sender_email="", skill_id="amzn1.ask.skill.prod")
    with pytest.raises(StartupGuardrailError, match="SENDER_EMAIL"):
        validate_startup_guardrails(settings)


def test_guardrail_rejects_missing_skill_id_in_non_dev():
    settings = Settings(environment="staging", sender_email="tracker@example.org", skill_id=None)
    with pytest.raises(StartupGuardrailError, match="SKILL_ID"):
        validate_startup_guardrails(settings)


def test_guardrail_rejects_disabled_request_verification_in_non_dev():
    settings = Settings(
        environment="production",
        sender_email="tracker@example.org",
        skill_id="amzn1.ask.skill.prod",
        verify_skill_requests=False,
    )
    with pytest.raises(StartupGuardrailError, match="VERIFY_SKILL_REQUESTS"):
        validate_startup_guardrails(settings)


def test_guardrail_rejects_unknown_timezone():
    settings = Settings(environment="development", timezone="Mars/Olympus_Mons")
    with pytest.raises(StartupGuardrailError, match="not a known time zone"):
        validate_startup_guardrails(settings)


def test_guardrail_accepts_complete_non_dev_settings():
    settings = Settings(
        environment="production",
        sender_email="tracker@example.org",
        skill_id="amzn1.ask.skill.prod",
        timezone="America/New_York",
        verify_skill_requests=True,
    )
    validate_startup_guardrails(settings)
