from __future__ import annotations

from dateutil import tz

from medtracker.core.config import Settings


class StartupGuardrailError(RuntimeError):
    pass


PLACEHOLDER_SENDERS = {
    "",
    "changeme@example.com",
    "sender@example.com",
    "test-sender@example.com",
}


def validate_startup_guardrails(settings: Settings) -> None:
    errors: list[str] = []

    if tz.gettz(settings.timezone) is None:
        errors.append(f"TIMEZONE '{settings.timezone}' is not a known time zone")

    if not settings.is_local_dev:
        sender = (settings.sender_email or "").strip().lower()
        if sender in PLACEHOLDER_SENDERS:
            errors.append("SENDER_EMAIL must be set to a verified SES identity in non-dev")
        if not (settings.skill_id or "").strip():
            errors.append("SKILL_ID must be set in non-dev")
        if not settings.verify_skill_requests:
            errors.append("VERIFY_SKILL_REQUESTS must stay enabled in non-dev")
        if not settings.events_table_name.strip():
            errors.append("EVENTS_TABLE_NAME must not be empty")

    if errors:
        raise StartupGuardrailError("; ".join(errors))
