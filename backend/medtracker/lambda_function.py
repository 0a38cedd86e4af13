"""AWS Lambda entry point (handler: ``medtracker.lambda_function.lambda_handler``)."""

from __future__ import annotations

from typing import Any

from medtracker.core.config import get_settings
from medtracker.core.logging import configure_logging
from medtracker.core.startup_guardrails import validate_startup_guardrails
from medtracker.skill.builder import get_skill, invoke_skill

settings = get_settings()
configure_logging(settings)
validate_startup_guardrails(settings)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return invoke_skill(get_skill(), event, context)
