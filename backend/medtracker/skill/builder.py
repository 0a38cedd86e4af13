from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_core.skill import CustomSkill
from ask_sdk_core.skill_builder import SkillBuilder
from ask_sdk_model import RequestEnvelope

from medtracker.core.config import get_settings
from medtracker.skill.handlers import (
    AddMedicalActivityHandler,
    AddMedicineGivenHandler,
    CancelOrStopIntentHandler,
    CatchAllExceptionHandler,
    FallbackIntentHandler,
    HelpIntentHandler,
    IntentReflectorHandler,
    LaunchRequestHandler,
    RetrieveForPeriodOfTimeHandler,
    RetrieveForSpecificDateHandler,
    SessionEndedRequestHandler,
    WhenQuestionHandler,
)
from medtracker.skill.services import SkillServices

logger = logging.getLogger(__name__)

_serializer = DefaultSerializer()

# Order matters: the first handler whose can_handle matches wins.
_HANDLER_TYPES = (
    LaunchRequestHandler,
    RetrieveForPeriodOfTimeHandler,
    AddMedicalActivityHandler,
    WhenQuestionHandler,
    RetrieveForSpecificDateHandler,
    AddMedicineGivenHandler,
    HelpIntentHandler,
    CancelOrStopIntentHandler,
    FallbackIntentHandler,
    SessionEndedRequestHandler,
    IntentReflectorHandler,
)


def build_skill(services: SkillServices) -> CustomSkill:
    sb = SkillBuilder()
    sb.skill_id = services.settings.skill_id or None
    for handler_type in _HANDLER_TYPES:
        sb.add_request_handler(handler_type(services))
    sb.add_exception_handler(CatchAllExceptionHandler())
    return sb.create()


@lru_cache
def get_skill() -> CustomSkill:
    settings = get_settings()
    logger.info("Building skill for table %s in %s", settings.events_table_name, settings.dynamodb_region)
    return build_skill(SkillServices.from_settings(settings))


def invoke_skill(skill: CustomSkill, payload: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Run one request envelope (as decoded JSON) through the skill."""
    request_envelope = _serializer.deserialize(payload=json.dumps(payload), obj_type=RequestEnvelope)
    response_envelope = skill.invoke(request_envelope=request_envelope, context=context)
    return _serializer.serialize(response_envelope)
