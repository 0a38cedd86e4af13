from __future__ import annotations

import json

from ask_sdk_core.skill import CustomSkill
from ask_sdk_webservice_support.webservice_handler import WebserviceSkillHandler
from fastapi import Depends, HTTPException, Request

from medtracker.core.config import Settings, get_settings
from medtracker.skill.builder import get_skill


def get_webservice_handler(
    skill: CustomSkill = Depends(get_skill),
    settings: Settings = Depends(get_settings),
) -> WebserviceSkillHandler:
    return WebserviceSkillHandler(
        skill=skill,
        verify_signature=settings.verify_skill_requests,
        verify_timestamp=settings.verify_skill_requests,
    )


async def get_raw_envelope(request: Request) -> str:
    """Return the request body untouched; the signature covers these exact bytes."""
    raw = await request.body()
    try:
        decoded = json.loads(raw)
        body = raw.decode("utf-8")
    except ValueError as exc:
        raise HTTPException(status_code=422, detail="Malformed request envelope") from exc
    if not isinstance(decoded, dict):
        raise HTTPException(status_code=422, detail="Malformed request envelope")
    return body
