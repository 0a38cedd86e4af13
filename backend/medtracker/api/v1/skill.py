from __future__ import annotations

import logging
from typing import Any

from ask_sdk_core.exceptions import AskSdkException, SerializationException
from ask_sdk_webservice_support.verifier import VerificationException
from ask_sdk_webservice_support.webservice_handler import WebserviceSkillHandler
from fastapi import APIRouter, Depends, HTTPException, Request

from medtracker.api.deps import get_raw_envelope, get_webservice_handler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skill", tags=["skill"])


@router.post("")
def handle_skill_request(
    request: Request,
    raw_envelope: str = Depends(get_raw_envelope),
    handler: WebserviceSkillHandler = Depends(get_webservice_handler),
) -> dict[str, Any]:
    try:
        return handler.verify_request_and_dispatch(
            http_request_headers=request.headers,
            http_request_body=raw_envelope,
        )
    except SerializationException as exc:
        raise HTTPException(status_code=422, detail="Malformed request envelope") from exc
    except VerificationException as exc:
        logger.warning("Unverified skill request: %s", exc)
        raise HTTPException(status_code=400, detail="Request verification failed") from exc
    except AskSdkException as exc:
        logger.warning("Rejected skill request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
