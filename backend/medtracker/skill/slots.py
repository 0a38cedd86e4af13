from __future__ import annotations

from ask_sdk_core.handler_input import HandlerInput

# Alexa sends "?" for a number slot it heard but could not resolve.
_UNRESOLVED = {"", "?"}


def get_slot_text(handler_input: HandlerInput, slot_name: str) -> str | None:
    request = handler_input.request_envelope.request
    intent = getattr(request, "intent", None)
    slots = getattr(intent, "slots", None) or {}
    slot = slots.get(slot_name)
    value = getattr(slot, "value", None)
    if value is None:
        return None
    value = value.strip()
    if value in _UNRESOLVED:
        return None
    return value


def get_slot_count(handler_input: HandlerInput, slot_name: str) -> int | None:
    text = get_slot_text(handler_input, slot_name)
    if text is None:
        return None
    try:
        count = int(text)
    except ValueError:
        return None
    return count if count >= 0 else None


def get_caller_id(handler_input: HandlerInput) -> str:
    envelope = handler_input.request_envelope
    session = envelope.session
    if session is not None and session.user is not None and session.user.user_id:
        return session.user.user_id
    return envelope.context.system.user.user_id
