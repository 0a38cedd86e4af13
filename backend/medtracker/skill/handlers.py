from __future__ import annotations

import logging
from xml.sax.saxutils import escape

import ask_sdk_core.utils as ask_utils
from ask_sdk_core.dispatch_components import AbstractExceptionHandler, AbstractRequestHandler
from ask_sdk_core.handler_input import HandlerInput
from ask_sdk_model import Response
from ask_sdk_model.ui import AskForPermissionsConsentCard

from medtracker.core.enums import IntentName
from medtracker.schemas.events import MedicalEvent, medicine_label
from medtracker.services.dates import (
    InvalidDateError,
    format_timestamp,
    resolve_point_date,
    resolve_range_date,
)
from medtracker.services.filters import EventQuery, build_lookup_query, build_point_query, build_range_query
from medtracker.services.formatter import (
    describe_point,
    describe_range,
    format_history_report,
    format_history_subject,
    format_lookup_answer,
)
from medtracker.services.keys import InvalidSubjectNameError, build_subject_key
from medtracker.services.mailer import EmailDeliveryError, EmailMessage
from medtracker.services.profile import EMAIL_PERMISSION, ProfileLookupError
from medtracker.services.store import StorageError
from medtracker.skill import phrases
from medtracker.skill.services import SkillServices
from medtracker.skill.slots import get_caller_id, get_slot_count, get_slot_text

logger = logging.getLogger(__name__)


def _speak(handler_input: HandlerInput, text: str, reprompt: str | None = None) -> Response:
    builder = handler_input.response_builder.speak(escape(text))
    if reprompt is not None:
        builder.ask(escape(reprompt))
    return builder.response


def _ask(handler_input: HandlerInput, text: str) -> Response:
    return _speak(handler_input, text, reprompt=text)


class SkillRequestHandler(AbstractRequestHandler):
    intent_name: IntentName | None = None

    def __init__(self, services: SkillServices) -> None:
        self.services = services

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return self.intent_name is not None and ask_utils.is_intent_name(self.intent_name.value)(handler_input)

    def subject_key(self, handler_input: HandlerInput, subject_name: str) -> str:
        return build_subject_key(get_caller_id(handler_input), subject_name)


class HistoryEmailHandler(SkillRequestHandler):
    """Shared flow for the intents that email a history report."""

    def lookup_email(self, handler_input: HandlerInput) -> str:
        system = handler_input.request_envelope.context.system
        return self.services.email_lookup(system.api_endpoint, system.api_access_token)

    def email_lookup_failed(self, handler_input: HandlerInput, exc: ProfileLookupError) -> Response:
        logger.error("Error fetching email: %s", exc)
        if exc.permission_missing:
            handler_input.response_builder.set_card(
                AskForPermissionsConsentCard(permissions=[EMAIL_PERMISSION])
            )
            return _speak(handler_input, phrases.EMAIL_PERMISSION_NEEDED)
        return _speak(handler_input, phrases.EMAIL_LOOKUP_FAILED)

    def search_and_email(
        self,
        *,
        recipient: str,
        query: EventQuery,
        subject_name: str,
        description: str,
    ) -> bool:
        try:
            events = self.services.store.query_events(query)
        except StorageError:
            logger.exception("Error querying history for %s", subject_name)
            return False

        message = EmailMessage(
            recipient=recipient,
            subject=format_history_subject(subject_name, description),
            body=format_history_report(events, subject_name=subject_name, description=description),
        )
        try:
            self.services.mailer.send(message)
        except EmailDeliveryError:
            logger.exception("Error occurred when sending email")
        return True


class LaunchRequestHandler(SkillRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return ask_utils.is_request_type("LaunchRequest")(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        return _ask(handler_input, phrases.WELCOME)


class RetrieveForSpecificDateHandler(HistoryEmailHandler):
    intent_name = IntentName.RETRIEVE_FOR_SPECIFIC_DATE

    def handle(self, handler_input: HandlerInput) -> Response:
        subject_name = get_slot_text(handler_input, "name")
        date_value = get_slot_text(handler_input, "date")
        if subject_name is None:
            return _ask(handler_input, phrases.MISSING_NAME)
        if date_value is None:
            return _ask(handler_input, phrases.MISSING_DATE)

        try:
            subject_key = self.subject_key(handler_input, subject_name)
            point = resolve_point_date(date_value)
        except InvalidSubjectNameError:
            return _speak(handler_input, phrases.BAD_NAME)
        except InvalidDateError:
            logger.info("Unusable date slot %r", date_value)
            return _ask(handler_input, phrases.BAD_DATE)

        try:
            recipient = self.lookup_email(handler_input)
        except ProfileLookupError as exc:
            return self.email_lookup_failed(handler_input, exc)

        description = describe_point(point)
        found = self.search_and_email(
            recipient=recipient,
            query=build_point_query(subject_key, point),
            subject_name=subject_name,
            description=description,
        )
        if not found:
            return _speak(handler_input, phrases.SEARCH_FAILED)
        return _speak(
            handler_input,
            phrases.SEARCHING_POINT.format(name=subject_name, description=description),
        )


class RetrieveForPeriodOfTimeHandler(HistoryEmailHandler):
    intent_name = IntentName.RETRIEVE_FOR_PERIOD_OF_TIME

    def handle(self, handler_input: HandlerInput) -> Response:
        subject_name = get_slot_text(handler_input, "name")
        if subject_name is None:
            return _ask(handler_input, phrases.MISSING_NAME)

        days = get_slot_count(handler_input, "number_of_days")
        weeks = get_slot_count(handler_input, "number_of_weeks")
        months = get_slot_count(handler_input, "number_of_months")

        try:
            range_query = resolve_range_date(days, weeks, months, now=self.services.clock())
        except InvalidDateError:
            return _ask(handler_input, phrases.MISSING_PERIOD)

        try:
            subject_key = self.subject_key(handler_input, subject_name)
        except InvalidSubjectNameError:
            return _speak(handler_input, phrases.BAD_NAME)

        try:
            recipient = self.lookup_email(handler_input)
        except ProfileLookupError as exc:
            return self.email_lookup_failed(handler_input, exc)

        found = self.search_and_email(
            recipient=recipient,
            query=build_range_query(subject_key, range_query),
            subject_name=subject_name,
            description=describe_range(range_query),
        )
        if not found:
            return _speak(handler_input, phrases.SEARCH_FAILED)
        return _speak(handler_input, phrases.SEARCHING_RANGE)


class AddMedicalActivityHandler(SkillRequestHandler):
    intent_name = IntentName.ADD_MEDICAL_ACTIVITY

    def handle(self, handler_input: HandlerInput) -> Response:
        subject_name = get_slot_text(handler_input, "name")
        activity = get_slot_text(handler_input, "event")
        if subject_name is None:
            return _ask(handler_input, phrases.MISSING_NAME)
        if activity is None:
            return _ask(handler_input, phrases.MISSING_ACTIVITY)

        try:
            subject_key = self.subject_key(handler_input, subject_name)
        except InvalidSubjectNameError:
            return _speak(handler_input, phrases.BAD_NAME)

        event = MedicalEvent(
            subject_key=subject_key,
            timestamp=format_timestamp(self.services.clock()),
            event_label=activity,
            duration_minutes=get_slot_text(handler_input, "number_of_minutes"),
        )
        try:
            self.services.store.put_event(event)
        except StorageError:
            logger.exception("Error occurred in add medical activity intent handler")
            return _speak(handler_input, phrases.SAVE_FAILED)
        return _speak(handler_input, phrases.RECORDED_ACTIVITY.format(event=activity, name=subject_name))


class AddMedicineGivenHandler(SkillRequestHandler):
    intent_name = IntentName.ADD_MEDICINE_GIVEN

    def handle(self, handler_input: HandlerInput) -> Response:
        subject_name = get_slot_text(handler_input, "name")
        medicine = get_slot_text(handler_input, "medicine_name")
        if subject_name is None:
            return _ask(handler_input, phrases.MISSING_NAME)
        if medicine is None:
            return _ask(handler_input, phrases.MISSING_MEDICINE)

        try:
            subject_key = self.subject_key(handler_input, subject_name)
        except InvalidSubjectNameError:
            return _speak(handler_input, phrases.BAD_NAME)

        dosage = get_slot_text(handler_input, "amount_of_medicine")
        event = MedicalEvent(
            subject_key=subject_key,
            timestamp=format_timestamp(self.services.clock()),
            event_label=medicine_label(medicine),
            dosage=dosage,
        )
        try:
            self.services.store.put_event(event)
        except StorageError:
            logger.exception("Error occurred in add medicine given intent handler")
            return _speak(handler_input, phrases.SAVE_FAILED)

        if dosage:
            speech = phrases.RECORDED_MEDICINE.format(dosage=dosage, medicine=medicine, name=subject_name)
        else:
            speech = phrases.RECORDED_MEDICINE_NO_DOSE.format(medicine=medicine, name=subject_name)
        return _speak(handler_input, speech)


class WhenQuestionHandler(SkillRequestHandler):
    intent_name = IntentName.WHEN_QUESTION

    def handle(self, handler_input: HandlerInput) -> Response:
        subject_name = get_slot_text(handler_input, "name")
        if subject_name is None:
            return _ask(handler_input, phrases.MISSING_NAME)

        try:
            subject_key = self.subject_key(handler_input, subject_name)
        except InvalidSubjectNameError:
            return _speak(handler_input, phrases.BAD_NAME)

        query, target = build_lookup_query(
            subject_key,
            activity=get_slot_text(handler_input, "medical_activity"),
            medicine=get_slot_text(handler_input, "medicine_name"),
        )
        try:
            events = self.services.store.query_events(query)
        except StorageError:
            logger.exception("Error occurred in when question intent handler")
            return _speak(handler_input, phrases.SEARCH_FAILED)

        return _speak(handler_input, format_lookup_answer(events, subject_name=subject_name, target=target))


class HelpIntentHandler(SkillRequestHandler):
    intent_name = IntentName.HELP

    def handle(self, handler_input: HandlerInput) -> Response:
        return _ask(handler_input, phrases.HELP)


class CancelOrStopIntentHandler(SkillRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return ask_utils.is_intent_name(IntentName.CANCEL.value)(handler_input) or ask_utils.is_intent_name(
            IntentName.STOP.value
        )(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        return _speak(handler_input, phrases.GOODBYE)


class FallbackIntentHandler(SkillRequestHandler):
    intent_name = IntentName.FALLBACK

    def handle(self, handler_input: HandlerInput) -> Response:
        return _ask(handler_input, phrases.FALLBACK)


class SessionEndedRequestHandler(SkillRequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return ask_utils.is_request_type("SessionEndedRequest")(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        request = handler_input.request_envelope.request
        logger.info("Session ended: %s", getattr(request, "reason", None))
        return handler_input.response_builder.response


class IntentReflectorHandler(SkillRequestHandler):
    """Echoes intents no other handler claimed; must be registered last."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return ask_utils.is_request_type("IntentRequest")(handler_input)

    def handle(self, handler_input: HandlerInput) -> Response:
        intent_name = ask_utils.get_intent_name(handler_input)
        return _speak(handler_input, phrases.REFLECTOR.format(intent_name=intent_name))


class CatchAllExceptionHandler(AbstractExceptionHandler):
    def can_handle(self, handler_input: HandlerInput, exception: Exception) -> bool:
        return True

    def handle(self, handler_input: HandlerInput, exception: Exception) -> Response:
        logger.error("Unhandled skill error: %s", exception, exc_info=exception)
        return _ask(handler_input, phrases.GENERIC_ERROR)
