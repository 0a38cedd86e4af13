from enum import Enum


class EventKind(str, Enum):
    MEDICINE = "MEDICINE"
    ACTIVITY = "ACTIVITY"


class IntentName(str, Enum):
    RETRIEVE_FOR_SPECIFIC_DATE = "RetrieveIntentForSpecificDate"
    RETRIEVE_FOR_PERIOD_OF_TIME = "RetrieveIntentForPeriodsOfTime"
    ADD_MEDICAL_ACTIVITY = "AddMedicalActivityIntent"
    ADD_MEDICINE_GIVEN = "AddMedicineGivenIntent"
    WHEN_QUESTION = "WhenQuestionIntent"
    HELP = "AMAZON.HelpIntent"
    CANCEL = "AMAZON.CancelIntent"
    STOP = "AMAZON.StopIntent"
    FALLBACK = "AMAZON.FallbackIntent"
