WELCOME = "Welcome to your medical tracker, how may I help you?"
HELP = (
    "You can record an activity, like: Bob had physical therapy for thirty minutes. "
    "You can record a medicine, like: I gave Bob five milligrams of Aspirin. "
    "Or you can ask when something last happened, or for a history emailed to you. "
    "How can I help?"
)
GOODBYE = "Goodbye!"
FALLBACK = "Sorry, I don't know about that. Please try again."
GENERIC_ERROR = "Sorry, I had trouble doing what you asked. Please try again."

EMAIL_LOOKUP_FAILED = "An error occurred while trying to retrieve your email."
EMAIL_PERMISSION_NEEDED = (
    "An error occurred while trying to retrieve your email. "
    "Please allow access to your email address in the Alexa app so I can send you results."
)
SEARCH_FAILED = "An error occurred while searching for the data."
SAVE_FAILED = "An error occurred while saving that. Please try again."

MISSING_NAME = "Please tell me whose records you mean."
MISSING_DATE = "Please tell me which date you want to look up."
BAD_DATE = "I couldn't understand that date. Please say a specific day."
MISSING_PERIOD = "Please tell me how many days, weeks, or months to look back."
MISSING_ACTIVITY = "Please tell me which activity to record."
MISSING_MEDICINE = "Please tell me which medicine was given."
BAD_NAME = "Sorry, I can't use that name. Please try a different one."

SEARCHING_POINT = "I am searching for {name}'s activity {description} now. I will send you an email with the results."
SEARCHING_RANGE = "I am searching for the data now. I will send you an email with the results."

RECORDED_ACTIVITY = "I have recorded {event} for {name}."
RECORDED_MEDICINE = "I have recorded {dosage} of {medicine} for {name}."
RECORDED_MEDICINE_NO_DOSE = "I have recorded {medicine} for {name}."

REFLECTOR = "You just triggered {intent_name}."
