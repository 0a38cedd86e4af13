from __future__ import annotations

KEY_SEPARATOR = "#"


class InvalidSubjectNameError(ValueError):
    pass


def build_subject_key(caller_id: str, subject_name: str) -> str:
    # The separator is forbidden in names so two callers/subjects never share a key.
    if KEY_SEPARATOR in subject_name:
        raise InvalidSubjectNameError(f"Subject name may not contain '{KEY_SEPARATOR}'")
    return f"{caller_id}{KEY_SEPARATOR}{subject_name}"
