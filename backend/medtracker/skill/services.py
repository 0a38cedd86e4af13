from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from functools import partial

from medtracker.core.config import Settings
from medtracker.services.dates import now_in
from medtracker.services.mailer import SesMailer
from medtracker.services.profile import fetch_profile_email
from medtracker.services.store import MedicalEventStore

EmailLookup = Callable[[str | None, str | None], str]


@dataclass
class SkillServices:
    """External collaborators the intent handlers talk to."""

    settings: Settings
    store: MedicalEventStore
    mailer: SesMailer
    email_lookup: EmailLookup
    clock: Callable[[], datetime]

    @classmethod
    def from_settings(cls, settings: Settings) -> SkillServices:
        return cls(
            settings=settings,
            store=MedicalEventStore.from_settings(settings),
            mailer=SesMailer.from_settings(settings),
            email_lookup=partial(fetch_profile_email, timeout=settings.profile_timeout_seconds),
            clock=partial(now_in, settings.timezone),
        )
