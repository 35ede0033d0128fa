"""Birthday reminder derivation. Pure functions, no scheduling."""

from dataclasses import dataclass

from contactbook.domain.entities import Contact

REMINDER_TITLE = "Birthday Reminder"


@dataclass(frozen=True)
class ReminderTrigger:
    """Calendar match for a recurring alert: fires on month/day every year."""

    month: int
    day: int
    repeats: bool = True


def reminder_key(contact: Contact) -> str:
    """Identifier used to schedule and cancel the contact's reminder.

    Keyed by id, not phone number: two contacts sharing a number must not
    overwrite each other's reminder.
    """
    return contact.id


def reminder_trigger(contact: Contact) -> ReminderTrigger:
    return ReminderTrigger(month=contact.birthdate.month, day=contact.birthdate.day)


def reminder_content(contact: Contact) -> tuple[str, str]:
    """Return (title, body) shown when the reminder fires."""
    return REMINDER_TITLE, f"Today is {contact.name}'s birthday!"
