"""Domain layer: entities, errors and reminder derivation. No dependencies on outer layers."""

from contactbook.domain.entities import Contact, coerce_birthdate
from contactbook.domain.errors import (
    ContactBookError,
    NotFoundError,
    NotificationError,
    PersistenceError,
    ValidationError,
)
from contactbook.domain.reminders import (
    REMINDER_TITLE,
    ReminderTrigger,
    reminder_content,
    reminder_key,
    reminder_trigger,
)

__all__ = [
    "Contact",
    "ContactBookError",
    "NotFoundError",
    "NotificationError",
    "PersistenceError",
    "REMINDER_TITLE",
    "ReminderTrigger",
    "ValidationError",
    "coerce_birthdate",
    "reminder_content",
    "reminder_key",
    "reminder_trigger",
]
