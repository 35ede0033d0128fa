"""
Contactbook core: clean-architecture layout.

- domain: Contact, error taxonomy, birthday reminder derivation. No outer dependencies.
- application: use case (ContactDirectory), ports (ContactStore, NotificationCenter).
- infrastructure: adapters (InMemoryContactStore, Neo4jContactStore, InMemoryNotificationCenter).
"""

from contactbook.application import ContactDirectory, ContactStore, NotificationCenter
from contactbook.domain import (
    Contact,
    ContactBookError,
    NotFoundError,
    NotificationError,
    PersistenceError,
    ReminderTrigger,
    ValidationError,
    reminder_key,
    reminder_trigger,
)
from contactbook.infrastructure import (
    InMemoryContactStore,
    InMemoryNotificationCenter,
    Neo4jContactStore,
)

__all__ = [
    "Contact",
    "ContactBookError",
    "ContactDirectory",
    "ContactStore",
    "InMemoryContactStore",
    "InMemoryNotificationCenter",
    "Neo4jContactStore",
    "NotFoundError",
    "NotificationCenter",
    "NotificationError",
    "PersistenceError",
    "ReminderTrigger",
    "ValidationError",
    "reminder_key",
    "reminder_trigger",
]
