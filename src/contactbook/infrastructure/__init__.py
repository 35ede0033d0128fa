"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.memory_repository import InMemoryContactStore
from contactbook.infrastructure.notifications import (
    InMemoryNotificationCenter,
    PendingReminder,
)
from contactbook.infrastructure.persistence.neo4j_repository import (
    Neo4jContactStore,
    ensure_contact_constraint,
)
from contactbook.infrastructure.phone import normalize_phone, phone_normalizer

__all__ = [
    "InMemoryContactStore",
    "InMemoryNotificationCenter",
    "Neo4jContactStore",
    "PendingReminder",
    "ensure_contact_constraint",
    "normalize_phone",
    "phone_normalizer",
]
