"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class ContactStore(Protocol):
    """Durable storage for contacts. Every method raises PersistenceError on failure."""

    def fetch_all(self) -> list[Contact]:
        """Return all stored contacts in insertion order."""
        ...

    def insert(self, contact: Contact) -> None:
        """Store a new contact."""
        ...

    def update(self, contact_id: str, contact: Contact) -> None:
        """Replace the stored record for contact_id. Unknown id is a PersistenceError."""
        ...

    def delete(self, contact_id: str) -> None:
        """Delete the stored record for contact_id. Unknown id is a PersistenceError."""
        ...


class NotificationCenter(Protocol):
    """Schedules recurring yearly alerts. Delivery is the backend's concern."""

    def schedule(self, key: str, title: str, body: str, month: int, day: int) -> None:
        """Schedule (or replace) the alert for key. Raises NotificationError."""
        ...

    def cancel(self, key: str) -> None:
        """Cancel the alert for key. Unknown keys are ignored."""
        ...
