"""Error taxonomy shared by the directory, its ports and adapters."""


class ContactBookError(Exception):
    """Base class for all contactbook errors."""


class ValidationError(ContactBookError, ValueError):
    """Input rejected before any port call (empty name/phone, bad date)."""


class NotFoundError(ContactBookError, LookupError):
    """An operation referenced a contact id the directory does not know."""

    def __init__(self, contact_id: str) -> None:
        super().__init__(f"Contact {contact_id!r} not found.")
        self.contact_id = contact_id


class PersistenceError(ContactBookError):
    """The durable store failed. In-memory state is left unchanged."""


class NotificationError(ContactBookError):
    """Scheduling or cancelling a reminder failed. Not fatal to the caller."""
