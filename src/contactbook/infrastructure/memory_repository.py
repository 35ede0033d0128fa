"""In-memory implementation of ContactStore (no DB)."""

from contactbook.domain import Contact, PersistenceError


class InMemoryContactStore:
    """Stores contacts in memory. Order preserved by insertion."""

    def __init__(self, contacts: list[Contact] | None = None) -> None:
        self._by_id: dict[str, Contact] = {}
        self._order: list[str] = []
        for contact in contacts or []:
            self.insert(contact)

    def fetch_all(self) -> list[Contact]:
        return [self._by_id[cid] for cid in self._order]

    def insert(self, contact: Contact) -> None:
        if contact.id in self._by_id:
            raise PersistenceError(f"Contact {contact.id!r} already stored.")
        self._by_id[contact.id] = contact
        self._order.append(contact.id)

    def update(self, contact_id: str, contact: Contact) -> None:
        if contact_id not in self._by_id:
            raise PersistenceError(f"Contact {contact_id!r} is not stored.")
        if contact.id != contact_id:
            raise PersistenceError("A contact's id cannot change.")
        self._by_id[contact_id] = contact

    def delete(self, contact_id: str) -> None:
        if self._by_id.pop(contact_id, None) is None:
            raise PersistenceError(f"Contact {contact_id!r} is not stored.")
        self._order.remove(contact_id)
