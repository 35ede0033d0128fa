"""Contact lifecycle with derived birthday reminders. One directory per owner."""

import dataclasses
import logging
from collections.abc import Callable

from contactbook.application.locking import ReadWriteLock
from contactbook.application.ports import ContactStore, NotificationCenter
from contactbook.domain import (
    Contact,
    NotFoundError,
    NotificationError,
    PersistenceError,
    coerce_birthdate,
    reminder_content,
    reminder_key,
    reminder_trigger,
)

logger = logging.getLogger(__name__)


class ContactDirectory:
    """Sole authority over the known contacts and their reminders.

    Every mutation is applied to the store first; memory and reminders change
    only once the store confirmed it. A failed store call leaves both intact.
    Reminder failures are logged and never undo a committed mutation.
    """

    def __init__(
        self,
        store: ContactStore,
        notifications: NotificationCenter,
        *,
        normalize_phone: Callable[[str], str | None] | None = None,
    ) -> None:
        self._store = store
        self._notifications = notifications
        self._normalize_phone = normalize_phone
        self._contacts: list[Contact] = []
        self._lock = ReadWriteLock()

    def load(self) -> list[Contact]:
        """Replace in-memory state with the store's contents and reschedule reminders."""
        with self._lock.write():
            try:
                loaded = list(self._store.fetch_all())
            except PersistenceError:
                logger.error("Could not fetch contacts; keeping %d in memory", len(self._contacts))
                raise
            previous = self._contacts
            self._contacts = loaded
            loaded_keys = {reminder_key(c) for c in loaded}
            for contact in previous:
                if reminder_key(contact) not in loaded_keys:
                    self._cancel_reminder(contact)
            for contact in loaded:
                self._schedule_reminder(contact)
            logger.info("Loaded %d contacts", len(loaded))
            return list(loaded)

    def add(self, name: str, phone_number: str, birthdate) -> Contact:
        """Create, store and remember a contact, then schedule its reminder."""
        contact = Contact(
            name=name,
            phone_number=phone_number,
            birthdate=coerce_birthdate(birthdate),
        )
        with self._lock.write():
            try:
                self._store.insert(contact)
            except PersistenceError:
                logger.error("Could not save contact %s", contact.id)
                raise
            self._contacts.append(contact)
            self._schedule_reminder(contact)
        logger.info("Added contact %s", contact.id)
        return contact

    def update(
        self,
        contact_id: str,
        *,
        name: str | None = None,
        phone_number: str | None = None,
        birthdate=None,
    ) -> Contact:
        """Replace a contact's fields. Fields left as None keep their current value."""
        with self._lock.write():
            index = self._index_of(contact_id)
            old = self._contacts[index]
            changes = {}
            if name is not None:
                changes["name"] = name
            if phone_number is not None:
                changes["phone_number"] = phone_number
            if birthdate is not None:
                changes["birthdate"] = coerce_birthdate(birthdate)
            new = dataclasses.replace(old, **changes)
            try:
                self._store.update(contact_id, new)
            except PersistenceError:
                logger.error("Could not update contact %s", contact_id)
                raise
            self._contacts[index] = new
            # The old key goes first: a reminder for stale data must not survive.
            self._cancel_reminder(old)
            self._schedule_reminder(new)
        logger.info("Updated contact %s", contact_id)
        return new

    def remove(self, contact_id: str) -> Contact:
        """Delete a contact and cancel its own reminder."""
        with self._lock.write():
            index = self._index_of(contact_id)
            contact = self._contacts[index]
            try:
                self._store.delete(contact_id)
            except PersistenceError:
                logger.error("Could not delete contact %s", contact_id)
                raise
            del self._contacts[index]
            self._cancel_reminder(contact)
        logger.info("Removed contact %s", contact_id)
        return contact

    def list_contacts(self) -> list[Contact]:
        """Return a snapshot of all contacts in insertion order."""
        with self._lock.read():
            return list(self._contacts)

    def get(self, contact_id: str) -> Contact:
        with self._lock.read():
            return self._contacts[self._index_of(contact_id)]

    def find_by_phone(self, phone_number: str) -> list[Contact]:
        """Return contacts whose number matches, comparing normalized forms when possible."""
        needle = self._phone_match_key(phone_number or "")
        if not needle:
            return []
        with self._lock.read():
            return [c for c in self._contacts if self._phone_match_key(c.phone_number) == needle]

    def _index_of(self, contact_id: str) -> int:
        for i, contact in enumerate(self._contacts):
            if contact.id == contact_id:
                return i
        raise NotFoundError(contact_id)

    def _phone_match_key(self, raw: str) -> str:
        raw = raw.strip()
        if raw and self._normalize_phone is not None:
            return self._normalize_phone(raw) or raw
        return raw

    def _schedule_reminder(self, contact: Contact) -> None:
        key = reminder_key(contact)
        trigger = reminder_trigger(contact)
        title, body = reminder_content(contact)
        try:
            self._notifications.schedule(key, title, body, trigger.month, trigger.day)
        except NotificationError as exc:
            logger.warning("Error scheduling reminder %s for contact %s: %s", key, contact.id, exc)

    def _cancel_reminder(self, contact: Contact) -> None:
        key = reminder_key(contact)
        try:
            self._notifications.cancel(key)
        except NotificationError as exc:
            logger.warning("Error cancelling reminder %s for contact %s: %s", key, contact.id, exc)
