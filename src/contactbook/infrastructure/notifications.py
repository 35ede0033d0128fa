"""In-memory NotificationCenter: keeps pending yearly reminders, delivers nothing."""

from dataclasses import dataclass

from contactbook.domain import NotificationError, ReminderTrigger


@dataclass(frozen=True)
class PendingReminder:
    key: str
    title: str
    body: str
    trigger: ReminderTrigger


class InMemoryNotificationCenter:
    """Pending requests keyed by reminder key.
    Scheduling an existing key replaces the earlier request.
    """

    def __init__(self) -> None:
        self._pending: dict[str, PendingReminder] = {}

    def schedule(self, key: str, title: str, body: str, month: int, day: int) -> None:
        if not key:
            raise NotificationError("Reminder key must be non-empty.")
        if not 1 <= month <= 12 or not 1 <= day <= 31:
            raise NotificationError(f"Invalid reminder date {month}/{day}.")
        self._pending[key] = PendingReminder(
            key=key,
            title=title,
            body=body,
            trigger=ReminderTrigger(month=month, day=day),
        )

    def cancel(self, key: str) -> None:
        self._pending.pop(key, None)

    def get(self, key: str) -> PendingReminder | None:
        return self._pending.get(key)

    def pending(self) -> list[PendingReminder]:
        """Return pending reminders in scheduling order."""
        return list(self._pending.values())
