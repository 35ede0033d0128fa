"""Domain entities: Contact."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from contactbook.domain.errors import ValidationError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def coerce_birthdate(value: object) -> date:
    """Return value as a calendar date.

    Accepts a date, a datetime (narrowed to its date) or an ISO ``YYYY-MM-DD``
    string. Anything else raises ValidationError.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid birthdate {value!r}.") from exc
    raise ValidationError("Contact birthdate must be a calendar date.")


@dataclass(frozen=True)
class Contact:
    """
    One person in the directory.
    The id is assigned once and never changes; updates produce a new Contact
    with the same id and created_at.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = field(default="")
    phone_number: str = field(default="")
    birthdate: date | None = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ValidationError("Contact name must be text.")
        if not isinstance(self.phone_number, str):
            raise ValidationError("Contact phone number must be text.")
        name = self.name.strip()
        if not name:
            raise ValidationError("Contact name must be non-empty.")
        phone = self.phone_number.strip()
        if not phone:
            raise ValidationError("Contact phone number must be non-empty.")
        if self.birthdate is None:
            raise ValidationError("Contact must have a birthdate.")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "phone_number", phone)
        object.__setattr__(self, "birthdate", coerce_birthdate(self.birthdate))
