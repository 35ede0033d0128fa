"""Match keys for contact phone numbers.

Contacts keep their number exactly as typed; ContactDirectory.find_by_phone
compares the E.164 keys built here so "(202) 555-1234" and "+1 202 555 1234"
find the same people.
"""

from collections.abc import Callable

import phonenumbers


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """Return the E.164 match key for raw, or None when there is no usable key.

    None, blank text and numbers phonenumbers rejects all give None; callers
    then fall back to comparing the stripped text. default_region supplies the
    country for numbers typed without a leading +.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        number = phonenumbers.parse(text, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(number):
        return None
    return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)


def phone_normalizer(default_region: str | None = None) -> Callable[[str], str | None]:
    """Bind default_region for ContactDirectory(normalize_phone=...)."""

    def _normalize(raw: str) -> str | None:
        return normalize_phone(raw, default_region)

    return _normalize
