"""Application layer: the directory use case and its ports. Depends only on domain."""

from contactbook.application.directory import ContactDirectory
from contactbook.application.ports import ContactStore, NotificationCenter

__all__ = [
    "ContactDirectory",
    "ContactStore",
    "NotificationCenter",
]
