"""Neo4j implementation of ContactStore.
Graph: one (:Contact) node per contact, scoped by an owner id.
(:Contact {id, owner, name, phone_number, birthdate, created_at}).
Dates are stored as ISO strings; fetch_all orders by created_at.
"""

from datetime import date, datetime

from neo4j.exceptions import DriverError, Neo4jError

from contactbook.domain import Contact, PersistenceError

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
FOR (c:Contact) REQUIRE c.id IS UNIQUE
"""

_FETCH_ALL_QUERY = """
MATCH (c:Contact {owner: $owner})
RETURN c
ORDER BY c.created_at
"""

_INSERT_QUERY = """
CREATE (c:Contact {
    id: $id,
    owner: $owner,
    name: $name,
    phone_number: $phone_number,
    birthdate: $birthdate,
    created_at: $created_at
})
"""

_UPDATE_QUERY = """
MATCH (c:Contact {id: $id, owner: $owner})
SET c.name = $name,
    c.phone_number = $phone_number,
    c.birthdate = $birthdate
RETURN c.id AS id
"""

_DELETE_QUERY = """
MATCH (c:Contact {id: $id, owner: $owner})
WITH c, c.id AS id
DETACH DELETE c
RETURN id
"""


def ensure_contact_constraint(driver) -> None:
    """Create the unique constraint on Contact.id. Idempotent."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


def _iso_to_datetime(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


class Neo4jContactStore:
    """Stores contacts in Neo4j, scoped by owner_id.
    Driver errors surface as PersistenceError with the original chained.
    """

    def __init__(self, driver: object, owner_id: str = "default") -> None:
        self._driver = driver
        self._owner_id = owner_id

    def fetch_all(self) -> list[Contact]:
        try:
            with self._driver.session() as session:
                result = session.run(_FETCH_ALL_QUERY, owner=self._owner_id)
                records = [record["c"] for record in result]
        except (Neo4jError, DriverError) as exc:
            raise PersistenceError(f"Could not fetch contacts: {exc}") from exc
        try:
            return [_node_to_contact(node) for node in records]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            # ValidationError is a ValueError: a stored node no longer decodes.
            raise PersistenceError(f"Stored contact is unreadable: {exc}") from exc

    def insert(self, contact: Contact) -> None:
        try:
            with self._driver.session() as session:
                session.run(
                    _INSERT_QUERY,
                    created_at=contact.created_at.isoformat(),
                    **self._params(contact.id, contact),
                ).consume()
        except (Neo4jError, DriverError) as exc:
            raise PersistenceError(f"Could not save contact {contact.id}: {exc}") from exc

    def update(self, contact_id: str, contact: Contact) -> None:
        try:
            with self._driver.session() as session:
                record = session.run(_UPDATE_QUERY, **self._params(contact_id, contact)).single()
        except (Neo4jError, DriverError) as exc:
            raise PersistenceError(f"Could not update contact {contact_id}: {exc}") from exc
        if record is None:
            raise PersistenceError(f"Contact {contact_id!r} is not stored.")

    def delete(self, contact_id: str) -> None:
        try:
            with self._driver.session() as session:
                record = session.run(_DELETE_QUERY, id=contact_id, owner=self._owner_id).single()
        except (Neo4jError, DriverError) as exc:
            raise PersistenceError(f"Could not delete contact {contact_id}: {exc}") from exc
        if record is None:
            raise PersistenceError(f"Contact {contact_id!r} is not stored.")

    def _params(self, contact_id: str, contact: Contact) -> dict:
        return {
            "id": contact_id,
            "owner": self._owner_id,
            "name": contact.name,
            "phone_number": contact.phone_number,
            "birthdate": contact.birthdate.isoformat(),
        }


def _node_to_contact(node) -> Contact:
    return Contact(
        id=node["id"],
        name=node["name"],
        phone_number=node["phone_number"],
        birthdate=date.fromisoformat(node["birthdate"]),
        created_at=_iso_to_datetime(node["created_at"]),
    )
