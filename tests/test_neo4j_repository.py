"""Tests for Neo4jContactStore. The integration tests require Docker
(testcontainers) and are skipped when no container can be started; the
fake-driver tests at the bottom run anywhere."""

import dataclasses
from datetime import date

import pytest

from contactbook.application import ContactDirectory
from contactbook.domain import Contact, PersistenceError
from contactbook.infrastructure import (
    InMemoryNotificationCenter,
    Neo4jContactStore,
    ensure_contact_constraint,
)


@pytest.fixture(scope="session")
def neo4j_driver():
    neo4j_module = pytest.importorskip("testcontainers.neo4j")
    try:
        container = neo4j_module.Neo4jContainer().start()
    except Exception as exc:  # noqa: BLE001
        pytest.skip(f"Neo4j container unavailable: {exc}")
    driver = container.get_driver()
    try:
        yield driver
    finally:
        driver.close()
        container.stop()


@pytest.fixture
def clean_neo4j(neo4j_driver):
    """Clear the graph before each test so tests are independent."""
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n")
    ensure_contact_constraint(neo4j_driver)
    yield neo4j_driver


def _contact(name: str, birthdate=date(1990, 7, 4)) -> Contact:
    return Contact(name=name, phone_number="555-1111", birthdate=birthdate)


def test_insert_then_fetch_all_round_trips_fields(clean_neo4j):
    store = Neo4jContactStore(clean_neo4j, owner_id="default")
    contact = _contact("Ana")
    store.insert(contact)

    fetched = store.fetch_all()
    assert fetched == [contact]


def test_fetch_all_ordering(clean_neo4j):
    store = Neo4jContactStore(clean_neo4j, owner_id="default")
    first, second = _contact("First"), _contact("Second")
    store.insert(first)
    store.insert(second)

    assert [c.name for c in store.fetch_all()] == ["First", "Second"]


def test_update_replaces_fields(clean_neo4j):
    store = Neo4jContactStore(clean_neo4j, owner_id="default")
    contact = _contact("Ana")
    store.insert(contact)
    updated = dataclasses.replace(contact, name="Bea", birthdate=date(1990, 8, 4))

    store.update(contact.id, updated)

    assert store.fetch_all() == [updated]


def test_update_and_delete_unknown_id_raise(clean_neo4j):
    store = Neo4jContactStore(clean_neo4j, owner_id="default")
    contact = _contact("Ghost")
    with pytest.raises(PersistenceError):
        store.update(contact.id, contact)
    with pytest.raises(PersistenceError):
        store.delete(contact.id)


def test_duplicate_id_insert_raises(clean_neo4j):
    store = Neo4jContactStore(clean_neo4j, owner_id="default")
    contact = _contact("Ana")
    store.insert(contact)
    with pytest.raises(PersistenceError):
        store.insert(contact)


def test_owners_are_isolated(clean_neo4j):
    mine = Neo4jContactStore(clean_neo4j, owner_id="me")
    theirs = Neo4jContactStore(clean_neo4j, owner_id="them")
    contact = _contact("Ana")
    mine.insert(contact)

    assert theirs.fetch_all() == []
    with pytest.raises(PersistenceError):
        theirs.delete(contact.id)
    assert mine.fetch_all() == [contact]


def test_directory_over_neo4j_survives_reload(clean_neo4j):
    directory = ContactDirectory(
        Neo4jContactStore(clean_neo4j), InMemoryNotificationCenter()
    )
    ana = directory.add("Ana", "555-1111", date(1990, 7, 4))
    ben = directory.add("Ben", "555-2222", date(1992, 3, 9))
    directory.update(ana.id, birthdate=date(1990, 8, 4))
    directory.remove(ben.id)

    notifications = InMemoryNotificationCenter()
    reloaded = ContactDirectory(Neo4jContactStore(clean_neo4j), notifications)
    contacts = reloaded.load()

    assert [c.id for c in contacts] == [ana.id]
    assert contacts[0].birthdate == date(1990, 8, 4)
    assert notifications.get(ana.id).trigger.month == 8


class _FakeSession:
    def __init__(self, rows) -> None:
        self._rows = rows

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def run(self, query, **params):
        return iter(self._rows)


class _FakeDriver:
    """Answers every query with the same rows; no server needed."""

    def __init__(self, rows) -> None:
        self._rows = rows

    def session(self):
        return _FakeSession(self._rows)


def _node(**overrides) -> dict:
    node = {
        "id": "c-1",
        "name": "Ana",
        "phone_number": "555-1111",
        "birthdate": "1990-07-04",
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    node.update(overrides)
    return {k: v for k, v in node.items() if v is not _MISSING}


_MISSING = object()


def test_fetch_all_decodes_nodes_without_server():
    store = Neo4jContactStore(_FakeDriver([{"c": _node()}]))
    [contact] = store.fetch_all()
    assert contact.id == "c-1"
    assert contact.birthdate == date(1990, 7, 4)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"phone_number": None},
        {"birthdate": "1990-02-30"},
        {"birthdate": _MISSING},
        {"created_at": None},
        {"created_at": "yesterday"},
    ],
)
def test_unreadable_stored_node_fails_load_with_persistence_error(overrides):
    store = Neo4jContactStore(_FakeDriver([{"c": _node(**overrides)}]))
    notifications = InMemoryNotificationCenter()
    directory = ContactDirectory(store, notifications)

    with pytest.raises(PersistenceError):
        directory.load()

    assert directory.list_contacts() == []
    assert notifications.pending() == []
