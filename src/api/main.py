"""
FastAPI backend: REST API over the contact directory.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from neo4j import GraphDatabase
from pydantic import BaseModel

from contactbook.application import ContactDirectory
from contactbook.domain import (
    Contact,
    ContactBookError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from contactbook.infrastructure import (
    InMemoryContactStore,
    InMemoryNotificationCenter,
    Neo4jContactStore,
    ensure_contact_constraint,
    phone_normalizer,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _build_directory(app: FastAPI) -> ContactDirectory:
    """Wire ports from the environment. CONTACTBOOK_STORE selects memory or neo4j."""
    backend = os.environ.get("CONTACTBOOK_STORE", STORE_MEMORY).strip().lower()
    if backend == STORE_NEO4J:
        app.state.driver = _get_driver()
        ensure_contact_constraint(app.state.driver)
        owner_id = os.environ.get("CONTACTBOOK_OWNER_ID", "default").strip() or "default"
        store = Neo4jContactStore(app.state.driver, owner_id=owner_id)
    elif backend == STORE_MEMORY:
        store = InMemoryContactStore()
    else:
        raise RuntimeError(f"Unknown CONTACTBOOK_STORE {backend!r} (use memory or neo4j).")
    logger.info("Contact store: %s", backend)
    app.state.notifications = InMemoryNotificationCenter()
    region = os.environ.get("CONTACTBOOK_PHONE_REGION", "").strip().upper() or None
    return ContactDirectory(
        store,
        app.state.notifications,
        normalize_phone=phone_normalizer(region),
    )


def create_app(directory: ContactDirectory | None = None, notifications=None) -> FastAPI:
    """Build the app. Pass a directory to skip environment wiring (tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            if app.state.directory is None:
                app.state.directory = _build_directory(app)
            app.state.directory.load()
            yield
        finally:
            if getattr(app.state, "driver", None) is not None:
                app.state.driver.close()

    app = FastAPI(title="Contactbook API", lifespan=lifespan)
    app.state.directory = directory
    app.state.notifications = notifications
    app.state.driver = None
    _register_routes(app)
    return app


def get_directory(request: Request) -> ContactDirectory:
    app = request.app
    if app.state.directory is None:
        app.state.directory = _build_directory(app)
        app.state.directory.load()
    return app.state.directory


def _http_error(exc: ContactBookError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, PersistenceError):
        logger.error("Store failure: %s", exc)
        return HTTPException(status_code=503, detail="Contact store unavailable")
    return HTTPException(status_code=500, detail=str(exc))


class ContactBody(BaseModel):
    name: str
    phone_number: str
    birthdate: date


class ContactPatchBody(BaseModel):
    name: str | None = None
    phone_number: str | None = None
    birthdate: date | None = None


class ContactItem(BaseModel):
    id: str
    name: str
    phone_number: str
    birthdate: date
    created_at: str


class ReminderItem(BaseModel):
    key: str
    title: str
    body: str
    month: int
    day: int
    repeats: bool


def _to_item(contact: Contact) -> ContactItem:
    return ContactItem(
        id=contact.id,
        name=contact.name,
        phone_number=contact.phone_number,
        birthdate=contact.birthdate,
        created_at=contact.created_at.isoformat(),
    )


def _register_routes(app: FastAPI) -> None:
    # --- REST: health ---

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # --- REST: contacts ---

    @app.get("/contacts")
    def list_contacts(request: Request, phone: str | None = None):
        directory = get_directory(request)
        if phone is not None:
            contacts = directory.find_by_phone(phone)
        else:
            contacts = directory.list_contacts()
        return [_to_item(c) for c in contacts]

    @app.get("/contacts/{contact_id}")
    def get_contact(contact_id: str, request: Request):
        try:
            return _to_item(get_directory(request).get(contact_id))
        except ContactBookError as exc:
            raise _http_error(exc) from exc

    @app.post("/contacts", status_code=201)
    def create_contact(body: ContactBody, request: Request):
        try:
            contact = get_directory(request).add(body.name, body.phone_number, body.birthdate)
        except ContactBookError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.patch("/contacts/{contact_id}")
    def update_contact(contact_id: str, body: ContactPatchBody, request: Request):
        try:
            contact = get_directory(request).update(
                contact_id,
                name=body.name,
                phone_number=body.phone_number,
                birthdate=body.birthdate,
            )
        except ContactBookError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.delete("/contacts/{contact_id}", status_code=204)
    def delete_contact(contact_id: str, request: Request):
        try:
            get_directory(request).remove(contact_id)
        except ContactBookError as exc:
            raise _http_error(exc) from exc
        return Response(status_code=204)

    # --- REST: reminders ---

    @app.get("/reminders")
    def list_reminders(request: Request):
        get_directory(request)
        notifications = request.app.state.notifications
        if not isinstance(notifications, InMemoryNotificationCenter):
            raise HTTPException(status_code=404, detail="Reminder backend is not inspectable")
        return [
            ReminderItem(
                key=r.key,
                title=r.title,
                body=r.body,
                month=r.trigger.month,
                day=r.trigger.day,
                repeats=r.trigger.repeats,
            )
            for r in notifications.pending()
        ]


app = create_app()
