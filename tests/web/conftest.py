"""Web test fixtures — TestClient with shared in-memory SQLite and disk storage under tmp_path."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from studyhub.storage.factory import StorageHolder
from studyhub.storage.local import LocalStorage
from studyhub.storage.router import StorageRouter
from tests.conftest import PDF_BYTES, PNG_BYTES, SCHEMA_DDL

USER = {"X-User-Id": "1"}
OTHER_USER = {"X-User-Id": "2"}


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        for statement in SCHEMA_DDL.strip().split(";"):
            stmt = statement.strip()
            if stmt:
                conn.execute(text(stmt))
        conn.commit()

    return engine


def png(name: str = "photo.png") -> tuple:
    return (name, PNG_BYTES, "image/png")


def pdf(name: str = "paper.pdf") -> tuple:
    return (name, PDF_BYTES, "application/pdf")


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    yield engine

    engine.dispose()


@pytest.fixture()
def web_disk(tmp_path) -> LocalStorage:
    return LocalStorage(str(tmp_path / "uploads"), "http://testserver/uploads")


@pytest.fixture(autouse=True)
def web_storage(monkeypatch, web_disk) -> StorageRouter:
    """Route every upload to a disk backend under tmp_path."""
    from web.app import app

    router = StorageRouter([web_disk], disk=web_disk)
    holder = StorageHolder()
    holder.set(router)
    monkeypatch.setattr(app.state, "storage", holder)
    return router


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app, raise_server_exceptions=False)
