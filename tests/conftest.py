"""Root conftest — in-memory SQLite engine, schema fixtures and a disk-backed storage router."""

from __future__ import annotations

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from studyhub.models.media import MediaUpload
from studyhub.storage.local import LocalStorage
from studyhub.storage.router import StorageRouter

# Matches Alembic head: 8a4d2c6e1f53 (skills, concours, solutions, contestants)
SCHEMA_DDL = """
CREATE TABLE courses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    code TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    level TEXT NOT NULL DEFAULT '',
    department TEXT NOT NULL,
    instructor TEXT NOT NULL DEFAULT '',
    thumbnail_id TEXT,
    thumbnail_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE questions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    department TEXT NOT NULL,
    level TEXT NOT NULL,
    subject TEXT NOT NULL,
    year TEXT NOT NULL,
    pdf_id TEXT NOT NULL,
    pdf_url TEXT NOT NULL,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL
);

CREATE TABLE books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    author TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    pdf_id TEXT NOT NULL,
    pdf_url TEXT NOT NULL,
    thumbnail_id TEXT,
    thumbnail_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE notifications (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    thumbnail_id TEXT,
    thumbnail_url TEXT,
    video_id TEXT,
    video_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE scholarships (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    organization_name TEXT NOT NULL,
    description TEXT NOT NULL,
    location TEXT NOT NULL,
    website_link TEXT NOT NULL,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE scholarship_images (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    scholarship_id INTEGER NOT NULL REFERENCES scholarships(id) ON DELETE CASCADE,
    storage_id TEXT NOT NULL,
    url TEXT NOT NULL,
    sort_order INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE skills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    name TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    thumbnail_id TEXT,
    thumbnail_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE concours (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    year TEXT NOT NULL,
    department TEXT NOT NULL,
    pdf_id TEXT NOT NULL,
    pdf_url TEXT NOT NULL,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE solutions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    question_id INTEGER NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
    youtube_url TEXT,
    pdf_id TEXT,
    pdf_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE contestants (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    contest TEXT NOT NULL,
    name TEXT NOT NULL,
    bio TEXT NOT NULL DEFAULT '',
    image_id TEXT,
    image_url TEXT,
    created_by INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);
"""

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%fake\n"
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 32


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture()
def disk(tmp_path) -> LocalStorage:
    return LocalStorage(str(tmp_path / "uploads"), "http://testserver/uploads")


@pytest.fixture()
def disk_router(disk) -> StorageRouter:
    return StorageRouter([disk], disk=disk)


def _image(data: bytes = PNG_BYTES, content_type: str = "image/png", filename: str = "photo.png") -> MediaUpload:
    return MediaUpload(data=data, content_type=content_type, filename=filename)


def _pdf(data: bytes = PDF_BYTES, filename: str = "paper.pdf") -> MediaUpload:
    return MediaUpload(data=data, content_type="application/pdf", filename=filename)


def _video(data: bytes = MP4_BYTES, filename: str = "clip.mp4") -> MediaUpload:
    return MediaUpload(data=data, content_type="video/mp4", filename=filename)


@pytest.fixture()
def sample_image():
    return _image


@pytest.fixture()
def sample_pdf():
    return _pdf


@pytest.fixture()
def sample_video():
    return _video
