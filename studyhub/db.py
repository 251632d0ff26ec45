import logging
from pathlib import Path

from alembic.config import Config
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from alembic import command
from studyhub.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_engine: Engine | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(db_url: str) -> Engine:
    """Create an engine for ``db_url``.

    SQLite connections are shared with the request threadpool and need
    ``PRAGMA foreign_keys`` so solution rows cascade with their question.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        engine = create_engine(url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(url, pool_pre_ping=True, pool_recycle=1800)
    logger.info("Database engine created", extra={"backend": url.get_backend_name()})
    return engine


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = build_engine(settings.db_url)
    return _engine


def alembic_config() -> Config:
    """Alembic config for the bundled migrations, wherever the process was started."""
    ini_path = PROJECT_ROOT / "alembic.ini"
    if not ini_path.exists():
        ini_path = Path.cwd() / "alembic.ini"
    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def initialize_db() -> None:
    """Upgrade the configured database to the latest revision."""
    logger.info("Running Alembic migrations")
    command.upgrade(alembic_config(), "head")
    logger.info("Migrations complete")
