"""Engine and session factory, built lazily from ``AppSettings.database_url``."""

import logging

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from projectdesk.config.settings import get_settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_sessionmaker: sessionmaker[Session] | None = None


def is_sqlite_url(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    # projects.parent_id relies on ON DELETE CASCADE.
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        settings = get_settings()
        sqlite = is_sqlite_url(settings.database_url)
        _engine = create_engine(
            settings.database_url,
            echo=settings.database_echo,
            connect_args={"check_same_thread": False} if sqlite else {},
        )
        if sqlite:
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Database engine ready (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_sessionmaker() -> sessionmaker[Session]:
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = sessionmaker(bind=get_engine(), expire_on_commit=False, class_=Session)
    return _sessionmaker


def reset_database_state() -> None:
    """Dispose the engine and forget the session factory; the next call rebuilds both."""
    global _engine, _sessionmaker
    _sessionmaker = None
    if _engine is not None:
        _engine.dispose()
    _engine = None
