import os
import contextlib
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from core.config_loader import get_config

DATABASE_URL = os.environ.get("DATABASE_URL") or get_config().database.url


def build_engine(url: str) -> Engine:
    """Create an engine for `url`.

    SQLite connections may be used from the log thread, and an in-memory
    SQLite database only exists on a single shared connection.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(DATABASE_URL)
SessionLocal = make_session_factory(engine)


@contextlib.contextmanager
def db_session_scope(session_factory=None):
    """Provide a transactional scope around a series of operations."""
    session: Session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
