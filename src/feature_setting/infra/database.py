"""Engine, schema and session plumbing for the settings and feature tables."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger
from ..models import FeatureRecord, SettingRecord

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]

STORE_TABLES = (SettingRecord.__table__, FeatureRecord.__table__)


def create_db_engine(config: BaseConfig) -> Engine:
    """Create the engine described by ``config.DATABASE_URL``."""
    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    logger.debug("Engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def init_database(engine: Engine) -> None:
    """Create fs_setting and fs_feature if missing.

    Other tables registered on the shared SQLModel metadata are left to their owners.
    """
    SQLModel.metadata.create_all(engine, tables=list(STORE_TABLES))


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """One transaction: commit on success, roll back on any error."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return the zero-argument session factory the repositories take."""

    def factory() -> ContextManager[Session]:
        return session_scope(engine)

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, SessionFactory]:
    """Create the engine and store tables; return (engine, session_factory)."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
