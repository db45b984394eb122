"""Pytest configuration and shared fixtures for feature_setting tests.

Every test gets a throwaway SQLite file with the fs_setting and fs_feature
tables, SQLModel repositories on top of it, and the Setting/Feature base
classes bound to those repositories for the duration of the test.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

from feature_setting.codec import Symbol
from feature_setting.features import Feature
from feature_setting.infra.repositories import SQLModelFeatureRepository, SQLModelSettingRepository
# Import all models to ensure they're registered with SQLModel metadata
from feature_setting.models import FeatureRecord, SettingRecord  # noqa: F401
from feature_setting.settings import Setting

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect (Callable[[], Session])."""

    @contextmanager
    def session_context():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return session_context


@pytest.fixture
def db_session(db_engine):
    """Plain session for inspecting or seeding rows behind the repositories' back."""
    with Session(db_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingRepository:
    return SQLModelSettingRepository(session_factory)


@pytest.fixture
def features_repo(session_factory) -> SQLModelFeatureRepository:
    return SQLModelFeatureRepository(session_factory)


@pytest.fixture
def bound_store(settings_repo, features_repo):
    """Bind Setting and Feature to the per-test repositories."""
    Setting.use_repository(settings_repo)
    Feature.use_repository(features_repo)
    yield settings_repo, features_repo
    Setting.use_repository(None)
    Feature.use_repository(None)


# =============================================================================
# Declared classes
# =============================================================================


@pytest.fixture
def sample_setting(bound_store) -> type[Setting]:
    """A freshly defined Setting subclass with every kind of default."""

    class SampleSetting(Setting):
        SETTINGS = {
            "test": "value",
            "version": "0.1.0",
            "sym_test": Symbol("a_symbol"),
            "hash_test": {
                "one": Symbol("two"),
                "three": {"four": Symbol("five"), "six": Symbol("seven")},
            },
        }

    return SampleSetting


@pytest.fixture
def sample_feature(bound_store) -> type[Feature]:
    """A freshly defined Feature subclass."""

    class SampleFeature(Feature):
        FEATURES = {"test": False, "beta_ui": True}

    return SampleFeature


@pytest.fixture
def stored_rows(db_engine):
    """Return a reader for every row of a model stored for a klass, bypassing the repositories."""

    def _read(model, klass: str) -> list:
        statement = select(model).where(model.klass == klass).order_by(model.id)  # type: ignore
        with Session(db_engine, expire_on_commit=False) as session:
            return list(session.exec(statement).all())

    return _read
