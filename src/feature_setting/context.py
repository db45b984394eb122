"""Store context wiring engine, schema, repositories and base-class bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .domain.repositories import FeatureRepository, SettingRepository
from .features import Feature
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelFeatureRepository, SQLModelSettingRepository
from .logging_config import get_logger
from .settings import Setting

logger = get_logger(__name__)


@dataclass
class StoreContext:
    """Everything a process needs to use Setting and Feature subclasses."""

    config: BaseConfig
    engine: object
    session_factory: Callable[[], Session]
    settings_repo: SettingRepository
    features_repo: FeatureRepository

    def bind(self) -> None:
        """Point the Setting and Feature base classes at this context's repositories."""
        Setting.use_repository(self.settings_repo)
        Feature.use_repository(self.features_repo)

    def dispose(self) -> None:
        self.engine.dispose()  # type: ignore[attr-defined]


def create_store_context(config: Optional[BaseConfig] = None, *, bind: bool = True) -> StoreContext:
    """Create the engine and tables, build repositories and optionally bind them."""

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    context = StoreContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        settings_repo=SQLModelSettingRepository(session_factory),
        features_repo=SQLModelFeatureRepository(session_factory),
    )
    if bind:
        context.bind()
    logger.info("Store context ready", extra={"database_url": engine.url.render_as_string(hide_password=True)})
    return context
