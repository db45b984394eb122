"""Per-class settings and feature flags persisted in a relational table."""

from __future__ import annotations

from .codec import IndifferentDict, Symbol
from .config import BaseConfig
from .context import StoreContext, create_store_context
from .exceptions import (
    DefinitionError,
    FeatureSettingError,
    MissingRecordError,
    SerializationError,
    StoreNotConfiguredError,
    UndeclaredKeyError,
)
from .features import Feature, FeatureAccessor, FeatureState
from .settings import Setting, SettingAccessor

__all__ = [
    "BaseConfig",
    "DefinitionError",
    "Feature",
    "FeatureAccessor",
    "FeatureSettingError",
    "FeatureState",
    "IndifferentDict",
    "MissingRecordError",
    "SerializationError",
    "Setting",
    "SettingAccessor",
    "StoreContext",
    "StoreNotConfiguredError",
    "Symbol",
    "UndeclaredKeyError",
    "create_store_context",
]
