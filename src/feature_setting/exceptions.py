"""Exception hierarchy for the settings and feature stores."""

from __future__ import annotations


class FeatureSettingError(Exception):
    """Base exception for all feature_setting errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UndeclaredKeyError(FeatureSettingError, KeyError):
    """A name was looked up that the owning class never declared."""

    def __init__(self, klass: str, key: object):
        self.klass = klass
        self.key = key
        super().__init__(f"{key!r} is not declared on {klass}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class MissingRecordError(FeatureSettingError, LookupError):
    """A declared name has no persisted row (not synchronized yet, or deleted)."""

    def __init__(self, klass: str, key: str):
        self.klass = klass
        self.key = key
        super().__init__(
            f"No stored record for {klass}.{key}; run the init step before reading or writing"
        )


class SerializationError(FeatureSettingError, ValueError):
    """A value cannot be converted to its stored representation."""

    def __init__(self, value: object, reason: str | None = None):
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot store value of type {type(value).__name__}{detail}")


class DefinitionError(FeatureSettingError, TypeError):
    """A SETTINGS/FEATURES definition map is malformed."""


class StoreNotConfiguredError(FeatureSettingError, RuntimeError):
    """A store operation needs a repository but none has been bound."""

    def __init__(self, klass: str):
        self.klass = klass
        super().__init__(f"No repository bound for {klass}; call use_repository() first")


__all__ = [
    "DefinitionError",
    "FeatureSettingError",
    "MissingRecordError",
    "SerializationError",
    "StoreNotConfiguredError",
    "UndeclaredKeyError",
]
