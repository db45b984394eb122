"""Typed key/value settings declared per class.

Usage::

    class MailerSetting(Setting):
        SETTINGS = {"sender": "noreply@example.com", "retries": 3}

    Setting.use_repository(SQLModelSettingRepository(session_factory))
    MailerSetting.init_settings()
    MailerSetting.get("retries")          # 3
    MailerSetting.set(retries=5)
    MailerSetting.accessor("sender").set("ops@example.com")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from . import codec
from .base import DefinedStore
from .logging_config import get_logger
from .models.setting import SettingRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class SettingAccessor:
    """Getter/setter pair bound to one declared setting of one class."""

    owner: type["Setting"]
    name: str

    def get(self) -> Any:
        return self.owner._read(self.name)

    def set(self, value: Any) -> None:
        self.owner.set(self.name, value)


class Setting(DefinedStore):
    """Base class for settings; subclasses declare ``SETTINGS``."""

    DEFINITION_ATTR: ClassVar[str] = "SETTINGS"
    KIND: ClassVar[str] = "setting"
    SETTINGS: ClassVar[Mapping[str, Any]] = {}

    @classmethod
    def _seed_value(cls, default: Any) -> Optional[str]:
        return codec.encode(default)

    @classmethod
    def _read_record(cls, record: SettingRecord) -> Any:
        return codec.decode(record.value)

    @classmethod
    def _make_accessor(cls, name: str) -> SettingAccessor:
        return SettingAccessor(cls, name)

    @classmethod
    def settings(cls) -> Mapping[str, Any]:
        """All declared settings with their defaults."""
        return cls.definition()

    @classmethod
    def defined_keys(cls) -> list[str]:
        return cls.defined_names()

    @classmethod
    def init_settings(cls, remove_old: bool = False) -> None:
        """Create missing rows, install accessors and optionally prune stale rows.

        Safe to call repeatedly: existing rows keep their stored values.

        Raises:
            SerializationError: a declared default cannot be stored.
        """
        cls._synchronize(remove_old=remove_old)

    @classmethod
    def remove_old_settings(cls) -> int:
        """Delete rows of this class whose key is no longer declared."""
        return cls._prune()

    @classmethod
    def reset_settings(cls) -> None:
        """Delete every row of this class and re-seed from the defaults."""
        cls._reset()

    @classmethod
    def cache_settings(cls) -> dict[str, Any]:
        """Snapshot all stored values; readers serve the snapshot until the next call."""
        return cls._build_cache()

    @classmethod
    def get(cls, key: Any) -> Any:
        return cls.accessor(key).get()

    @classmethod
    def set(cls, key_or_mapping: Any = None, value: Any = None, /, **values: Any) -> list[str]:
        """Store one or more settings.

        Accepts ``set("key", value)``, ``set({"key": value, ...})`` or
        ``set(key=value, ...)``. Keys that are not declared are ignored.
        ``None`` is stored as ``False``. All values are written in one
        transaction, so either every row changes or none does. The cache is
        left untouched.

        Returns:
            The declared names that were written.

        Raises:
            SerializationError: a value cannot be stored.
            MissingRecordError: a declared row is not stored.
        """
        if isinstance(key_or_mapping, Mapping):
            pairs = list(key_or_mapping.items())
        elif key_or_mapping is None:
            pairs = []
        else:
            pairs = [(key_or_mapping, value)]
        pairs.extend(values.items())

        klass = cls.klass()
        encoded: dict[str, Optional[str]] = {}
        for key, raw in pairs:
            name = cls.resolve_key(key)
            if name is None:
                logger.debug("Ignoring undeclared setting %r for %s", key, klass)
                continue
            encoded[name] = codec.encode(raw)

        if encoded:
            cls.repository().update_many(klass, encoded)
        return list(encoded)

    @classmethod
    def existing_key(cls, key: Any = None, mapping: Optional[Mapping[Any, Any]] = None) -> Optional[str]:
        """Return the declared name referenced by ``key`` or by the first key of ``mapping``."""
        name = cls.resolve_key(key)
        if name is None and mapping:
            name = cls.resolve_key(next(iter(mapping)))
        return name


__all__ = ["Setting", "SettingAccessor"]
