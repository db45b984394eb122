"""Shared machinery for classes that declare named defaults backed by stored rows.

A subclass declares its defaults once as a class attribute (``SETTINGS`` or
``FEATURES``). The mapping is frozen when the class is created. Synchronizing
the class seeds missing rows, builds one accessor per declared name and can
prune rows that are no longer declared. Each subclass owns its own rows
(keyed by its fully-qualified name), accessor table and cache snapshot.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Optional

from .exceptions import (
    DefinitionError,
    MissingRecordError,
    StoreNotConfiguredError,
    UndeclaredKeyError,
)
from .logging_config import get_logger

logger = get_logger(__name__)


def _deep_freeze(value: Any) -> Any:
    """Return ``value`` with nested mappings as read-only proxies and lists as tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _deep_freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_deep_freeze(item) for item in value)
    return value


class DefinedStore:
    """Base for Setting and Feature; not used directly."""

    DEFINITION_ATTR: ClassVar[str] = ""
    KIND: ClassVar[str] = "entry"

    _repository: ClassVar[Any] = None
    _accessors: ClassVar[dict[str, Any]] = {}
    _cache: ClassVar[Optional[dict[str, Any]]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._accessors = {}
        cls._cache = None
        attr = cls.DEFINITION_ATTR
        if attr and attr in cls.__dict__:
            setattr(cls, attr, cls._freeze_definition(cls.__dict__[attr]))

    @classmethod
    def _freeze_definition(cls, raw: Any) -> Mapping[str, Any]:
        if not isinstance(raw, Mapping):
            raise DefinitionError(f"{cls.__qualname__}.{cls.DEFINITION_ATTR} must be a mapping")
        frozen: dict[str, Any] = {}
        for name, default in raw.items():
            if not isinstance(name, str) or not name:
                raise DefinitionError(
                    f"{cls.__qualname__}.{cls.DEFINITION_ATTR} has invalid name {name!r}"
                )
            frozen[str.__str__(name)] = _deep_freeze(cls._validate_default(name, default))
        return MappingProxyType(frozen)

    @classmethod
    def _validate_default(cls, name: str, default: Any) -> Any:
        return default

    # -- hooks for subclasses ------------------------------------------------

    @classmethod
    def _seed_value(cls, default: Any) -> Any:
        raise NotImplementedError

    @classmethod
    def _read_record(cls, record: Any) -> Any:
        raise NotImplementedError

    @classmethod
    def _make_accessor(cls, name: str) -> Any:
        raise NotImplementedError

    # -- registry ------------------------------------------------------------

    @classmethod
    def klass(cls) -> str:
        """Storage identity of this class: its fully-qualified name."""
        return f"{cls.__module__}.{cls.__qualname__}"

    @classmethod
    def definition(cls) -> Mapping[str, Any]:
        """The frozen name -> default map declared by this class."""
        return getattr(cls, cls.DEFINITION_ATTR, MappingProxyType({}))

    @classmethod
    def defined_names(cls) -> list[str]:
        return list(cls.definition())

    @classmethod
    def resolve_key(cls, key: Any) -> Optional[str]:
        """Return the declared name ``key`` refers to, or None.

        Symbols and strings are interchangeable; an exact match wins over a
        case-insensitive one.
        """
        if key is None:
            return None
        definition = cls.definition()
        name = str(key)
        if name in definition:
            return str.__str__(name)
        folded = name.casefold()
        matches = [declared for declared in definition if declared.casefold() == folded]
        if len(matches) == 1:
            return matches[0]
        return None

    # -- storage binding -----------------------------------------------------

    @classmethod
    def use_repository(cls, repository: Any) -> None:
        """Bind the record storage used by this class and its subclasses."""
        cls._repository = repository

    @classmethod
    def repository(cls) -> Any:
        if cls._repository is None:
            raise StoreNotConfiguredError(cls.klass())
        return cls._repository

    @classmethod
    def count(cls) -> int:
        """Number of rows stored for this class."""
        return len(cls.repository().all_keys(cls.klass()))

    @classmethod
    def stored_keys(cls) -> set[str]:
        return cls.repository().all_keys(cls.klass())

    # -- synchronization -----------------------------------------------------

    @classmethod
    def _synchronize(cls, remove_old: bool = False) -> None:
        repository = cls.repository()
        klass = cls.klass()
        # Seed values are computed before any write so a bad default stores nothing
        seeds = {name: cls._seed_value(default) for name, default in cls.definition().items()}
        for name, seed in seeds.items():
            repository.find_or_create(klass, name, seed)
        cls._install_accessors()
        logger.info("Synchronized %d %s(s) for %s", len(seeds), cls.KIND, klass)
        if remove_old:
            cls._prune()

    @classmethod
    def _install_accessors(cls) -> None:
        cls._accessors = {name: cls._make_accessor(name) for name in cls.definition()}

    @classmethod
    def _prune(cls) -> int:
        klass = cls.klass()
        removed = cls.repository().delete_where(klass, set(cls.definition()))
        if removed:
            logger.info("Removed %d stale %s row(s) for %s", removed, cls.KIND, klass)
        return removed

    @classmethod
    def _reset(cls) -> None:
        klass = cls.klass()
        removed = cls.repository().delete_all(klass)
        cls._cache = None
        logger.info("Reset %s: deleted %d row(s)", klass, removed)
        cls._synchronize()

    # -- accessors -----------------------------------------------------------

    @classmethod
    def accessors(cls) -> Mapping[str, Any]:
        """Read-only view of the accessors installed by the last synchronization."""
        return MappingProxyType(cls._accessors)

    @classmethod
    def accessor(cls, key: Any) -> Any:
        """Return the accessor for a declared name.

        Raises:
            UndeclaredKeyError: ``key`` is not declared on this class.
            MissingRecordError: the class has not been synchronized yet.
        """
        name = cls.resolve_key(key)
        if name is None:
            raise UndeclaredKeyError(cls.klass(), key)
        try:
            return cls._accessors[name]
        except KeyError:
            raise MissingRecordError(cls.klass(), name) from None

    @classmethod
    def _read(cls, name: str) -> Any:
        if cls._cache is not None:
            try:
                return copy.deepcopy(cls._cache[name])
            except KeyError:
                raise MissingRecordError(cls.klass(), name) from None
        record = cls.repository().find(cls.klass(), name)
        if record is None:
            raise MissingRecordError(cls.klass(), name)
        return cls._read_record(record)

    # -- cache ---------------------------------------------------------------

    @classmethod
    def _build_cache(cls) -> dict[str, Any]:
        klass = cls.klass()
        rows = cls.repository().find_all(klass)
        cls._cache = {row.key: cls._read_record(row) for row in rows}
        logger.info("Cached %d %s value(s) for %s", len(cls._cache), cls.KIND, klass)
        return copy.deepcopy(cls._cache)

    @classmethod
    def is_cached(cls) -> bool:
        return cls._cache is not None

    @classmethod
    def clear_cache(cls) -> None:
        """Drop the snapshot; readers go back to storage."""
        cls._cache = None


__all__ = ["DefinedStore"]
