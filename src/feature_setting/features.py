"""Boolean feature flags declared per class."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from .base import DefinedStore
from .exceptions import DefinitionError
from .logging_config import get_logger
from .models.feature import FeatureRecord

logger = get_logger(__name__)


class FeatureState(enum.Enum):
    """Result of a feature lookup that keeps "not declared" apart from "disabled"."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    UNDECLARED = "undeclared"

    @property
    def declared(self) -> bool:
        return self is not FeatureState.UNDECLARED


@dataclass(frozen=True)
class FeatureAccessor:
    """Query and toggle entry points bound to one declared feature of one class."""

    owner: type["Feature"]
    name: str

    def is_enabled(self) -> bool:
        return self.owner._read(self.name)

    def enable(self) -> None:
        self.owner.enable(self.name)

    def disable(self) -> None:
        self.owner.disable(self.name)


class Feature(DefinedStore):
    """Base class for feature flags; subclasses declare ``FEATURES``."""

    DEFINITION_ATTR: ClassVar[str] = "FEATURES"
    KIND: ClassVar[str] = "feature"
    FEATURES: ClassVar[Mapping[str, bool]] = {}

    @classmethod
    def _validate_default(cls, name: str, default: Any) -> bool:
        if default is None:
            return False
        if not isinstance(default, bool):
            raise DefinitionError(
                f"{cls.__qualname__}.FEATURES[{name!r}] must be a bool, got {type(default).__name__}"
            )
        return default

    @classmethod
    def _seed_value(cls, default: bool) -> bool:
        return bool(default)

    @classmethod
    def _read_record(cls, record: FeatureRecord) -> bool:
        return bool(record.enabled)

    @classmethod
    def _make_accessor(cls, name: str) -> FeatureAccessor:
        return FeatureAccessor(cls, name)

    @classmethod
    def features(cls) -> Mapping[str, bool]:
        """All declared features with their defaults."""
        return cls.definition()

    @classmethod
    def defined_features(cls) -> list[str]:
        return cls.defined_names()

    @classmethod
    def init_features(cls, remove_old: bool = False) -> None:
        """Create missing rows, install accessors and optionally prune stale rows."""
        cls._synchronize(remove_old=remove_old)

    @classmethod
    def remove_old_features(cls) -> int:
        """Delete rows of this class whose key is no longer declared."""
        return cls._prune()

    @classmethod
    def reset_features(cls) -> None:
        """Delete every row of this class and re-seed from the defaults."""
        cls._reset()

    @classmethod
    def cache_features(cls) -> dict[str, bool]:
        """Snapshot all flags; queries serve the snapshot until the next call."""
        return cls._build_cache()

    @classmethod
    def is_enabled(cls, key: Any) -> bool:
        """Return the flag of a declared feature.

        Raises:
            UndeclaredKeyError: ``key`` is not declared; use ``state()`` to check first.
        """
        return cls.accessor(key).is_enabled()

    @classmethod
    def state(cls, key: Any) -> FeatureState:
        """Tri-state lookup that never reports an undeclared feature as disabled."""
        if cls.resolve_key(key) is None:
            return FeatureState.UNDECLARED
        return FeatureState.ENABLED if cls.is_enabled(key) else FeatureState.DISABLED

    @classmethod
    def enable(cls, key: Any) -> bool:
        """Turn a declared feature on. Undeclared keys are ignored and return False."""
        return cls._toggle(key, True)

    @classmethod
    def disable(cls, key: Any) -> bool:
        """Turn a declared feature off. Undeclared keys are ignored and return False."""
        return cls._toggle(key, False)

    @classmethod
    def _toggle(cls, key: Any, enabled: bool) -> bool:
        name = cls.resolve_key(key)
        if name is None:
            logger.debug("Ignoring undeclared feature %r for %s", key, cls.klass())
            return False
        cls.repository().update(cls.klass(), name, enabled)
        return True


__all__ = ["Feature", "FeatureAccessor", "FeatureState"]
