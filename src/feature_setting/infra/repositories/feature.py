"""SQLModel implementation of the Feature repository."""

from __future__ import annotations

from collections.abc import Mapping

from ...models.feature import FeatureRecord
from .base import SQLModelKeyedRepository


class SQLModelFeatureRepository(SQLModelKeyedRepository[FeatureRecord]):
    """Stores feature flags in ``fs_feature``."""

    model = FeatureRecord
    value_field = "enabled"

    def update_many(self, klass: str, values: Mapping[str, bool]) -> None:  # type: ignore[override]
        """Set the flags of existing rows."""
        super().update_many(klass, {key: bool(enabled) for key, enabled in values.items()})


__all__ = ["SQLModelFeatureRepository"]
