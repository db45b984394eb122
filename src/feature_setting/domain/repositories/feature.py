"""Feature repository protocol."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional, Protocol, runtime_checkable

from ...models.feature import FeatureRecord


@runtime_checkable
class FeatureRepository(Protocol):
    """Record storage for Feature subclasses, keyed by (klass, key)."""

    def find_or_create(self, klass: str, key: str, default: bool) -> FeatureRecord:
        """Return the row for (klass, key), inserting it with ``default`` if absent."""
        ...

    def find(self, klass: str, key: str) -> Optional[FeatureRecord]:
        """Retrieve the row for (klass, key)."""
        ...

    def find_all(self, klass: str) -> list[FeatureRecord]:
        """List every row stored for ``klass``."""
        ...

    def update(self, klass: str, key: str, enabled: bool) -> None:
        """Overwrite the flag of an existing row."""
        ...

    def update_many(self, klass: str, values: Mapping[str, bool]) -> None:
        """Overwrite several existing flags at once; nothing is written if one is missing."""
        ...

    def delete_where(self, klass: str, keep: set[str]) -> int:
        """Delete rows of ``klass`` whose key is not in ``keep``."""
        ...

    def delete_all(self, klass: str) -> int:
        """Delete every row stored for ``klass``."""
        ...

    def all_keys(self, klass: str) -> set[str]:
        """Return the keys stored for ``klass``."""
        ...
