"""Setting repository protocol."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional, Protocol, runtime_checkable

from ...models.setting import SettingRecord


@runtime_checkable
class SettingRepository(Protocol):
    """Record storage for Setting subclasses, keyed by (klass, key)."""

    def find_or_create(self, klass: str, key: str, default: Optional[str]) -> SettingRecord:
        """Return the row for (klass, key), inserting it with ``default`` if absent."""
        ...

    def find(self, klass: str, key: str) -> Optional[SettingRecord]:
        """Retrieve the row for (klass, key)."""
        ...

    def find_all(self, klass: str) -> list[SettingRecord]:
        """List every row stored for ``klass``."""
        ...

    def update(self, klass: str, key: str, value: Optional[str]) -> None:
        """Overwrite the stored value of an existing row."""
        ...

    def update_many(self, klass: str, values: Mapping[str, Optional[str]]) -> None:
        """Overwrite several existing rows at once; nothing is written if one is missing."""
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
