"""SQLModel implementation of the Setting repository."""

from __future__ import annotations

from ...models.setting import SettingRecord
from .base import SQLModelKeyedRepository


class SQLModelSettingRepository(SQLModelKeyedRepository[SettingRecord]):
    """Stores encoded setting values in ``fs_setting``."""

    model = SettingRecord
    value_field = "value"


__all__ = ["SQLModelSettingRepository"]
