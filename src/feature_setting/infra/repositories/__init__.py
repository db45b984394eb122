"""Concrete repository implementations using SQLModel."""

from .feature import SQLModelFeatureRepository
from .setting import SQLModelSettingRepository

__all__ = [
    "SQLModelFeatureRepository",
    "SQLModelSettingRepository",
]
