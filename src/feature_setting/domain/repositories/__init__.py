"""Repository protocol definitions for domain layer."""

from .feature import FeatureRepository
from .setting import SettingRepository

__all__ = [
    "FeatureRepository",
    "SettingRepository",
]
