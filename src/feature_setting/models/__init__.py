"""SQLModel table exports."""

from .feature import FeatureRecord
from .setting import SettingRecord

__all__ = [
    "FeatureRecord",
    "SettingRecord",
]
