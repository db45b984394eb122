"""Persisted rows backing Feature subclasses."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FeatureRecord(SQLModel, table=True):
    """Boolean flag state of one declared feature, scoped by owning class."""

    __tablename__: ClassVar[str] = "fs_feature"
    __table_args__ = (UniqueConstraint("klass", "key", name="uq_fs_feature_klass_key"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(nullable=False, max_length=128)
    klass: str = Field(nullable=False, max_length=255, index=True)
    enabled: bool = Field(default=False, nullable=False)
