"""Persisted rows backing Setting subclasses."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field, SQLModel


class SettingRecord(SQLModel, table=True):
    """One stored value of one declared setting, scoped by owning class."""

    __tablename__: ClassVar[str] = "fs_setting"
    __table_args__ = (UniqueConstraint("klass", "key", name="uq_fs_setting_klass_key"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(nullable=False, max_length=128)
    klass: str = Field(nullable=False, max_length=255, index=True)
    value: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
