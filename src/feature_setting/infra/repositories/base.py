"""Shared SQLModel plumbing for (klass, key) keyed record tables."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from ...exceptions import MissingRecordError
from ...logging_config import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


class SQLModelKeyedRepository(Generic[RecordT]):
    """Find-or-create/update/prune for a table with ``klass``, ``key`` and one value column."""

    model: ClassVar[type]
    value_field: ClassVar[str]

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _select_one(self, session: Session, klass: str, key: str) -> Optional[RecordT]:
        statement = select(self.model).where(self.model.klass == klass, self.model.key == key)
        return session.exec(statement).first()

    def _select_klass(self, session: Session, klass: str) -> list[RecordT]:
        statement = (
            select(self.model)
            .where(self.model.klass == klass)
            .order_by(self.model.id)  # type: ignore
        )
        return list(session.exec(statement).all())

    def find_or_create(self, klass: str, key: str, default: Any) -> RecordT:
        """Return the row for (klass, key), inserting it with ``default`` if absent.

        The (klass, key) unique constraint decides concurrent inserts: the loser
        rolls back and returns the row the winner stored.
        """
        with self.session_factory() as session:
            record = self._select_one(session, klass, key)
            if record is None:
                record = self.model(klass=klass, key=key, **{self.value_field: default})
                session.add(record)
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    logger.info("Concurrent insert of %s.%s, using stored row", klass, key)
                    record = self._select_one(session, klass, key)
                    if record is None:
                        raise
                else:
                    logger.debug("Created %s row %s.%s", self.model.__tablename__, klass, key)
            session.refresh(record)
            session.expunge(record)
            return record

    def find(self, klass: str, key: str) -> Optional[RecordT]:
        """Retrieve the row for (klass, key)."""
        with self.session_factory() as session:
            record = self._select_one(session, klass, key)
            if record:
                session.expunge(record)
            return record

    def find_all(self, klass: str) -> list[RecordT]:
        """List every row stored for ``klass`` in insertion order."""
        with self.session_factory() as session:
            rows = self._select_klass(session, klass)
            session.expunge_all()
            return rows

    def update(self, klass: str, key: str, value: Any) -> None:
        """Overwrite the value column of an existing row."""
        self.update_many(klass, {key: value})

    def update_many(self, klass: str, values: Mapping[str, Any]) -> None:
        """Overwrite several rows of ``klass`` in one transaction.

        Every key must already be stored; if one is missing nothing is written.
        """
        with self.session_factory() as session:
            rows = {row.key: row for row in self._select_klass(session, klass)}
            for key in values:
                if key not in rows:
                    raise MissingRecordError(klass, key)
            for key, value in values.items():
                setattr(rows[key], self.value_field, value)
                session.add(rows[key])
            session.commit()

    def delete_where(self, klass: str, keep: set[str]) -> int:
        """Delete rows of ``klass`` whose key is not in ``keep``; return how many."""
        with self.session_factory() as session:
            stale = [row for row in self._select_klass(session, klass) if row.key not in keep]
            for row in stale:
                session.delete(row)
            session.commit()
            return len(stale)

    def delete_all(self, klass: str) -> int:
        """Delete every row stored for ``klass``; return how many."""
        with self.session_factory() as session:
            rows = self._select_klass(session, klass)
            for row in rows:
                session.delete(row)
            session.commit()
            return len(rows)

    def all_keys(self, klass: str) -> set[str]:
        """Return the keys stored for ``klass``."""
        with self.session_factory() as session:
            statement = select(self.model.key).where(self.model.klass == klass)
            return set(session.exec(statement).all())


__all__ = ["SQLModelKeyedRepository"]
