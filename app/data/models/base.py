# app/data/models/base.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Boolean, false

from app.data.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseEntity(Base):
    """
    Wspolne pola dla wszystkich encji: id, znaczniki czasu, soft delete, audyt.
    Rekord z is_deleted=True nie jest fizycznie usuwany, tylko pomijany w zapytaniach.
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    created_by = Column(String(100), nullable=True)
    updated_by = Column(String(100), nullable=True)

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        status = "deleted" if self.is_deleted else "active"
        return f"<{self.__class__.__name__}(id={self.id}, status={status})>"
