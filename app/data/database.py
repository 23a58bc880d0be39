# app/data/database.py
from datetime import datetime, timezone
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.utils.settings import DATABASE_URL, SQL_ECHO

#sqlite potrzebuje check_same_thread przy fastapi (threadpool)
connect_args: dict = {}
engine_kwargs: dict = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        #jedno polaczenie, inaczej kazda sesja dostaje pusta baze
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    future=True,
    connect_args=connect_args,
    **engine_kwargs,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    #sqlite domyslnie ignoruje ON DELETE RESTRICT/CASCADE
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@event.listens_for(Session, "before_flush")
def _update_audit_fields(session: Session, flush_context, instances):
    """
    Pola audytowe (created_at, updated_at, created_by, updated_by)
    ustawiane automatycznie przy kazdym flush.
    """
    from app.data.models.base import BaseEntity

    now = datetime.now(timezone.utc)
    actor = session.info.get("actor")

    for obj in session.new:
        if isinstance(obj, BaseEntity):
            obj.created_at = now
            obj.updated_at = now
            if actor and not obj.created_by:
                obj.created_by = actor

    for obj in session.dirty:
        if isinstance(obj, BaseEntity) and session.is_modified(obj, include_collections=False):
            obj.updated_at = now
            if actor:
                obj.updated_by = actor


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    #import modeli, zeby SQLAlchemy je zarejestrowal w Base.metadata
    import app.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
