"""
SQL database storage backend.

Stores each collection as ordered rows of JSON payload text. Defaults to a
SQLite file; any SQLAlchemy URL works.
"""

import json
from pathlib import Path
from typing import Sequence

from sqlalchemy import Integer, MetaData, Text, create_engine, delete, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from quote_builder.models.quote import HistoryRecord, ServiceTemplate
from quote_builder.storage.base import (
    QUOTE_HISTORY,
    RECENT_SERVICES,
    LoadedState,
    decode_state,
    dump_history,
    dump_templates,
)
from quote_builder.utils.logging import ServiceLogger

# Naming convention for consistent constraint names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for storage tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class RecentServiceRow(Base):
    """One recent-service template; position 0 is the most recent."""

    __tablename__ = RECENT_SERVICES

    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)


class QuoteHistoryRow(Base):
    """One history record; position 0 is the most recent."""

    __tablename__ = QUOTE_HISTORY

    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)


class SqlStorage:
    """Persists recent services and quote history through SQLAlchemy."""

    def __init__(self, database_url: str | None = None, engine: Engine | None = None):
        """
        Initialize the database storage and create tables if needed.

        Args:
            database_url: SQLAlchemy URL, used when no engine is given
            engine: Pre-built engine
        """
        if engine is None:
            if database_url is None:
                raise ValueError("SqlStorage needs a database_url or an engine")
            _ensure_sqlite_dir(database_url)
            engine = create_engine(database_url)
        self.engine = engine
        self.logger = ServiceLogger("storage.sql")
        Base.metadata.create_all(self.engine)

    def load(self) -> LoadedState:
        with Session(self.engine) as session:
            raw_recent = self._read_rows(session, RecentServiceRow)
            raw_history = self._read_rows(session, QuoteHistoryRow)
        return decode_state(raw_recent, raw_history, self.logger)

    def save(
        self,
        recent_services: Sequence[ServiceTemplate],
        history: Sequence[HistoryRecord],
    ) -> None:
        with Session(self.engine) as session, session.begin():
            self._replace_rows(session, RecentServiceRow, dump_templates(recent_services))
            self._replace_rows(session, QuoteHistoryRow, dump_history(history))

    def _read_rows(self, session: Session, model: type[Base]) -> str:
        payloads = session.scalars(select(model.payload).order_by(model.position)).all()
        # Reassemble as one JSON array so a bad row fails the whole collection
        return "[" + ",".join(payloads) + "]"

    def _replace_rows(self, session: Session, model: type[Base], items: list[dict]) -> None:
        session.execute(delete(model))
        session.add_all(
            model(position=position, payload=json.dumps(item, ensure_ascii=False))
            for position, item in enumerate(items)
        )


def _ensure_sqlite_dir(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
