from __future__ import annotations

from sqlalchemy import String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.repositories.base import AbstractKeyValueStore


class Base(DeclarativeBase):
    pass


class KeyValueORM(Base):
    __tablename__ = "key_values"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class SQLiteKeyValueStore(AbstractKeyValueStore):
    def __init__(self, database_url: str) -> None:
        # In-memory databases only live as long as their single connection
        if database_url.endswith(":memory:"):
            self.engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(database_url)
        self.session_maker: sessionmaker[Session] = sessionmaker(
            self.engine, expire_on_commit=False
        )

    def initialize(self) -> None:
        Base.metadata.create_all(self.engine)

    def get(self, key: str) -> str | None:
        with self.session_maker() as session:
            row = session.get(KeyValueORM, key)
            return row.value if row else None

    def put(self, key: str, value: str) -> None:
        with self.session_maker() as session, session.begin():
            row = session.get(KeyValueORM, key)
            if row:
                row.value = value
            else:
                session.add(KeyValueORM(key=key, value=value))

    def close(self) -> None:
        self.engine.dispose()
