"""Async SQLAlchemy engine, session factory, and declarative base."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.config import Settings, get_settings

__all__ = [
    "AsyncSessionLocal",
    "Base",
    "Settings",
    "create_engine",
    "create_session_factory",
    "engine",
]


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, pool_pre_ping=True)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine(get_settings().database_url)

AsyncSessionLocal = create_session_factory(engine)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
