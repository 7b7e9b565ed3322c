from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings


def create_engine_for(database_url: str) -> AsyncEngine:
    engine_kwargs: dict = {"echo": False, "future": True}
    if database_url.startswith("sqlite+aiosqlite"):
        engine_kwargs["connect_args"] = {"timeout": 30}
    return create_async_engine(database_url, **engine_kwargs)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


engine = create_engine_for(get_settings().database_url)
SessionLocal = create_session_factory(engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session
