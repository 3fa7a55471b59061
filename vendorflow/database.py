import logging

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text
from .config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, future=True)

# Objects stay usable after commit; services read them back into responses
async_session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def _recreate_schema(conn) -> None:
    logger.warning("RECREATE_TABLES is set, dropping every table in the public schema")
    await conn.execute(text("DROP SCHEMA public CASCADE"))
    await conn.execute(text("CREATE SCHEMA public"))
    await conn.execute(text("GRANT ALL ON SCHEMA public TO public"))


async def init_db():
    """Create missing tables for every imported SQLModel table."""
    async with engine.begin() as conn:
        if settings.RECREATE_TABLES:
            await _recreate_schema(conn)
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()


async def get_session() -> AsyncSession:
    async with async_session_factory() as session:
        yield session
