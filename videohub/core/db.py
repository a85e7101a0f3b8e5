from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from videohub.core.config import settings


def build_engine(database_url: str, echo: bool = False):
    """Асинхронный движок для заданного URL"""
    return create_async_engine(database_url, future=True, echo=echo)


engine = build_engine(settings.database_url, settings.echo_sql)

SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    async with SessionLocal() as session:
        yield session
