"""FastAPI dependency injection."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from subsidy_calc.config import settings
from subsidy_calc.data.programs import ProgramRepository

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_program_repository(session: AsyncSession = Depends(get_db)) -> ProgramRepository:
    return ProgramRepository(session)
