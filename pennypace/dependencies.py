"""FastAPI dependencies: database session and request user."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pennypace.config import settings

USER_ID_HEADER = "X-User-Id"

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; commit on success, roll back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_user_id(request: Request) -> str:
    """Resolve the user every service call is scoped to.

    There is no login: the client names its user in the X-User-Id header,
    and requests without one belong to ``settings.default_user_id``.
    """
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip() or settings.default_user_id
    request.state.user_id = user_id
    return user_id
