"""
API dependencies for authentication, database sessions and record loading.
"""

from typing import List

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crash_analysis.core.config import get_settings
from crash_analysis.models.base import get_db
from crash_analysis.models.crash_record import CrashRecord

security = HTTPBearer()


async def verify_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Verify API token.

    Args:
        credentials: HTTP credentials

    Returns:
        Token string

    Raises:
        HTTPException: If token is invalid
    """
    settings = get_settings()

    if credentials.credentials != settings.api_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return credentials.credentials


async def get_async_db_session() -> AsyncSession:
    """Dependency to get async database session."""
    async for session in get_db():
        yield session


async def get_crash_records(
    db: AsyncSession = Depends(get_async_db_session),
) -> List[CrashRecord]:
    """Load the crash record snapshot a report request works on."""
    result = await db.execute(select(CrashRecord).order_by(CrashRecord.id))
    return list(result.scalars().all())
