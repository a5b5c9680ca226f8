from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from freelanceflow.core.config import settings
from freelanceflow.core.security import decode_user_id
from freelanceflow.db.session import SessionAsync
from freelanceflow.services.remote_assistant import RemoteAssistantClient
from freelanceflow.storage.database import DatabaseStorage
from freelanceflow.storage.interface import Storage

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/auth/token",
    description="Bearer token issued by the account service",
    auto_error=False
)


async def get_db():
    async with SessionAsync() as session:
        yield session


async def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    return DatabaseStorage(db)


async def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> int:
    """
    Owner id of the request.

    Without a token the configured demo user is used, if there is one.

    Raises:
        HTTPException 401: Missing or invalid token
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None:
        if settings.DEMO_USER_ID is not None:
            return settings.DEMO_USER_ID
        raise credentials_exception

    user_id = decode_user_id(token)
    if user_id is None:
        raise credentials_exception
    return user_id


def get_remote_assistant() -> RemoteAssistantClient:
    return RemoteAssistantClient(
        api_url=settings.ASSISTANT_API_URL,
        api_key=settings.ASSISTANT_API_KEY,
        timeout=settings.ASSISTANT_TIMEOUT_SECONDS,
    )
