from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from task_api.database import get_db as db_session
from task_api.config import settings
from task_api.errors import AuthInvalid
from task_api.services.tokens import TokenService

bearer_scheme = HTTPBearer(auto_error=False)

async def get_db(db: AsyncSession = Depends(db_session)):
    return db

@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

def ownership_enforced() -> bool:
    return settings.ENFORCE_TASK_OWNERSHIP

async def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    enforce: bool = Depends(ownership_enforced),
) -> dict | None:
    """Claims of the bearer token when ownership is enforced, otherwise None.

    With enforcement on, a missing or invalid token is rejected with 401.
    """
    if not enforce:
        return None
    claims = tokens.verify(credentials.credentials if credentials else None)
    if claims is None:
        raise AuthInvalid()
    return claims
