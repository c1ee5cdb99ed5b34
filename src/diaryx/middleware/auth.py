"""Authentication middleware."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.schemas.auth import CurrentUser
from ..security import get_user_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication."""

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> CurrentUser:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials or credentials.scheme.lower() != "bearer":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="UNAUTHORIZED")

        user = get_user_from_token(credentials.credentials)
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="UNAUTHORIZED")

        return user


# Dependency for getting the current user from JWT
async def get_current_user(user: CurrentUser = Depends(JWTBearer())) -> CurrentUser:
    """Get current authenticated user."""
    return user
