"""
Back Office Ledger - FastAPI Dependencies

Shared dependencies for authentication and database sessions.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.utils.error_handling import AuthenticationException, TokenInvalidException
from app.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentAdmin:
    """Administrator identified by a verified bearer token."""
    name: str


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentAdmin:
    """
    Resolve the administrator from the Authorization: Bearer <token> header.

    Raises:
        AuthenticationException: 401 if no bearer token was sent
        TokenInvalidException: 401 if the token is invalid or expired
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise TokenInvalidException()

    return CurrentAdmin(name=payload["sub"])
