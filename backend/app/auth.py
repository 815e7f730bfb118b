"""
Shopfront Backend: Bearer Token Authentication
===============================================

What:  The `require_token` dependency protecting every mutating route.
How:   FastAPI's HTTPBearer scheme extracts the credential from
       `Authorization: Bearer <token>`; the token is resolved to a User row.
       A missing, malformed or unknown token raises UnauthorizedError (401).
Who:   Declared as a dependency by POST/PATCH/DELETE handlers.

Usage:
    @router.post("/products")
    async def create_product(user: User = Depends(require_token), ...):
        ...

On success the user id is stored on `request.state.user_id` so the access
log can attribute the request.

Token issuance (sign-up / sign-in) lives outside this service.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import UnauthorizedError
from app.models.user import User
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches require_token as None and is
# reported through UnauthorizedError like every other auth failure.
bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Opaque bearer token issued at sign-in",
)


async def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the request's bearer token to the requesting User, or raise 401."""
    if credentials is None:
        raise UnauthorizedError(message="Missing bearer token")

    user = await user_service.get_by_token(db, credentials.credentials)
    if user is None:
        logger.info("Rejected unknown bearer token on %s %s", request.method, request.url.path)
        raise UnauthorizedError(message="Invalid or expired bearer token")

    request.state.user_id = str(user.id)
    return user
