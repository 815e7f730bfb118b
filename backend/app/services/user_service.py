"""
Shopfront Backend: User Lookup
===============================

Read-only access to `users`. The only query this service needs is
"which user holds this bearer token", used by `app.auth.require_token`.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserService:

    async def get_by_token(self, db: AsyncSession, token: str) -> Optional[User]:
        if not token:
            return None
        result = await db.execute(select(User).where(User.token == token))
        return result.scalar_one_or_none()


user_service = UserService()
