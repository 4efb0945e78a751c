# app/repositories/users.py
from __future__ import annotations

"""Credential store: account lookup, creation under the password policy, and
password verification."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash, password_policy_errors, verify_password
from app.db.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME_MESSAGE = "Username already exists"


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalars().first()

    async def create_with_password(
        self, username: str, email: str, password: str
    ) -> Tuple[Optional[User], List[str]]:
        """Create an account, or return why it could not be created.

        Returns ``(user, [])`` on success and ``(None, errors)`` otherwise.
        Policy violations are all reported at once and nothing is written.
        """
        errors = password_policy_errors(password)
        if errors:
            return None, errors

        user = User(username=username, email=email, hashed_password=get_password_hash(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name.
            await self.db.rollback()
            logger.info("Username collision on insert: %s", username)
            return None, [DUPLICATE_USERNAME_MESSAGE]
        await self.db.refresh(user)
        return user, []

    @staticmethod
    def verify_password(user: User, password: str) -> bool:
        return verify_password(password, user.hashed_password)


__all__ = ["UserRepository", "DUPLICATE_USERNAME_MESSAGE"]
