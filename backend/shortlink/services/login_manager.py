# shortlink/services/login_manager.py
"""
Login Manager: account creation, authentication, session validation,
password change and admin toggling.
"""
from __future__ import annotations

import logging
from typing import List

from shortlink.core.errors import Conflict, Forbidden, InvalidName, NotFound, Unauthorized
from shortlink.core.security import hash_password, verify_password
from shortlink.core.session import ExistencePolicy, SessionIdentity, SessionPolicy
from shortlink.models.user import User
from shortlink.services.record_store import RecordStore

logger = logging.getLogger("uvicorn.error")


class LoginManager:
    def __init__(self, store: RecordStore, policy: SessionPolicy | None = None):
        self.store = store
        self.policy = policy or ExistencePolicy()

    async def create_user(self, name: str, password: str, admin: bool = False) -> bool:
        """
        Create an account.

        Returns True when the name was already taken (nothing is written),
        False when the user was created.
        """
        if not name:
            raise InvalidName("username cannot be empty")
        if await self.store.get_user(name) is not None:
            return True
        try:
            await self.store.create_user(name, hash_password(password), admin)
        except Conflict:
            # Created concurrently between the check and the insert
            return True
        logger.info("[auth] created user %s (admin=%s)", name, admin)
        return False

    async def log_in(self, name: str, password: str) -> SessionIdentity:
        """
        Check credentials and issue a SessionIdentity.

        Unknown user and wrong password raise the same Unauthorized.
        """
        user = await self.store.get_user(name)
        if user is None or not verify_password(password, user.password_hash):
            raise Unauthorized("unauthorized")
        return self.policy.issue(user.name)

    async def logged_in(self, identity: SessionIdentity | None) -> User:
        """Re-resolve the user behind a session; the only per-request re-auth check."""
        if identity is None or not self.policy.accepts(identity):
            raise Unauthorized("unauthorized")
        user = await self.store.get_user(identity.name)
        if user is None:
            raise Unauthorized("unauthorized")
        return user

    async def change_password(self, user: User, new_password: str) -> None:
        """Re-hash and persist. The caller must drop the now-stale session."""
        new_hash = hash_password(new_password)
        if not await self.store.update_user_password(user.name, new_hash):
            raise NotFound(f"user {user.name} not found")
        user.password_hash = new_hash

    async def set_admin(self, acting: User, name: str, value: bool) -> None:
        if name == acting.name:
            raise Forbidden("can't change your own admin status")
        if not acting.admin:
            raise Forbidden("unauthorized")
        if not await self.store.set_user_admin(name, value):
            raise NotFound(f"user {name} not found")
        logger.info("[auth] %s set admin=%s for %s", acting.name, value, name)

    async def list_users(self) -> List[User]:
        return await self.store.list_users()
