# shortlink/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates a default admin account on first startup so users can be managed.
"""
from __future__ import annotations

import os
import logging

from shortlink.services import LoginManager, RecordStore

logger = logging.getLogger("uvicorn.error")


async def ensure_default_admin(login_manager: LoginManager | None = None) -> None:
    """
    Create an admin account when the store has none.

    Runs only if ADMIN_PASSWORD is set. The account is named ADMIN_USERNAME
    (default "admin"); when a regular user already holds that name a numeric
    suffix is appended (root -> root2 -> root3 ...).
    """
    lm = login_manager or LoginManager(RecordStore())
    if any(u.admin for u in await lm.list_users()):
        return

    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    base_name = os.getenv("ADMIN_USERNAME") or "admin"
    name, suffix = base_name, 1
    # create_user reports True while the name is taken
    while await lm.create_user(name, admin_password, admin=True):
        suffix += 1
        name = f"{base_name}{suffix}"
    logger.warning("[bootstrap] Created default admin -> name=%s", name)
