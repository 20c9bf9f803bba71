# shortlink/api/routers/admin.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Response

from shortlink.api.deps import (
    get_alias_authorization,
    get_current_user,
    get_login_manager,
    read_name_body,
    require_admin,
)
from shortlink.config import settings
from shortlink.models.user import User
from shortlink.schemas.admin import SetAdminIn
from shortlink.schemas.auth import user_out
from shortlink.services import AliasAuthorization, LoginManager

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/__API__", tags=["admin"])


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(lm: LoginManager = Depends(get_login_manager)):
    """
    List all accounts (admin only), ordered by name.
    """
    users = await lm.list_users()
    return {"success": True, "data": {"items": [user_out(u).model_dump() for u in users]}}


@router.post("/createuser", dependencies=[Depends(require_admin)])
async def create_user(
    username: str = Form(""),
    password: str = Form(""),
    admin: str = Form(""),
    lm: LoginManager = Depends(get_login_manager),
):
    """
    Create an account (admin only).

    The admin checkbox arrives as the form value "on". An existing name is
    reported in the body instead of failing the request.
    """
    exists = await lm.create_user(username, password, admin=(admin == "on"))
    if exists:
        return {"success": False, "error": {"code": "USER_EXISTS", "message": "user exists"}}
    return {"success": True, "data": {"name": username, "admin": admin == "on"}}


@router.post("/setadmin")
async def set_admin(
    body: SetAdminIn,
    current: User = Depends(get_current_user),
    lm: LoginManager = Depends(get_login_manager),
):
    """
    Grant or revoke admin status for another user.

    Only admins may call this, and never on their own account.
    """
    await lm.set_admin(current, body.name, body.value)
    return {"success": True, "data": {"ok": True}}


@router.post("/rmuser")
async def delete_user(
    response: Response,
    current: User = Depends(get_current_user),
    name: str = Depends(read_name_body),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    """
    Delete an account. Admins may delete anyone, users only themselves.

    The user's aliases are not removed; they are returned as orphans.
    """
    obligation = await aa.delete_user(current, name)
    if not obligation.empty:
        logger.info("[admin] user %s deleted, orphaned aliases: %s", name, obligation.orphaned_aliases)
    if name == current.name:
        response.delete_cookie(settings.session_cookie_name)
    return {"success": True, "data": {"orphanedAliases": obligation.orphaned_aliases}}
