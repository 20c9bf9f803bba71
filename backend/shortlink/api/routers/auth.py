# shortlink/api/routers/auth.py
from fastapi import APIRouter, Depends, Form, HTTPException, Response, status

from shortlink.api.deps import get_current_user, get_login_manager
from shortlink.config import settings
from shortlink.core.security import encode_session_token
from shortlink.models.user import User
from shortlink.schemas.auth import user_out
from shortlink.services import LoginManager

router = APIRouter(prefix="/__API__", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    max_age = settings.session_max_age_minutes * 60 or None
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name)


@router.post("/login")
async def login(
    response: Response,
    username: str = Form(""),
    password: str = Form(""),
    lm: LoginManager = Depends(get_login_manager),
):
    """
    Authenticate with username/password and start a session.

    Returns the signed session token in the body and also sets it as an
    HttpOnly cookie. Unknown user and wrong password produce the same 401.
    """
    identity = await lm.log_in(username, password)
    token = encode_session_token(identity)
    _set_session_cookie(response, token)
    user = await lm.logged_in(identity)
    return {"success": True, "data": {"user": user_out(user).model_dump(), "token": token}}


@router.post("/logout")
async def logout(response: Response):
    """
    Drop the session cookie. Always succeeds, even without a session.
    """
    _clear_session_cookie(response)
    return {"success": True}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user_out(user).model_dump()}


@router.post("/changepw")
async def change_password(
    response: Response,
    password: str = Form(...),
    password_repeat: str = Form(..., alias="password-repeat"),
    user: User = Depends(get_current_user),
    lm: LoginManager = Depends(get_login_manager),
):
    """
    Change the logged-in user's password.

    The current session is cleared afterwards; the user logs in again with
    the new password.
    """
    if password != password_repeat:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "PASSWORD_MISMATCH", "message": "passwords don't match"},
        )
    await lm.change_password(user, password)
    _clear_session_cookie(response)
    return {"success": True, "data": {"ok": True}}
