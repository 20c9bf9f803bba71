# shortlink/api/deps.py
from fastapi import Depends, Header, Request

from shortlink.config import settings
from shortlink.core.errors import Forbidden, InvalidName, Unauthorized
from shortlink.core.security import decode_session_token
from shortlink.core.session import build_session_policy
from shortlink.models.user import User
from shortlink.services import AliasAuthorization, LoginManager, RecordStore

# One store and one set of managers per process; the store holds no state
# besides the Tortoise connection, so every request reads current data.
record_store = RecordStore()
login_manager = LoginManager(record_store, build_session_policy(settings.session_max_age_minutes))
alias_authorization = AliasAuthorization(record_store, suggestion_length=settings.suggestion_length)


def get_login_manager() -> LoginManager:
    return login_manager


def get_alias_authorization() -> AliasAuthorization:
    return alias_authorization


def _session_token(request: Request, authorization: str | None) -> str | None:
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    # 2) Session cookie
    return request.cookies.get(settings.session_cookie_name)


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    lm: LoginManager = Depends(get_login_manager),
) -> User:
    """
    FastAPI dependency resolving the logged-in user.

    The session token comes from the Authorization header (Bearer) or the
    session cookie. It is decoded into a SessionIdentity and re-checked
    against the Login Manager on every request.

    Raises:
        Unauthorized: No token, bad signature, rejected by the session
            policy, or the user no longer exists
    """
    token = _session_token(request, authorization)
    if not token:
        raise Unauthorized("AUTH_REQUIRED")
    identity = decode_session_token(token)
    return await lm.logged_in(identity)


async def get_optional_user(
    request: Request,
    authorization: str | None = Header(default=None),
    lm: LoginManager = Depends(get_login_manager),
) -> User | None:
    """Same as get_current_user, but anonymous or stale sessions yield None."""
    try:
        return await get_current_user(request, authorization, lm)
    except Unauthorized:
        return None


async def require_admin(current: User = Depends(get_current_user)) -> User:
    if not current.admin:
        raise Forbidden("FORBIDDEN_ADMIN_ONLY")
    return current


async def read_name_body(request: Request) -> str:
    """
    Read a bare record name sent as the whole request body.

    Raises:
        InvalidName: The body is not valid UTF-8
    """
    raw = await request.body()
    try:
        return raw.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise InvalidName("request body is not valid UTF-8") from exc
