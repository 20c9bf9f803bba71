# shortlink/api/routers/dashboard.py
from fastapi import APIRouter, Depends

from shortlink.api.deps import get_alias_authorization, get_login_manager, get_optional_user
from shortlink.config import settings
from shortlink.core.randoms import LOWERCASE, generate_random
from shortlink.models.user import User
from shortlink.schemas.alias import DashboardOut, alias_out
from shortlink.schemas.auth import user_out
from shortlink.services import AliasAuthorization, LoginManager

router = APIRouter(tags=["dashboard"])

RANDOM_PASSWORD_LENGTH = 8


@router.get("/", response_model=DashboardOut)
async def dashboard(
    user: User | None = Depends(get_optional_user),
    lm: LoginManager = Depends(get_login_manager),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    """
    Data for the index page.

    Anonymous visitors only get an unused alias suggestion. Logged-in users
    also get their aliases; admins additionally get the user list and a
    random password to prefill the create-user form.
    """
    base_url = settings.resolved_base_url()
    out = DashboardOut(
        nonExistentRandom=await aa.suggest_unused_alias(),
        baseUrl=base_url,
    )
    if user is None:
        return out

    out.user = user_out(user)
    out.aliases = [alias_out(a, base_url) for a in await aa.list_aliases_for_owner(user.name)]
    if user.admin:
        out.users = [user_out(u) for u in await lm.list_users()]
        out.randomPassword = generate_random(RANDOM_PASSWORD_LENGTH, LOWERCASE)
    return out
