# shortlink/schemas/alias.py
"""
Pydantic schemas for alias listings and the dashboard payload.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel

from shortlink.models.stored_file import original_filename
from .auth import UserOut

class AliasOut(BaseModel):
    alias: str
    owner: str
    kind: Literal["redirect", "file"]
    url: str = ""
    filename: Optional[str] = None  # Original upload name for file aliases
    protected: bool = False  # Password gate enabled
    link: str  # Full short link built from BASE_URL

class DashboardOut(BaseModel):
    """
    Everything the index page renders. Admin-only fields stay empty for
    regular users and anonymous visitors.
    """
    user: Optional[UserOut] = None
    aliases: List[AliasOut] = []
    users: List[UserOut] = []
    nonExistentRandom: str
    randomPassword: str = ""
    baseUrl: str

def alias_out(a, base_url: str) -> AliasOut:
    return AliasOut(
        alias=a.alias,
        owner=a.owner,
        kind=a.kind,
        url=a.url or "",
        filename=original_filename(a.file) if a.file else None,
        protected=a.protected,
        link=f"{base_url}/{a.alias}",
    )
