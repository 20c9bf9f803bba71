# shortlink/schemas/auth.py
"""
Pydantic schemas for account endpoints.
"""
from pydantic import BaseModel

class UserOut(BaseModel):
    """
    Public view of a user. Never carries the password hash.
    """
    name: str
    admin: bool = False

def user_out(u) -> UserOut:
    return UserOut(name=u.name, admin=u.admin)
