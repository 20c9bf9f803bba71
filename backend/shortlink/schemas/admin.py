# shortlink/schemas/admin.py
"""
Pydantic schemas for admin user management endpoints.
"""
from pydantic import BaseModel

class SetAdminIn(BaseModel):
    """
    Request body for toggling another user's admin flag.
    """
    name: str  # Target user name (must not be the acting admin)
    value: bool  # New admin status
