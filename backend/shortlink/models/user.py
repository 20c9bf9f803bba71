# shortlink/models/user.py
"""
Database model for users.
Represents an account that can log in, own aliases and (as admin) manage
other accounts.
"""
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    The name is the primary key and is immutable after creation. Aliases
    reference their owner by name only; there is no foreign key, so deleting
    a user leaves its aliases in place.

    Security:
    - Password is stored as an Argon2 hash (never plain text)
    """
    name = fields.CharField(max_length=255, pk=True)  # Login name (unique)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash with embedded salt
    admin = fields.BooleanField(default=False)  # Grants user management and any-alias deletion
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    def __str__(self) -> str:
        return self.name
