# shortlink/models/alias.py
"""
Database model for short aliases.
An alias maps a public name either to a redirect URL or to a stored file.
"""
from tortoise import fields, models

KIND_REDIRECT = "redirect"
KIND_FILE = "file"

class Alias(models.Model):
    """
    Alias database model.

    - kind: target chosen once at creation ("file" when an upload was
      attached, otherwise "redirect"); resolution reads it as-is
    - owner: User.name of the creator (plain string, may dangle after the
      user is deleted)
    - file: StoredFile.id, empty string when no file is attached
    - password_hash: optional Argon2 hash gating access via HTTP Basic
    """
    alias = fields.CharField(max_length=255, pk=True)
    owner = fields.CharField(max_length=255, index=True)
    kind = fields.CharField(max_length=16, default=KIND_REDIRECT)
    url = fields.TextField(default="")
    file = fields.CharField(max_length=512, default="")
    password_hash = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "aliases"

    @property
    def protected(self) -> bool:
        return bool(self.password_hash)
