# shortlink/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account and credential record
- Alias: Short alias pointing at a URL or a stored file
- StoredFile: Uploaded file payload and its replayable headers
"""
from .user import User
from .alias import Alias, KIND_FILE, KIND_REDIRECT
from .stored_file import StoredFile
