"""
Services Module

Identity & alias authorization layer:
- RecordStore: transactional users / aliases / files persistence
- LoginManager: accounts, credentials and sessions
- AliasAuthorization: alias resolution, password gate and ownership rules
"""

from .record_store import RecordStore
from .login_manager import LoginManager
from .alias_authorization import (
    AliasAuthorization,
    AliasTarget,
    CleanupObligation,
    FileUpload,
    Redirect,
    ServedFile,
    is_url,
    is_valid_alias,
)

__all__ = [
    "RecordStore",
    "LoginManager",
    "AliasAuthorization",
    "AliasTarget",
    "CleanupObligation",
    "FileUpload",
    "Redirect",
    "ServedFile",
    "is_url",
    "is_valid_alias",
]
