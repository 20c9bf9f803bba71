# shortlink/services/alias_authorization.py
"""
Alias Authorization: alias resolution, the per-alias password gate, and the
ownership/admin rules for creating and deleting aliases and users.

Deletes never cascade. They return a CleanupObligation naming the records
left orphaned so a caller or a sweep can deal with them.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

from shortlink.core.errors import Forbidden, InvalidName, InvalidTarget, NotFound
from shortlink.core.randoms import generate_random
from shortlink.core.security import hash_password, verify_password
from shortlink.models.alias import KIND_FILE, KIND_REDIRECT, Alias
from shortlink.models.stored_file import StoredFile
from shortlink.models.user import User
from shortlink.services.record_store import RecordStore

logger = logging.getLogger("uvicorn.error")

RESERVED_ALIAS = "__API__"  # Prefix of the HTTP API routes
FILE_SUFFIX_LENGTH = 20

_ALIAS_RE = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class ServedFile:
    file_id: str


AliasTarget = Union[Redirect, ServedFile]


@dataclass
class FileUpload:
    filename: str
    data: bytes
    headers: Sequence[Tuple[str, str]] = ()  # ordered part headers, replayed when served


@dataclass
class CleanupObligation:
    """Records orphaned by a delete. Nothing here has been removed."""

    orphaned_aliases: List[str] = field(default_factory=list)
    orphaned_files: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.orphaned_aliases and not self.orphaned_files


def is_valid_alias(name: str) -> bool:
    return bool(name) and name != RESERVED_ALIAS and _ALIAS_RE.fullmatch(name) is not None


def is_url(value: str) -> bool:
    """Absolute URL check: a scheme and a host are both required."""
    if not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


class AliasAuthorization:
    def __init__(
        self,
        store: RecordStore,
        random: Callable[..., str] = generate_random,
        suggestion_length: int = 6,
    ):
        self.store = store
        self.random = random
        self.suggestion_length = suggestion_length

    # ------------------------------------------------------------- resolving
    async def get(self, name: str) -> Optional[Alias]:
        return await self.store.get_alias(name)

    async def resolve(self, name: str) -> Optional[AliasTarget]:
        alias = await self.get(name)
        if alias is None:
            return None
        return self.target_of(alias)

    @staticmethod
    def target_of(alias: Alias) -> AliasTarget:
        if alias.kind == KIND_FILE:
            return ServedFile(alias.file)
        return Redirect(alias.url)

    @staticmethod
    def check_access(alias: Alias, password: Optional[str]) -> bool:
        """Basic-auth gate. Only the password matters; the username is ignored."""
        if not alias.password_hash:
            return True
        if password is None:
            return False
        return verify_password(password, alias.password_hash)

    async def get_file(self, file_id: str) -> Optional[StoredFile]:
        return await self.store.get_file(file_id)

    # -------------------------------------------------------------- creation
    async def _validate_name(self, name: str) -> None:
        if not name:
            raise InvalidName("alias name can't be empty")
        if name == RESERVED_ALIAS:
            raise InvalidName(f"can't use {RESERVED_ALIAS} as alias (used internally)")
        if _ALIAS_RE.fullmatch(name) is None:
            raise InvalidName("alias may only contain letters, digits, '-' and '_'")
        if await self.store.alias_exists(name):
            raise InvalidName("alias name exists")

    async def create(
        self,
        owner: User,
        name: str,
        url: str = "",
        password: Optional[str] = None,
        upload: Optional[FileUpload] = None,
    ) -> Alias:
        await self._validate_name(name)

        has_file = upload is not None
        if not has_file and not is_url(url):
            raise InvalidTarget("not a valid url")

        password_hash = hash_password(password) if password else None

        file_id = ""
        if has_file:
            file_id = f"{upload.filename}:{self.random(FILE_SUFFIX_LENGTH)}"
            await self.store.create_file(file_id, upload.data, upload.headers)
            logger.info("[alias] stored file %s (%d bytes)", file_id, len(upload.data))

        try:
            alias = await self.store.create_alias(
                alias=name,
                owner=owner.name,
                kind=KIND_FILE if has_file else KIND_REDIRECT,
                url=url or "",
                file=file_id,
                password_hash=password_hash,
            )
        except Exception:
            if file_id:
                logger.warning("[alias] alias %s not created, file %s left orphaned", name, file_id)
            raise
        logger.info("[alias] %s created %s", owner.name, name)
        return alias

    # -------------------------------------------------------------- deletion
    async def delete(self, acting: User, name: str) -> CleanupObligation:
        alias = await self.store.get_alias(name)
        if alias is None:
            raise NotFound(f"alias {name} not found")
        if not acting.admin and acting.name != alias.owner:
            raise Forbidden("unauthorized")

        await self.store.delete_alias(name)
        obligation = CleanupObligation()
        if alias.file:
            obligation.orphaned_files.append(alias.file)
        return obligation

    async def delete_user(self, acting: User, target_name: str) -> CleanupObligation:
        if not acting.admin and acting.name != target_name:
            raise Forbidden("unauthorized")
        if not await self.store.delete_user(target_name):
            raise NotFound(f"user {target_name} not found")

        # Aliases stay resolvable with a dangling owner
        aliases = await self.store.list_aliases_for_owner(target_name)
        return CleanupObligation(orphaned_aliases=[a.alias for a in aliases])

    # ----------------------------------------------------------- dashboards
    async def list_aliases_for_owner(self, owner: str) -> List[Alias]:
        return await self.store.list_aliases_for_owner(owner)

    async def suggest_unused_alias(self) -> str:
        """Random unused alias, only a UI hint; nothing is reserved."""
        while True:
            candidate = self.random(self.suggestion_length)
            if not await self.store.alias_exists(candidate):
                return candidate
