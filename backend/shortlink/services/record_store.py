# shortlink/services/record_store.py
"""
Record Store: durable users / aliases / files namespaces on Tortoise ORM.

Every public call is atomic on its own. Missing keys come back as ``None``;
a duplicate primary key raises Conflict; any other ORM or driver error is
logged and raised as StorageFailure.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from tortoise.exceptions import BaseORMException, IntegrityError
from tortoise.transactions import in_transaction

from shortlink.core.errors import Conflict, StorageFailure
from shortlink.models.alias import Alias
from shortlink.models.stored_file import StoredFile
from shortlink.models.user import User

logger = logging.getLogger("uvicorn.error")

HeaderList = Sequence[Tuple[str, str]]


@contextmanager
def _storage_call(op: str, key: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise Conflict(f"{key} already exists") from exc
    except BaseORMException as exc:
        logger.error("[store] %s(%s) failed: %s", op, key, exc)
        raise StorageFailure() from exc


class RecordStore:
    """Thin transactional facade over the three Tortoise models."""

    # ------------------------------------------------------------------ users
    async def create_user(self, name: str, password_hash: str, admin: bool = False) -> User:
        with _storage_call("create_user", name):
            async with in_transaction() as conn:
                if await User.filter(name=name).using_db(conn).exists():
                    raise Conflict(f"user {name} already exists")
                return await User.create(
                    name=name,
                    password_hash=password_hash,
                    admin=admin,
                    using_db=conn,
                )

    async def get_user(self, name: str) -> Optional[User]:
        if not name:
            return None
        with _storage_call("get_user", name):
            return await User.get_or_none(name=name)

    async def list_users(self) -> List[User]:
        with _storage_call("list_users", "*"):
            return await User.all().order_by("name")

    async def update_user_password(self, name: str, password_hash: str) -> bool:
        with _storage_call("update_user_password", name):
            updated = await User.filter(name=name).update(password_hash=password_hash)
        return updated > 0

    async def set_user_admin(self, name: str, admin: bool) -> bool:
        with _storage_call("set_user_admin", name):
            updated = await User.filter(name=name).update(admin=admin)
        return updated > 0

    async def delete_user(self, name: str) -> bool:
        with _storage_call("delete_user", name):
            deleted = await User.filter(name=name).delete()
        return deleted > 0

    # ---------------------------------------------------------------- aliases
    async def create_alias(
        self,
        *,
        alias: str,
        owner: str,
        kind: str,
        url: str = "",
        file: str = "",
        password_hash: Optional[str] = None,
    ) -> Alias:
        with _storage_call("create_alias", alias):
            async with in_transaction() as conn:
                if await Alias.filter(alias=alias).using_db(conn).exists():
                    raise Conflict(f"alias {alias} already exists")
                return await Alias.create(
                    alias=alias,
                    owner=owner,
                    kind=kind,
                    url=url,
                    file=file,
                    password_hash=password_hash,
                    using_db=conn,
                )

    async def get_alias(self, name: str) -> Optional[Alias]:
        if not name:
            return None
        with _storage_call("get_alias", name):
            return await Alias.get_or_none(alias=name)

    async def alias_exists(self, name: str) -> bool:
        with _storage_call("alias_exists", name):
            return await Alias.filter(alias=name).exists()

    async def list_aliases_for_owner(self, owner: str) -> List[Alias]:
        with _storage_call("list_aliases_for_owner", owner):
            return await Alias.filter(owner=owner).order_by("alias")

    async def delete_alias(self, name: str) -> bool:
        with _storage_call("delete_alias", name):
            deleted = await Alias.filter(alias=name).delete()
        return deleted > 0

    # ------------------------------------------------------------------ files
    async def create_file(self, file_id: str, data: bytes, mime: HeaderList) -> StoredFile:
        with _storage_call("create_file", file_id):
            async with in_transaction() as conn:
                if await StoredFile.filter(id=file_id).using_db(conn).exists():
                    raise Conflict(f"file {file_id} already exists")
                return await StoredFile.create(
                    id=file_id,
                    data=data,
                    mime=[[k, v] for k, v in mime],
                    using_db=conn,
                )

    async def get_file(self, file_id: str) -> Optional[StoredFile]:
        if not file_id:
            return None
        with _storage_call("get_file", file_id):
            return await StoredFile.get_or_none(id=file_id)
