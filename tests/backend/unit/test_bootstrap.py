"""
Unit tests for core.bootstrap default admin creation.
"""
import pytest

from shortlink.core.bootstrap import ensure_default_admin
from shortlink.core.errors import StorageFailure
from shortlink.core.security import verify_password
from shortlink.models.user import User


pytestmark = pytest.mark.asyncio


async def test_no_password_no_admin(db, monkeypatch):
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    await ensure_default_admin()
    assert await User.all().count() == 0


async def test_creates_admin_from_env(db, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "Boot#123")
    monkeypatch.setenv("ADMIN_USERNAME", "root")
    await ensure_default_admin()

    admin = await User.get(name="root")
    assert admin.admin is True
    assert verify_password("Boot#123", admin.password_hash)

    # Second run is a no-op
    await ensure_default_admin()
    assert await User.all().count() == 1


async def test_admin_name_taken_by_regular_user(db, monkeypatch):
    await User.create(name="root", password_hash="x", admin=False)
    monkeypatch.setenv("ADMIN_PASSWORD", "Boot#123")
    monkeypatch.setenv("ADMIN_USERNAME", "root")
    await ensure_default_admin()

    assert (await User.get(name="root2")).admin is True
    assert (await User.get(name="root")).admin is False


async def test_admin_goes_through_the_login_manager(login_manager, store, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "Boot#123")
    monkeypatch.delenv("ADMIN_USERNAME", raising=False)
    await ensure_default_admin(login_manager)

    admin = await store.get_user("admin")
    assert admin.admin is True
    assert admin.password_hash != "Boot#123"


async def test_storage_failure_is_not_swallowed(login_manager, store, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "Boot#123")

    async def _broken(*args, **kwargs):
        raise StorageFailure("create_user failed")

    monkeypatch.setattr(store, "create_user", _broken)
    with pytest.raises(StorageFailure):
        await ensure_default_admin(login_manager)
