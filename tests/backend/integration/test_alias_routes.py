import io

import pytest
from fastapi import HTTPException, UploadFile

from shortlink.api.routers import aliases as aliases_router
from shortlink.config import settings


pytestmark = pytest.mark.asyncio


async def _create_alias(client, headers, files=None, **fields):
    return await client.post("/__API__/createalias", data=fields, files=files, headers=headers)


async def test_redirect_alias_flow(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.name, password)

    resp = await _create_alias(
        client, headers,
        alias="docs", url="https://example.org/docs",
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["kind"] == "redirect"
    assert data["link"] == "http://short.test/docs"
    assert data["protected"] is False

    follow = await client.get("/docs")
    assert follow.status_code == 308
    assert follow.headers["location"] == "https://example.org/docs"

    mine = await client.get("/__API__/aliases", headers=headers)
    assert [a["alias"] for a in mine.json()["data"]["items"]] == ["docs"]


async def test_create_alias_requires_login(client):
    resp = await client.post(
        "/__API__/createalias",
        data={"alias": "x", "url": "https://example.org"},
    )
    assert resp.status_code == 401


@pytest.mark.parametrize(
    "fields,code",
    [
        ({"alias": "__API__", "url": "https://example.org"}, "INVALID_NAME"),
        ({"alias": "my alias", "url": "https://example.org"}, "INVALID_NAME"),
        ({"alias": "", "url": "https://example.org"}, "INVALID_NAME"),
        ({"alias": "nourl", "url": "not a url"}, "INVALID_TARGET"),
        ({"alias": "nothing"}, "INVALID_TARGET"),
    ],
)
async def test_create_alias_validation(client, create_user, auth_header_factory, fields, code):
    user, password = await create_user()
    headers = await auth_header_factory(user.name, password)

    resp = await _create_alias(client, headers, **fields)
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == code


async def test_file_alias_is_served_with_its_headers(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.name, password)

    resp = await _create_alias(
        client, headers,
        files={"file": ("notes.txt", b"hello world", "text/plain")},
        alias="notes", url="https://ignored.example",
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["kind"] == "file"
    assert data["filename"] == "notes.txt"

    served = await client.get("/notes")
    assert served.status_code == 200
    assert served.content == b"hello world"
    assert served.headers["content-type"].startswith("text/plain")
    assert 'filename="notes.txt"' in served.headers["content-disposition"]


async def test_password_protected_alias_uses_basic_auth(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.name, password)
    await _create_alias(
        client, headers,
        alias="vault", url="https://example.org/vault", password="hunter2",
    )

    no_creds = await client.get("/vault")
    assert no_creds.status_code == 401
    assert no_creds.headers["www-authenticate"] == 'Basic realm="restricted", charset="UTF-8"'

    wrong = await client.get("/vault", auth=("anyone", "wrong"))
    assert wrong.status_code == 401

    # Username is irrelevant, only the password is checked
    ok = await client.get("/vault", auth=("whoever", "hunter2"))
    assert ok.status_code == 308
    assert ok.headers["location"] == "https://example.org/vault"


async def test_unknown_alias_is_404(client):
    resp = await client.get("/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "ALIAS_NOT_FOUND"


async def test_delete_alias_rules(client, create_user, create_admin, auth_header_factory):
    owner, owner_password = await create_user()
    stranger, stranger_password = await create_user()
    admin, admin_password = await create_admin()
    owner_headers = await auth_header_factory(owner.name, owner_password)
    stranger_headers = await auth_header_factory(stranger.name, stranger_password)
    admin_headers = await auth_header_factory(admin.name, admin_password)

    for name in ("first", "second"):
        await _create_alias(
            client, owner_headers,
            alias=name, url="https://example.org",
        )

    forbidden = await client.post("/__API__/rmalias", content="first", headers=stranger_headers)
    assert forbidden.status_code == 403
    assert (await client.get("/first")).status_code == 308

    by_owner = await client.post("/__API__/rmalias", content="first", headers=owner_headers)
    assert by_owner.status_code == 200
    assert (await client.get("/first")).status_code == 404

    by_admin = await client.post("/__API__/rmalias", content="second", headers=admin_headers)
    assert by_admin.status_code == 200
    assert (await client.get("/second")).status_code == 404

    missing = await client.post("/__API__/rmalias", content="second", headers=admin_headers)
    assert missing.status_code == 404


async def test_delete_alias_with_undecodable_body(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.name, password)

    resp = await client.post("/__API__/rmalias", content=b"\xff\xfe", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INVALID_NAME"


async def test_oversized_upload_is_rejected_after_reading_past_the_cap(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    cap = 1024 * 1024
    stream = io.BytesIO(b"x" * (3 * cap))
    upload = UploadFile(file=stream, filename="big.bin")

    with pytest.raises(HTTPException) as exc_info:
        await aliases_router._read_upload(upload)

    assert exc_info.value.status_code == 413
    assert exc_info.value.detail["code"] == "FILE_TOO_LARGE"
    # Only one byte beyond the cap was consumed
    assert stream.tell() == cap + 1


async def test_upload_at_the_cap_is_accepted(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    cap = 1024 * 1024
    upload = UploadFile(file=io.BytesIO(b"y" * cap), filename="exact.bin")

    result = await aliases_router._read_upload(upload)
    assert result.filename == "exact.bin"
    assert len(result.data) == cap


async def test_dashboard_payloads(client, create_user, create_admin, auth_header_factory):
    anonymous = await client.get("/")
    assert anonymous.status_code == 200
    body = anonymous.json()
    assert body["user"] is None
    assert body["nonExistentRandom"]
    assert body["baseUrl"] == "http://short.test"

    user, password = await create_user()
    user_headers = await auth_header_factory(user.name, password)
    await _create_alias(
        client, user_headers,
        alias="mine", url="https://example.org",
    )
    as_user = (await client.get("/", headers=user_headers)).json()
    assert as_user["user"]["name"] == user.name
    assert [a["alias"] for a in as_user["aliases"]] == ["mine"]
    assert as_user["users"] == []
    assert as_user["randomPassword"] == ""

    admin, admin_password = await create_admin()
    admin_headers = await auth_header_factory(admin.name, admin_password)
    as_admin = (await client.get("/", headers=admin_headers)).json()
    assert {u["name"] for u in as_admin["users"]} == {user.name, admin.name}
    assert len(as_admin["randomPassword"]) == 8
    assert as_admin["randomPassword"].islower()
