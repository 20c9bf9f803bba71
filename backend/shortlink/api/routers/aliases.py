# shortlink/api/routers/aliases.py
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from shortlink.api.deps import get_alias_authorization, get_current_user, read_name_body
from shortlink.config import settings
from shortlink.models.user import User
from shortlink.schemas.alias import alias_out
from shortlink.services import AliasAuthorization, FileUpload

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/__API__", tags=["aliases"])


async def _read_upload(file: UploadFile | None) -> FileUpload | None:
    # Browsers send an empty, unnamed part when no file was chosen
    if file is None or not file.filename:
        return None
    limit = settings.max_upload_mb * 1024 * 1024
    # One byte past the cap is enough to tell an oversized upload apart
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={"code": "FILE_TOO_LARGE", "message": f"upload exceeds {settings.max_upload_mb} MB"},
        )
    return FileUpload(
        filename=file.filename,
        data=data,
        headers=list(file.headers.items()),
    )


@router.post("/createalias")
async def create_alias(
    url: str = Form(""),
    alias: str = Form(""),
    password: str = Form(""),
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    """
    Create an alias for the logged-in user.

    Multipart form fields:
        - alias: name ([A-Za-z0-9_-], not "__API__", unused)
        - url: absolute redirect target (optional when a file is attached)
        - password: optional HTTP Basic password for the alias
        - file: optional upload; when present the alias serves the file
    """
    upload = await _read_upload(file)
    created = await aa.create(user, alias, url=url, password=password or None, upload=upload)
    return {"success": True, "data": alias_out(created, settings.resolved_base_url()).model_dump()}


@router.post("/rmalias")
async def delete_alias(
    user: User = Depends(get_current_user),
    name: str = Depends(read_name_body),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    """
    Delete an alias (owner or admin). Body is the bare alias name.

    A file attached to the alias is not deleted and is reported back.
    """
    obligation = await aa.delete(user, name)
    if obligation.orphaned_files:
        logger.info("[alias] %s deleted, orphaned files: %s", name, obligation.orphaned_files)
    return {"success": True, "data": {"orphanedFiles": obligation.orphaned_files}}


@router.get("/aliases")
async def my_aliases(
    user: User = Depends(get_current_user),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    rows = await aa.list_aliases_for_owner(user.name)
    base_url = settings.resolved_base_url()
    return {"success": True, "data": {"items": [alias_out(a, base_url).model_dump() for a in rows]}}
