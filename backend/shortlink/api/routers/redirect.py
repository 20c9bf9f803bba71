# shortlink/api/routers/redirect.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from shortlink.api.deps import get_alias_authorization
from shortlink.services import AliasAuthorization, Redirect

router = APIRouter(tags=["redirect"])

# auto_error=False: a missing Authorization header is a failed check, not a 401 from FastAPI
basic = HTTPBasic(auto_error=False)

BASIC_CHALLENGE = {"WWW-Authenticate": 'Basic realm="restricted", charset="UTF-8"'}


@router.get("/{alias}")
async def open_alias(
    alias: str,
    credentials: HTTPBasicCredentials | None = Depends(basic),
    aa: AliasAuthorization = Depends(get_alias_authorization),
):
    """
    Follow an alias: permanent redirect to its URL, or serve its file.

    Password-protected aliases require HTTP Basic credentials; only the
    password is checked.
    """
    record = await aa.get(alias)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "ALIAS_NOT_FOUND", "message": "alias could not be found. Did you make a typo?"},
        )

    password = credentials.password if credentials else None
    if not aa.check_access(record, password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers=BASIC_CHALLENGE,
        )

    target = aa.target_of(record)
    if isinstance(target, Redirect):
        return RedirectResponse(target.url, status_code=status.HTTP_308_PERMANENT_REDIRECT)

    stored = await aa.get_file(target.file_id)
    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "FILE_NOT_FOUND", "message": "file not found"},
        )
    response = Response(content=stored.data)
    for name, value in stored.mime:
        response.headers.append(name, value)
    return response
