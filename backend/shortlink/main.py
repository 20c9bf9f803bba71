# shortlink/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shortlink.config import settings
from shortlink.core.db import init_db, close_db
from shortlink.core.errors import ShortlinkError
from shortlink.core.bootstrap import ensure_default_admin

from shortlink.api.deps import login_manager
from shortlink.api.routers import auth, admin, aliases, dashboard, redirect

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)


@app.exception_handler(ShortlinkError)
async def shortlink_error_handler(request: Request, exc: ShortlinkError):
    """
    Translate core errors into the {"detail": {"code", "message"}} shape.
    Server-side failures are logged and answered with a generic message.
    """
    message = exc.message
    if exc.status_code >= 500:
        logger.error("[api] %s %s failed: %r (cause: %r)",
                     request.method, request.url.path, exc, exc.__cause__)
        message = "server error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"code": exc.code, "message": message}},
    )


@app.on_event("startup")
async def on_startup():
    if not settings.base_url:
        logger.warning("[config] BASE_URL not set -> using %s for short links", settings.resolved_base_url())
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin(login_manager)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


@app.get("/healthz")
def healthz():
    return {"ok": True}

# REST under the reserved /__API__ prefix
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(aliases.router)
app.include_router(dashboard.router)

# Catch-all /{alias} must come last
app.include_router(redirect.router)
