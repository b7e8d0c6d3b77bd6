import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from hms_console.api.routers.access import router as access_router
from hms_console.api.routers.console import display_role, router as console_router, templates
from hms_console.core.config import settings
from hms_console.core.exceptions import AccessDenied, LoginRequired, SessionPending
from hms_console.core.logging import configure_logging
from hms_console.services.container import audit_log

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    removed = audit_log.prune(settings.audit_retention_days)
    logger.info("Console started; %d expired audit events pruned", removed)
    yield


app = FastAPI(
    title="Hotel Operations Console",
    version="1.0.0",
    description=(
        "Multi-role hotel operations console shell: role-gated pages, role-driven "
        "landing routes and per-role navigation over the hotel management API."
    ),
    lifespan=lifespan,
)


@app.exception_handler(SessionPending)
async def session_pending_handler(request: Request, exc: SessionPending) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "loading.html",
        {"app_title": settings.app_name},
        headers={"Refresh": str(settings.loading_refresh_seconds)},
    )


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    url = settings.login_url
    if exc.next_path and exc.next_path != "/":
        url = f"{url}?{urlencode({'next': exc.next_path})}"
    return RedirectResponse(url=url, status_code=303)


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "access_denied.html",
        {
            "app_title": settings.app_name,
            "scope": exc.scope,
            "role_label": display_role(exc.role),
            "home_path": "/",
        },
        status_code=403,
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "service": settings.app_name}


app.include_router(console_router)
app.include_router(access_router)
