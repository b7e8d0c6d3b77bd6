from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from hms_console.api.deps import get_session, require_access, require_session
from hms_console.core.config import settings
from hms_console.core.rbac import resolve_user_role
from hms_console.core.role_routing import DashboardVariant, dashboard_for, redirect_path_for
from hms_console.models.session import SessionState
from hms_console.services.container import audit_log, navigation_service
from hms_console.services.navigation_service import ConsolePage, is_active, is_section_active


router = APIRouter(tags=["Console"])

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

DASHBOARD_TITLES: dict[DashboardVariant, str] = {
    DashboardVariant.DEFAULT: "Hotel Dashboard",
    DashboardVariant.RECEPTIONIST: "Front Desk Dashboard",
    DashboardVariant.HOUSEKEEPING: "Housekeeping Dashboard",
    DashboardVariant.MAINTENANCE: "Maintenance Dashboard",
    DashboardVariant.RESTAURANT: "Restaurant Dashboard",
    DashboardVariant.INVENTORY: "Inventory Dashboard",
    DashboardVariant.ACCOUNTANT: "Accountant Dashboard",
}

# Landing pages the root redirect sends staff roles to.
ROLE_DASHBOARD_PAGES: tuple[tuple[str, str, DashboardVariant], ...] = (
    ("/front-desk/dashboard", "Front Desk", DashboardVariant.RECEPTIONIST),
    ("/housekeeping/dashboard", "Housekeeping", DashboardVariant.HOUSEKEEPING),
    ("/maintenance/dashboard", "Maintenance", DashboardVariant.MAINTENANCE),
    ("/restaurant/dashboard", "Restaurant & Kitchen", DashboardVariant.RESTAURANT),
    ("/inventory/dashboard", "Stock Management", DashboardVariant.INVENTORY),
)


def display_role(role: Optional[str]) -> str:
    return (role or "unknown").replace("_", " ")


def render_console(
    request: Request,
    session: SessionState,
    template_name: str,
    context: Optional[dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    role = resolve_user_role(session.user)
    page_context = {
        "app_title": settings.app_name,
        "user": session.user,
        "role": role,
        "role_label": display_role(role),
        "navigation": navigation_service.navigation_for(role),
        "current_path": request.url.path,
        "is_active": lambda href: is_active(request.url.path, href, role),
        "is_section_active": lambda item: is_section_active(item, request.url.path, role),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, template_name, page_context, status_code=status_code)


def render_dashboard(request: Request, session: SessionState, variant: DashboardVariant) -> HTMLResponse:
    return render_console(
        request,
        session,
        "dashboard.html",
        {"variant": variant.value, "title": DASHBOARD_TITLES[variant]},
    )


@router.get("/", include_in_schema=False)
def landing_redirect(session: SessionState = Depends(require_session)) -> RedirectResponse:
    target = redirect_path_for(session.user)
    audit_log.record_landing(session.user, resolve_user_role(session.user), target)
    return RedirectResponse(url=target, status_code=303)


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
def login_entry(request: Request, session: SessionState = Depends(get_session)) -> Response:
    if session.is_authenticated and not session.loading:
        return RedirectResponse(url="/", status_code=303)
    return templates.TemplateResponse(
        request,
        "login.html",
        {"app_title": settings.app_name, "next_path": request.query_params.get("next", "/")},
    )


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    session: SessionState = Depends(require_access(required_section="Dashboard")),
) -> HTMLResponse:
    return render_dashboard(request, session, dashboard_for(session.user))


def _role_dashboard_endpoint(section: str, variant: DashboardVariant) -> Callable[..., HTMLResponse]:
    def endpoint(
        request: Request,
        session: SessionState = Depends(require_access(required_section=section)),
    ) -> HTMLResponse:
        return render_dashboard(request, session, variant)

    return endpoint


def _page_endpoint(page: ConsolePage) -> Callable[..., HTMLResponse]:
    if page.item:
        guard = require_access(required_item=page.item, parent_section=page.section)
    else:
        guard = require_access(required_section=page.section)

    def endpoint(request: Request, session: SessionState = Depends(guard)) -> HTMLResponse:
        return render_console(request, session, "page.html", {"page": page, "title": page.title})

    return endpoint


for _path, _section, _variant in ROLE_DASHBOARD_PAGES:
    router.add_api_route(
        _path,
        _role_dashboard_endpoint(_section, _variant),
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"dashboard_{_variant.value}",
    )

RESERVED_PATHS = frozenset({"/", "/login", "/dashboard"} | {path for path, _, _ in ROLE_DASHBOARD_PAGES})

for _page in navigation_service.pages():
    if _page.path in RESERVED_PATHS:
        continue
    router.add_api_route(
        _page.path,
        _page_endpoint(_page),
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"page:{_page.path}",
    )
