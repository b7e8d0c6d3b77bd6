from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from hms_console.api.deps import get_api_session, require_roles
from hms_console.core.rbac import Role, can_access_item, can_access_section, resolve_user_role
from hms_console.core.role_routing import destination_for
from hms_console.models.access import (
    AccessCheckResponse,
    AccessEvent,
    AccessEventType,
    NavigationResponse,
    PermissionSummary,
    SessionAccessResponse,
)
from hms_console.models.session import SessionState
from hms_console.services.container import audit_log, navigation_service, permission_registry


router = APIRouter(prefix="/access", tags=["Access Control"])


@router.get("/session", response_model=SessionAccessResponse)
def read_session_access(session: SessionState = Depends(get_api_session)) -> SessionAccessResponse:
    role = resolve_user_role(session.user)
    destination = destination_for(session.user)
    entry = permission_registry.entry_for(role)
    permissions = PermissionSummary(**entry.as_dict()) if entry else PermissionSummary()
    return SessionAccessResponse(
        user_id=session.user.user_id,
        role=role,
        landing_path=destination.redirect_path,
        dashboard=destination.dashboard,
        permissions=permissions,
    )


@router.get("/navigation", response_model=NavigationResponse)
def read_navigation(session: SessionState = Depends(get_api_session)) -> NavigationResponse:
    role = resolve_user_role(session.user)
    return NavigationResponse(role=role, items=navigation_service.navigation_for(role))


@router.get("/check", response_model=AccessCheckResponse)
def check_access(
    section: Optional[str] = None,
    item: Optional[str] = None,
    session: SessionState = Depends(get_api_session),
) -> AccessCheckResponse:
    if not section and not item:
        raise HTTPException(status_code=400, detail="Provide a section, an item, or both")

    role = resolve_user_role(session.user)
    if item:
        allowed = can_access_item(role, item, section, permission_registry)
    else:
        allowed = can_access_section(role, section, permission_registry)
    return AccessCheckResponse(role=role, section=section, item=item, allowed=allowed)


@router.get("/audit", response_model=list[AccessEvent])
def read_access_events(
    limit: int = Query(default=100, ge=1, le=1000),
    event_type: Optional[AccessEventType] = None,
    session: SessionState = Depends(require_roles([Role.ADMIN, Role.MANAGER])),
) -> list[AccessEvent]:
    _ = session
    return audit_log.recent(limit=limit, event_type=event_type)
