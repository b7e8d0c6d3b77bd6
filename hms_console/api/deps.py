from collections.abc import Callable
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from hms_console.core.exceptions import AccessDenied, LoginRequired, SessionPending
from hms_console.core.guards import GateDecision, authentication_gate, role_gate
from hms_console.core.rbac import Role, normalize_role, resolve_user_role
from hms_console.models.session import SessionState
from hms_console.services.container import audit_log, permission_registry, session_provider


def get_session(request: Request) -> SessionState:
    return session_provider.resolve(request)


def _raise_for_decision(
    decision: GateDecision,
    request: Request,
    session: SessionState,
    required_section: Optional[str] = None,
    required_item: Optional[str] = None,
) -> None:
    if decision is GateDecision.ALLOW:
        return
    if decision is GateDecision.LOADING:
        raise SessionPending()
    if decision is GateDecision.LOGIN:
        raise LoginRequired(next_path=request.url.path)

    role = resolve_user_role(session.user)
    audit_log.record_denial(session.user, role, request.url.path, required_section, required_item)
    raise AccessDenied(role, required_section=required_section, required_item=required_item)


def require_session(request: Request, session: SessionState = Depends(get_session)) -> SessionState:
    """Authentication gate for console pages that any signed-in operator may open."""
    _raise_for_decision(authentication_gate(session), request, session)
    return session


def require_access(
    required_section: Optional[str] = None,
    required_item: Optional[str] = None,
    parent_section: Optional[str] = None,
) -> Callable[..., SessionState]:
    """Role gate for console pages; denial renders in place instead of redirecting."""

    def dependency(request: Request, session: SessionState = Depends(get_session)) -> SessionState:
        decision = role_gate(
            session,
            required_section=required_section,
            required_item=required_item,
            parent_section=parent_section,
            registry=permission_registry,
        )
        _raise_for_decision(decision, request, session, required_section, required_item)
        return session

    return dependency


def get_api_session(session: SessionState = Depends(get_session)) -> SessionState:
    decision = authentication_gate(session)
    if decision is GateDecision.LOADING:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session is still resolving",
            headers={"Retry-After": "1"},
        )
    if decision is GateDecision.LOGIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_roles(allowed_roles: list[Role]) -> Callable[..., SessionState]:
    allowed = {normalize_role(role) for role in allowed_roles}

    def dependency(session: SessionState = Depends(get_api_session)) -> SessionState:
        role = resolve_user_role(session.user)
        if role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Access denied. Allowed roles: {', '.join(sorted(allowed))}. Your role: {role}",
            )
        return session

    return dependency
