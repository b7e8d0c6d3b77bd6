"""Gate decisions behind the console's protected routes.

Both gates are pure functions of the resolved session so they can be checked
without a request; ``hms_console.api.deps`` turns non-allow decisions into
responses.
"""
from enum import Enum
from typing import Optional

from hms_console.core.rbac import (
    PermissionRegistry,
    can_access_item,
    can_access_section,
    resolve_user_role,
)
from hms_console.models.session import SessionState


class GateDecision(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    DENY = "deny"
    ALLOW = "allow"


def authentication_gate(session: SessionState) -> GateDecision:
    if session.loading:
        return GateDecision.LOADING
    if not session.is_authenticated:
        return GateDecision.LOGIN
    return GateDecision.ALLOW


def role_gate(
    session: SessionState,
    required_section: Optional[str] = None,
    required_item: Optional[str] = None,
    parent_section: Optional[str] = None,
    registry: Optional[PermissionRegistry] = None,
) -> GateDecision:
    """Decide whether the session may open a guarded page.

    ``parent_section`` names the section a leaf page sits under when the page is
    guarded by its item alone: a grant on that section still covers the item,
    but a missing section grant does not deny the page outright.
    """
    # a role that is still resolving must never reach the evaluator
    decision = authentication_gate(session)
    if decision is not GateDecision.ALLOW:
        return decision

    if not required_section and not required_item:
        return GateDecision.ALLOW

    role = resolve_user_role(session.user)

    if required_section:
        if not can_access_section(role, required_section, registry):
            return GateDecision.DENY
        return GateDecision.ALLOW

    if not can_access_item(role, required_item, parent_section, registry):
        return GateDecision.DENY
    return GateDecision.ALLOW
