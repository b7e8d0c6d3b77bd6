from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hms_console.core.role_routing import DashboardVariant
from hms_console.models.navigation import NavigationItem


class PermissionSummary(BaseModel):
    full_access: bool = False
    allowed_sections: list[str] = Field(default_factory=list)
    allowed_items: list[str] = Field(default_factory=list)


class SessionAccessResponse(BaseModel):
    user_id: str
    role: Optional[str] = None
    landing_path: str
    dashboard: DashboardVariant
    permissions: PermissionSummary


class AccessCheckResponse(BaseModel):
    role: Optional[str] = None
    section: Optional[str] = None
    item: Optional[str] = None
    allowed: bool


class NavigationResponse(BaseModel):
    role: Optional[str] = None
    items: list[NavigationItem]


class AccessEventType(str, Enum):
    ACCESS_DENIED = "access_denied"
    LANDING_REDIRECT = "landing_redirect"


class AccessEvent(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: AccessEventType
    actor_id: str = "anonymous"
    actor_role: str = "unknown"
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
