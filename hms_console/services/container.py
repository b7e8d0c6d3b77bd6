from hms_console.core.config import settings
from hms_console.core.rbac import PermissionRegistry, default_registry
from hms_console.services.audit_service import AccessAuditLog
from hms_console.services.navigation_service import NavigationService
from hms_console.services.session_service import SessionProvider


permission_registry: PermissionRegistry = (
    PermissionRegistry.from_file(settings.permissions_path)
    if settings.permissions_path
    else default_registry
)
audit_log = AccessAuditLog()
session_provider = SessionProvider()
navigation_service = NavigationService(
    navigation_path=settings.navigation_path,
    registry=permission_registry,
)
