from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from hms_console.core.rbac import Role, resolve_user_role


class DashboardVariant(str, Enum):
    DEFAULT = "default"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    MAINTENANCE = "maintenance"
    RESTAURANT = "restaurant"
    INVENTORY = "inventory"
    ACCOUNTANT = "accountant"


DEFAULT_LANDING_PATH = "/dashboard"


@dataclass(frozen=True)
class RoleDestination:
    redirect_path: str
    dashboard: DashboardVariant


DEFAULT_DESTINATION = RoleDestination(DEFAULT_LANDING_PATH, DashboardVariant.DEFAULT)

# Roles missing here (admin, manager, vendor, client, unknown) land on the default destination.
ROLE_DESTINATIONS = MappingProxyType(
    {
        Role.RECEPTIONIST.value: RoleDestination("/front-desk/dashboard", DashboardVariant.RECEPTIONIST),
        Role.HOUSEKEEPING.value: RoleDestination("/housekeeping/dashboard", DashboardVariant.HOUSEKEEPING),
        Role.MAINTENANCE.value: RoleDestination("/maintenance/dashboard", DashboardVariant.MAINTENANCE),
        Role.RESTAURANT.value: RoleDestination("/restaurant/dashboard", DashboardVariant.RESTAURANT),
        Role.INVENTORY.value: RoleDestination("/inventory/dashboard", DashboardVariant.INVENTORY),
        Role.STOREKEEPER.value: RoleDestination("/inventory/dashboard", DashboardVariant.INVENTORY),
        Role.ACCOUNTANT.value: RoleDestination(DEFAULT_LANDING_PATH, DashboardVariant.ACCOUNTANT),
    }
)


def destination_for(user: Any) -> RoleDestination:
    role = resolve_user_role(user)
    if role is None:
        return DEFAULT_DESTINATION
    return ROLE_DESTINATIONS.get(role, DEFAULT_DESTINATION)


def redirect_path_for(user: Any) -> str:
    """Landing URL for the application root."""
    return destination_for(user).redirect_path


def dashboard_for(user: Any) -> DashboardVariant:
    """Dashboard view rendered in place at the generic dashboard route."""
    return destination_for(user).dashboard
