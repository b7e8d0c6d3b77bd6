from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    VENDOR = "vendor"
    CLIENT = "client"
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    MAINTENANCE = "maintenance"
    RESTAURANT = "restaurant"
    INVENTORY = "inventory"
    STOREKEEPER = "storekeeper"
    ACCOUNTANT = "accountant"


FULL_PROPERTY_SECTIONS = (
    "Dashboard",
    "Hotel Management",
    "Booking Management",
    "Financial Management",
    "Guest Management",
    "Front Desk",
    "Housekeeping",
    "Maintenance",
    "Restaurant & Kitchen",
    "Stock Management",
    "Reports",
    "Settings",
)

# Regular accounts (admin, vendor, client) and HMS staff accounts share one table.
ROLE_PERMISSIONS: dict[str, dict[str, Any]] = {
    Role.ADMIN.value: {"full_access": True},
    Role.VENDOR.value: {"allowed_sections": FULL_PROPERTY_SECTIONS},
    Role.CLIENT.value: {
        "allowed_sections": ("Dashboard", "Booking Management", "Guest Management", "Settings"),
    },
    Role.MANAGER.value: {"allowed_sections": FULL_PROPERTY_SECTIONS},
    Role.RECEPTIONIST.value: {
        "allowed_sections": ("Dashboard", "Guest Management", "Front Desk"),
        "allowed_items": (
            "/hotels/room-availability",
            "/hotels/room-status",
            "/hotels/room-inventory",
        ),
    },
    Role.HOUSEKEEPING.value: {
        "allowed_sections": ("Dashboard", "Housekeeping"),
        "allowed_items": ("/hotels/room-status", "/hotels/room-inventory"),
    },
    Role.MAINTENANCE.value: {
        "allowed_sections": ("Dashboard", "Maintenance"),
        "allowed_items": ("/hotels/room-status",),
    },
    Role.RESTAURANT.value: {"allowed_sections": ("Dashboard", "Restaurant & Kitchen")},
    Role.INVENTORY.value: {"allowed_sections": ("Dashboard", "Stock Management")},
    Role.STOREKEEPER.value: {"allowed_sections": ("Dashboard", "Stock Management")},
    Role.ACCOUNTANT.value: {
        "allowed_sections": ("Dashboard", "Financial Management", "Reports"),
        "allowed_items": ("/bookings/booking-charges",),
    },
}


@dataclass(frozen=True)
class PermissionEntry:
    full_access: bool = False
    allowed_sections: frozenset[str] = field(default_factory=frozenset)
    allowed_items: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> "PermissionEntry":
        # camelCase keys are accepted so exported console configs load unchanged
        full_access = raw.get("full_access", raw.get("fullAccess", raw.get("canAccessAll", False)))
        sections = raw.get("allowed_sections", raw.get("allowedSections")) or ()
        items = raw.get("allowed_items", raw.get("allowedItems")) or ()
        return cls(
            full_access=bool(full_access),
            allowed_sections=frozenset(str(s) for s in sections),
            allowed_items=frozenset(str(i) for i in items),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "full_access": self.full_access,
            "allowed_sections": sorted(self.allowed_sections),
            "allowed_items": sorted(self.allowed_items),
        }


def normalize_role(role: Any) -> str | None:
    """Canonical form of a role value: trimmed, lower case, ``None`` if unusable."""
    if isinstance(role, Enum):
        role = role.value
    if not isinstance(role, str):
        return None
    normalized = role.strip().lower()
    return normalized or None


def resolve_user_role(user: Any) -> str | None:
    """Pick the role of a session user.

    HMS staff accounts carry ``role``; regular accounts only carry the legacy
    ``user_type`` (``userType`` on the wire). ``role`` wins when both are set.
    """
    if user is None:
        return None
    if isinstance(user, Mapping):
        candidates = (user.get("role"), user.get("user_type", user.get("userType")))
    else:
        candidates = (getattr(user, "role", None), getattr(user, "user_type", None))
    for candidate in candidates:
        normalized = normalize_role(candidate)
        if normalized:
            return normalized
    return None


class PermissionRegistry:
    """Read-only role -> PermissionEntry table, built once at startup."""

    def __init__(self, entries: Mapping[str, PermissionEntry]) -> None:
        normalized: dict[str, PermissionEntry] = {}
        for role, entry in entries.items():
            key = normalize_role(role)
            if key is None:
                raise ValueError(f"Invalid role key in permission table: {role!r}")
            normalized[key] = entry
        self._entries = MappingProxyType(normalized)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> "PermissionRegistry":
        return cls({role: PermissionEntry.from_config(cfg) for role, cfg in raw.items()})

    @classmethod
    def from_file(cls, path: Path) -> "PermissionRegistry":
        if not path.exists():
            raise RuntimeError(f"Permission table not found: {path}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        registry = cls.from_mapping(raw)
        logger.info("Loaded permission table for %d roles from %s", len(registry), path)
        return registry

    @property
    def entries(self) -> Mapping[str, PermissionEntry]:
        return self._entries

    def entry_for(self, role: Any) -> PermissionEntry | None:
        key = normalize_role(role)
        if key is None:
            return None
        return self._entries.get(key)

    def roles(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, role: object) -> bool:
        return self.entry_for(role) is not None


default_registry = PermissionRegistry.from_mapping(ROLE_PERMISSIONS)


def _resolve_registry(registry: PermissionRegistry | None) -> PermissionRegistry:
    return default_registry if registry is None else registry


def has_full_access(role: Any, registry: PermissionRegistry | None = None) -> bool:
    entry = _resolve_registry(registry).entry_for(role)
    return bool(entry and entry.full_access)


def can_access_section(
    role: Any,
    section_name: Any,
    registry: PermissionRegistry | None = None,
) -> bool:
    entry = _resolve_registry(registry).entry_for(role)
    if entry is None:
        return False
    if entry.full_access:
        return True
    return isinstance(section_name, str) and section_name in entry.allowed_sections


def can_access_item(
    role: Any,
    item_path: Any,
    section_name: Any,
    registry: PermissionRegistry | None = None,
) -> bool:
    registry = _resolve_registry(registry)
    entry = registry.entry_for(role)
    if entry is None:
        return False
    if entry.full_access:
        return True
    # a section grant covers every item nested under it
    if can_access_section(role, section_name, registry):
        return True
    return isinstance(item_path, str) and item_path in entry.allowed_items

