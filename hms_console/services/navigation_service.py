from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from hms_console.core.rbac import (
    PermissionRegistry,
    Role,
    can_access_item,
    can_access_section,
    has_full_access,
    normalize_role,
)
from hms_console.models.navigation import NavigationItem

logger = logging.getLogger(__name__)

FRONT_DESK_SECTION = "Front Desk"
FRONT_DESK_PREFIX = "/front-desk/"
MANAGER_FRONT_DESK_PREFIX = "/manager/front-desk/"
MANAGER_FRONT_DESK_ROLES = frozenset({Role.MANAGER.value, Role.VENDOR.value})


@dataclass(frozen=True)
class ConsolePage:
    path: str
    title: str
    section: str
    item: Optional[str] = None


def _filter_children(
    children: Iterable[NavigationItem],
    role: Any,
    section_name: str,
    registry: Optional[PermissionRegistry],
) -> list[NavigationItem]:
    kept: list[NavigationItem] = []
    for child in children:
        if child.children is not None:
            nested = _filter_children(child.children, role, section_name, registry)
            if nested:
                kept.append(child.model_copy(update={"children": tuple(nested)}))
        elif can_access_item(role, child.href, section_name, registry):
            kept.append(child)
    return kept


def filter_navigation(
    tree: Sequence[NavigationItem],
    role: Any,
    registry: Optional[PermissionRegistry] = None,
) -> list[NavigationItem]:
    """Prune the navigation tree down to what ``role`` may see.

    Sections are matched by name, leaves by href. A section whose children are
    all filtered out disappears, and an empty ``children`` list counts as one.
    A section with no ``children`` at all stands alone. The input tree is never
    modified and the output keeps the input order.
    """
    if has_full_access(role, registry):
        return list(tree)

    filtered: list[NavigationItem] = []
    for item in tree:
        if not can_access_section(role, item.name, registry):
            continue
        if item.children is None:
            filtered.append(item)
            continue
        children = _filter_children(item.children, role, item.name, registry)
        if children:
            filtered.append(item.model_copy(update={"children": tuple(children)}))
    return filtered


def _manager_front_desk_href(href: Optional[str]) -> Optional[str]:
    if href and href.startswith(FRONT_DESK_PREFIX):
        return href.replace(FRONT_DESK_PREFIX, MANAGER_FRONT_DESK_PREFIX, 1)
    return href


def adjust_navigation_for_role(tree: Sequence[NavigationItem], role: Any) -> list[NavigationItem]:
    """Managers and vendors work the front desk from their own URL space."""
    if normalize_role(role) not in MANAGER_FRONT_DESK_ROLES:
        return list(tree)

    adjusted: list[NavigationItem] = []
    for item in tree:
        if item.name == FRONT_DESK_SECTION and item.children:
            children = tuple(
                child.model_copy(update={"href": _manager_front_desk_href(child.href)})
                for child in item.children
            )
            item = item.model_copy(update={"children": children})
        adjusted.append(item)
    return adjusted


def is_active(current_path: str, href: Optional[str], role: Any = None) -> bool:
    if not href:
        return False
    if current_path == href or current_path.startswith(href + "/"):
        return True
    if normalize_role(role) in MANAGER_FRONT_DESK_ROLES and href.startswith(FRONT_DESK_PREFIX):
        manager_href = _manager_front_desk_href(href)
        return current_path == manager_href or current_path.startswith(manager_href + "/")
    return False


def is_section_active(item: NavigationItem, current_path: str, role: Any = None) -> bool:
    return any(is_active(current_path, leaf.href, role) for leaf in item.leaves())


class NavigationService:
    def __init__(self, navigation_path: Path, registry: PermissionRegistry) -> None:
        self.navigation_path = navigation_path
        self.registry = registry
        self._tree = self._load_tree()
        self._pages = self._build_pages()

    def _load_tree(self) -> tuple[NavigationItem, ...]:
        if not self.navigation_path.exists():
            raise RuntimeError(f"Navigation config not found: {self.navigation_path}")
        raw = json.loads(self.navigation_path.read_text(encoding="utf-8"))
        tree = tuple(NavigationItem.model_validate(row) for row in raw)
        logger.info("Loaded %d navigation sections from %s", len(tree), self.navigation_path)
        return tree

    def _build_pages(self) -> dict[str, ConsolePage]:
        pages: dict[str, ConsolePage] = {}
        for item in self._tree:
            if not item.has_children:
                if item.href:
                    pages[item.href] = ConsolePage(path=item.href, title=item.name, section=item.name)
                continue
            for leaf in item.leaves():
                if not leaf.href:
                    continue
                pages[leaf.href] = ConsolePage(
                    path=leaf.href, title=leaf.name, section=item.name, item=leaf.href
                )
                if item.name == FRONT_DESK_SECTION:
                    manager_path = _manager_front_desk_href(leaf.href)
                    pages[manager_path] = ConsolePage(
                        path=manager_path, title=leaf.name, section=item.name, item=leaf.href
                    )
        return pages

    @property
    def tree(self) -> tuple[NavigationItem, ...]:
        return self._tree

    def sections(self) -> list[str]:
        return [item.name for item in self._tree]

    def navigation_for(self, role: Any) -> list[NavigationItem]:
        return adjust_navigation_for_role(filter_navigation(self._tree, role, self.registry), role)

    def pages(self) -> list[ConsolePage]:
        return list(self._pages.values())

    def page_for(self, path: str) -> Optional[ConsolePage]:
        return self._pages.get(path)
