from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NavigationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    href: Optional[str] = None
    icon: Optional[str] = None
    children: Optional[tuple[NavigationItem, ...]] = None

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def leaves(self) -> list[NavigationItem]:
        if not self.children:
            return [self]
        return [leaf for child in self.children for leaf in child.leaves()]


NavigationItem.model_rebuild()
