from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from threading import RLock
from typing import Any, Optional

from pydantic import ValidationError

from hms_console.core.config import settings
from hms_console.models.access import AccessEvent, AccessEventType
from hms_console.models.session import SessionUser

logger = logging.getLogger(__name__)


class AccessAuditLog:
    """Denied page requests and landing redirects, one JSON event per line.

    Events older than ``retention_days`` are removed by :meth:`prune`, which the
    application runs once at startup.
    """

    def __init__(self, event_path: Path | None = None, retention_days: int | None = None) -> None:
        self.event_path = event_path or settings.audit_log_path
        self.retention_days = settings.audit_retention_days if retention_days is None else retention_days
        self.event_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock = RLock()

    def record_denial(
        self,
        user: Optional[SessionUser],
        role: Optional[str],
        path: str,
        required_section: Optional[str] = None,
        required_item: Optional[str] = None,
    ) -> AccessEvent:
        return self._append(
            AccessEventType.ACCESS_DENIED,
            user,
            role,
            {"path": path, "required_section": required_section, "required_item": required_item},
        )

    def record_landing(self, user: Optional[SessionUser], role: Optional[str], target: str) -> AccessEvent:
        return self._append(AccessEventType.LANDING_REDIRECT, user, role, {"target": target})

    def _append(
        self,
        event_type: AccessEventType,
        user: Optional[SessionUser],
        role: Optional[str],
        details: dict[str, Any],
    ) -> AccessEvent:
        event = AccessEvent(
            event_type=event_type,
            actor_id=user.user_id if user is not None else "anonymous",
            actor_role=role or "unknown",
            details=details,
        )
        with self.lock:
            with self.event_path.open("a", encoding="utf-8") as f:
                f.write(event.model_dump_json() + "\n")
        return event

    def _read_lines(self) -> list[str]:
        if not self.event_path.exists():
            return []
        with self.lock:
            return [raw for raw in self.event_path.read_text(encoding="utf-8").splitlines() if raw.strip()]

    def events(self) -> list[AccessEvent]:
        parsed: list[AccessEvent] = []
        for raw in self._read_lines():
            try:
                parsed.append(AccessEvent.model_validate_json(raw))
            except ValidationError:
                logger.warning("Skipping unreadable audit line in %s", self.event_path)
        return parsed

    def recent(self, limit: int = 100, event_type: Optional[AccessEventType] = None) -> list[AccessEvent]:
        selected = self.events()
        if event_type is not None:
            selected = [event for event in selected if event.event_type == event_type]
        return selected[-limit:]

    def prune(self, retention_days: int | None = None) -> int:
        """Drop events older than the retention window; returns how many went."""
        days = self.retention_days if retention_days is None else retention_days
        if days < 1:
            return 0

        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        with self.lock:
            kept: list[str] = []
            removed = 0
            for raw in self._read_lines():
                try:
                    event = AccessEvent.model_validate_json(raw)
                except ValidationError:
                    kept.append(raw)
                    continue
                if event.timestamp < cutoff:
                    removed += 1
                else:
                    kept.append(raw)

            if removed:
                self.event_path.write_text("".join(line + "\n" for line in kept), encoding="utf-8")

        if removed:
            logger.info("Pruned %d audit events older than %d days", removed, days)
        return removed
