from typing import Optional


class ConsoleGateError(Exception):
    """Base for guard outcomes that replace the requested page."""


class SessionPending(ConsoleGateError):
    pass


class LoginRequired(ConsoleGateError):
    def __init__(self, next_path: Optional[str] = None) -> None:
        super().__init__("Authentication required")
        self.next_path = next_path


class AccessDenied(ConsoleGateError):
    def __init__(
        self,
        role: Optional[str],
        required_section: Optional[str] = None,
        required_item: Optional[str] = None,
    ) -> None:
        target = required_item or required_section or "this page"
        super().__init__(f"Role {role!r} may not access {target}")
        self.role = role
        self.required_section = required_section
        self.required_item = required_item

    @property
    def scope(self) -> str:
        return "section" if self.required_section else "page"
