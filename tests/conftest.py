"""
Shared fixtures for the console test-suite.
"""
import os
import tempfile

os.environ.setdefault("HMS_DATA_DIR", tempfile.mkdtemp(prefix="hms-console-tests-"))
os.environ.setdefault("HMS_CONSOLE_SECRET_KEY", "test-secret")

from collections.abc import Callable, Iterator
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from hms_console.api.deps import get_session
from hms_console.core.security import create_access_token
from hms_console.main import app
from hms_console.models.navigation import NavigationItem
from hms_console.models.session import SessionState, SessionUser


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_session() -> Iterator[Callable[[SessionState], None]]:
    """Replace the session provider with a fixed session for one test."""

    def apply(session: SessionState) -> None:
        app.dependency_overrides[get_session] = lambda: session

    yield apply
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def make_session() -> Callable[..., SessionState]:
    def build(role: Optional[str] = None, user_type: Optional[str] = None, user_id: str = "u-1") -> SessionState:
        return SessionState.for_user(
            SessionUser(user_id=user_id, name="Test Operator", role=role, user_type=user_type)
        )

    return build


@pytest.fixture
def token_for() -> Callable[..., str]:
    def issue(role: Optional[str] = None, user_type: Optional[str] = None, subject: str = "u-1") -> str:
        token, _ = create_access_token(subject=subject, role=role, user_type=user_type, name="Test Operator")
        return token

    return issue


@pytest.fixture
def sample_tree() -> list[NavigationItem]:
    return [
        NavigationItem(name="Dashboard", href="/dashboard"),
        NavigationItem(
            name="Housekeeping",
            children=[NavigationItem(name="Housekeeping Tasks", href="/housekeeping/tasks")],
        ),
        NavigationItem(
            name="Financial Management",
            children=[NavigationItem(name="Invoices", href="/financial/invoices")],
        ),
        NavigationItem(
            name="Hotel Management",
            children=[
                NavigationItem(name="Room Types", href="/hotels/room-types"),
                NavigationItem(name="Room Status Log", href="/hotels/room-status"),
            ],
        ),
        NavigationItem(
            name="Front Desk",
            children=[
                NavigationItem(name="Bookings List", href="/front-desk/bookings"),
                NavigationItem(name="Check-Out", href="/front-desk/check-out"),
            ],
        ),
        NavigationItem(name="Reports", href="/reports"),
    ]
