"""
Session provider tests: token extraction and claim mapping.
"""
from datetime import timedelta

import pytest
from starlette.requests import Request

from hms_console.core.security import create_access_token, decode_access_token
from hms_console.services.session_service import SessionProvider


def make_request(headers=None, cookies=None, path="/dashboard") -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    if cookies:
        raw.append((b"cookie", "; ".join(f"{k}={v}" for k, v in cookies.items()).encode()))
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": b"",
            "headers": raw,
            "scheme": "http",
            "server": ("testserver", 80),
        }
    )


@pytest.fixture
def provider() -> SessionProvider:
    return SessionProvider(cookie_name="access_token")


class TestTokens:
    def test_round_trip_claims(self):
        token, _ = create_access_token(subject="u-7", role="maintenance", user_type="staff")
        payload = decode_access_token(token)
        assert payload["sub"] == "u-7"
        assert payload["role"] == "maintenance"
        assert payload["userType"] == "staff"

    def test_expired_token_rejected(self):
        token, _ = create_access_token(subject="u-7", role="admin", expires_delta=timedelta(minutes=-5))
        with pytest.raises(ValueError):
            decode_access_token(token)


class TestSessionProvider:
    def test_no_token_is_anonymous(self, provider):
        session = provider.resolve(make_request())
        assert not session.is_authenticated
        assert not session.loading
        assert session.user is None

    def test_bearer_header(self, provider, token_for):
        session = provider.resolve(make_request(headers={"Authorization": f"Bearer {token_for('accountant')}"}))
        assert session.is_authenticated
        assert session.user.role == "accountant"
        assert session.user.name == "Test Operator"

    def test_cookie(self, provider, token_for):
        session = provider.resolve(make_request(cookies={"access_token": token_for(user_type="vendor")}))
        assert session.is_authenticated
        assert session.user.role is None
        assert session.user.user_type == "vendor"

    def test_header_wins_over_cookie(self, provider, token_for):
        request = make_request(
            headers={"Authorization": f"Bearer {token_for('admin')}"},
            cookies={"access_token": token_for("client")},
        )
        assert provider.resolve(request).user.role == "admin"

    def test_invalid_token_is_anonymous(self, provider):
        session = provider.resolve(make_request(headers={"Authorization": "Bearer not-a-token"}))
        assert not session.is_authenticated

    def test_token_without_subject_is_anonymous(self, provider):
        assert provider.user_from_claims({"role": "admin"}) is None

    def test_non_bearer_scheme_ignored(self, provider, token_for):
        request = make_request(headers={"Authorization": f"Basic {token_for('admin')}"})
        assert not provider.resolve(request).is_authenticated
