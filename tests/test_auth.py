from __future__ import annotations

import pytest

from fakes import FakeClock
from quizmaster.api_client import APIError
from quizmaster.auth import (
    AuthSession,
    describe_auth_error,
    validate_sign_in,
    validate_sign_up,
)


class FakeAuthClient:
    def __init__(self):
        self.access_token = None
        self.sign_in_result = None
        self.sign_up_result = None
        self.refresh_result = None
        self.user_row = {"id": "user-1", "email": "student@example.com"}
        self.error: APIError | None = None
        self.signed_out: list[str] = []
        self.refreshed: list[str] = []

    def set_auth(self, token):
        self.access_token = token

    def _maybe_fail(self):
        if self.error:
            raise self.error

    def sign_in_with_password(self, email, password):
        self._maybe_fail()
        return self.sign_in_result

    def sign_up(self, email, password):
        self._maybe_fail()
        return self.sign_up_result

    def refresh_session(self, refresh_token):
        self._maybe_fail()
        self.refreshed.append(refresh_token)
        return self.refresh_result

    def get_user(self, token):
        self._maybe_fail()
        return self.user_row

    def sign_out(self, token):
        self.signed_out.append(token)
        self._maybe_fail()


def session_payload(token="access-1", expires_in=3600):
    return {
        "access_token": token,
        "refresh_token": "refresh-1",
        "expires_in": expires_in,
        "user": {"id": "user-1", "email": "student@example.com"},
    }


@pytest.fixture
def client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def store() -> dict:
    return {}


@pytest.fixture
def auth(client, store, clock) -> AuthSession:
    return AuthSession(client, store, clock=clock)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Invalid login credentials", "Invalid email or password. Please check your credentials and try again."),
        ("Email not confirmed", "Please check your email and click the confirmation link before signing in."),
        ("Too many requests", "Too many login attempts. Please wait a few minutes before trying again."),
        ("User already registered", "User already registered"),
        ("", "An unexpected error occurred. Please try again."),
        (None, "An unexpected error occurred. Please try again."),
    ],
)
def test_describe_auth_error(raw, expected) -> None:
    assert describe_auth_error(raw) == expected


def test_form_validation_messages() -> None:
    assert validate_sign_in("  ", "pw") == "Please enter your email address"
    assert validate_sign_in("a@b.c", " ") == "Please enter your password"
    assert validate_sign_in("a@b.c", "pw") is None
    assert validate_sign_up("a@b.c", "secret1", "secret2") == "Passwords do not match."
    assert validate_sign_up("a@b.c", "abc", "abc") == "Password must be at least 6 characters."
    assert validate_sign_up("a@b.c", "secret", "secret") is None


def test_starts_loading_until_initialized(auth) -> None:
    assert auth.loading is True
    assert auth.initialize() is None
    assert auth.loading is False
    assert auth.user is None


def test_sign_in_success_persists_tokens_and_notifies(auth, client, store, clock) -> None:
    client.sign_in_result = session_payload()
    seen = []
    auth.subscribe(seen.append)

    result = auth.sign_in("student@example.com", "secret")

    assert result.ok
    assert result.user.email == "student@example.com"
    assert auth.user == result.user
    assert client.access_token == "access-1"
    assert store["access_token"] == "access-1"
    assert store["refresh_token"] == "refresh-1"
    assert store["expires_at"] == clock.now + 3600
    assert seen == [result.user]


def test_sign_in_failure_is_returned_not_raised(auth, client, store) -> None:
    client.error = APIError("Invalid login credentials", 400)
    seen = []
    auth.subscribe(seen.append)

    result = auth.sign_in("student@example.com", "wrong")

    assert not result.ok
    assert result.error.startswith("Invalid email or password")
    assert auth.user is None
    assert store == {}
    assert seen == []


def test_malformed_session_is_reported_as_error(auth, client) -> None:
    client.sign_in_result = {"refresh_token": "r"}

    result = auth.sign_in("student@example.com", "secret")

    assert result.error.startswith("Malformed session response")
    assert auth.user is None


def test_sign_up_requiring_confirmation_keeps_user_signed_out(auth, client, store) -> None:
    client.sign_up_result = {"id": "user-2", "email": "new@example.com"}

    result = auth.sign_up("new@example.com", "secret")

    assert result.ok
    assert result.needs_confirmation is True
    assert auth.user is None
    assert store == {}


def test_sign_up_with_session_signs_in(auth, client) -> None:
    client.sign_up_result = session_payload(token="access-new")

    result = auth.sign_up("student@example.com", "secret")

    assert result.user.id == "user-1"
    assert client.access_token == "access-new"


def test_sign_out_clears_everything(auth, client, store) -> None:
    client.sign_in_result = session_payload()
    auth.sign_in("student@example.com", "secret")
    seen = []
    unsubscribe = auth.subscribe(seen.append)

    result = auth.sign_out()

    assert result.ok
    assert client.signed_out == ["access-1"]
    assert auth.user is None
    assert client.access_token is None
    assert store == {}
    assert seen == [None]

    unsubscribe()
    auth.sign_out()
    assert seen == [None]


def test_sign_out_still_clears_when_remote_call_fails(auth, client, store) -> None:
    client.sign_in_result = session_payload()
    auth.sign_in("student@example.com", "secret")
    client.error = APIError("network down", 0)

    result = auth.sign_out()

    assert result.error == "network down"
    assert auth.user is None
    assert store == {}


def test_initialize_restores_valid_stored_session(client, clock) -> None:
    store = {"access_token": "stored", "refresh_token": "r", "expires_at": clock.now + 600}
    auth = AuthSession(client, store, clock=clock)

    user = auth.initialize()

    assert user.id == "user-1"
    assert client.access_token == "stored"
    assert client.refreshed == []
    assert auth.loading is False


def test_initialize_refreshes_expired_session(client) -> None:
    clock = FakeClock(5_000.0)
    store = {"access_token": "stale", "refresh_token": "r-old", "expires_at": 5_030.0}
    client.refresh_result = session_payload(token="fresh")
    auth = AuthSession(client, store, clock=clock)

    user = auth.initialize()

    assert user is not None
    assert client.refreshed == ["r-old"]
    assert store["access_token"] == "fresh"


def test_initialize_drops_rejected_session(client, clock) -> None:
    store = {"access_token": "revoked", "refresh_token": "r", "expires_at": clock.now + 600}
    client.error = APIError("invalid JWT", 401)
    auth = AuthSession(client, store, clock=clock)

    assert auth.initialize() is None
    assert store == {}
    assert client.access_token is None
    assert auth.loading is False


def test_ensure_fresh_refreshes_expired_token_mid_session(auth, client, store, clock) -> None:
    client.sign_in_result = session_payload()
    auth.sign_in("student@example.com", "secret")
    client.refresh_result = session_payload(token="access-2")

    clock.advance(4000)
    user = auth.ensure_fresh()

    assert user is not None
    assert client.refreshed == ["refresh-1"]
    assert client.access_token == "access-2"
    assert store["access_token"] == "access-2"
    assert store["expires_at"] == clock.now + 3600


def test_ensure_fresh_leaves_valid_token_alone(auth, client, clock) -> None:
    client.sign_in_result = session_payload()
    auth.sign_in("student@example.com", "secret")

    clock.advance(3000)
    auth.ensure_fresh()

    assert client.refreshed == []
    assert client.access_token == "access-1"


def test_ensure_fresh_signs_out_when_refresh_rejected(auth, client, store, clock) -> None:
    client.sign_in_result = session_payload()
    auth.sign_in("student@example.com", "secret")
    seen = []
    auth.subscribe(seen.append)
    client.error = APIError("Invalid Refresh Token", 400)

    clock.advance(4000)

    assert auth.ensure_fresh() is None
    assert store == {}
    assert client.access_token is None
    assert seen == [None]


def test_ensure_fresh_without_user_does_nothing(auth, client) -> None:
    assert auth.ensure_fresh() is None
    assert client.refreshed == []
